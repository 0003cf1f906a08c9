import logging, os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DEFAULT_LEVEL = os.getenv("STYLEGUIDE_LOG_LEVEL", "INFO").upper()

def setup_logging(level: str | None = None):
    level_name = (level or _DEFAULT_LEVEL).upper()
    resolved = getattr(logging, level_name, logging.INFO)

    # Package logger
    logger = logging.getLogger("styleguide")
    logger.setLevel(resolved)

    # Avoid duplicate console handlers
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(ch)
    for h in logger.handlers:
        h.setLevel(resolved)

    logger.propagate = False
    return logger

def get_logger(name: str | None = None) -> logging.Logger:
    base = logging.getLogger("styleguide")
    if not name or name == "styleguide":
        return base
    if name.startswith("styleguide."):
        name = name[len("styleguide."):]
    return base.getChild(name)

logger = setup_logging()
