# Don't import session on package import; expose lazily instead
from .base import Base, SORTING_INTERVAL  # safe to import
from . import models  # noqa: F401  registers host tables on Base.metadata


def get_sessionmaker(engine):
    from .session import get_sessionmaker as _gsm
    return _gsm(engine)
