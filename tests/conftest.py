# tests/conftest.py
from __future__ import annotations

import logging
import os
import sys

import pytest

from styleguide.core.config import Settings
from styleguide.db.session import create_db_engine, get_sessionmaker, init_db
from styleguide.generator import Generator, RecordFinder, build_generator
from styleguide.services.data_handler import SqlDataHandler
from styleguide.services.passwords import SaltedPasswordHasher
from styleguide.services.signals import UpdateSignals
from styleguide.services.storage import LocalStorage
from styleguide.tca import SchemaRegistry


# =========================
# Logging -> stdout
# =========================
@pytest.fixture(scope="session", autouse=True)
def _tests_log_to_stdout():
    """
    Send styleguide logs to stdout so they show up under pytest -s.
    Avoid duplicates if the handler is already present.
    """
    logger = logging.getLogger("styleguide")
    if not any(getattr(h, "stream", None) is sys.stdout for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(os.getenv("TEST_LOG_LEVEL", "INFO").upper())


# =========================
# Schema / database
# =========================
@pytest.fixture(scope="session")
def registry() -> SchemaRegistry:
    return SchemaRegistry.default()


@pytest.fixture
def metadata(registry):
    return registry.build_metadata()


@pytest.fixture
def engine(metadata):
    eng = create_db_engine("sqlite:///:memory:", echo=False)
    init_db(eng, metadata)
    yield eng
    eng.dispose()


@pytest.fixture
def session(engine):
    with get_sessionmaker(engine)() as s:
        yield s


@pytest.fixture
def data_handler(session, metadata, registry) -> SqlDataHandler:
    return SqlDataHandler(session, metadata, registry=registry)


@pytest.fixture
def record_finder(session, metadata) -> RecordFinder:
    return RecordFinder(session, metadata)


# =========================
# Collaborators
# =========================
@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "fileadmin")


@pytest.fixture
def password_hasher() -> SaltedPasswordHasher:
    # one iteration keeps the suite fast
    return SaltedPasswordHasher(iterations=1)


@pytest.fixture
def signals() -> UpdateSignals:
    return UpdateSignals()


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def generator(session, metadata, registry, settings, storage, password_hasher) -> Generator:
    return build_generator(
        session,
        metadata,
        registry,
        cfg=settings,
        storage=storage,
        password_hasher=password_hasher,
    )
