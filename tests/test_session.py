# tests/test_session.py
from __future__ import annotations

import importlib

import pytest
import sqlalchemy as sa
from sqlalchemy.orm import Session, sessionmaker

from styleguide.app_logger import get_logger
from styleguide.db.models import Page
from styleguide.db.session import session_scope


class CountingSession(Session):
    closed = 0
    rolled_back = 0

    def close(self):
        type(self).closed += 1
        super().close()

    def rollback(self):
        type(self).rolled_back += 1
        super().rollback()


@pytest.fixture
def factory(engine):
    CountingSession.closed = 0
    CountingSession.rolled_back = 0
    return sessionmaker(bind=engine, class_=CountingSession)


def test_session_scope_closes_once(factory):
    with session_scope(factory) as s:
        s.add(Page(pid=0, title="kept"))
        s.commit()
    assert CountingSession.closed == 1
    assert CountingSession.rolled_back == 0


def test_session_scope_rolls_back_and_reraises(factory, engine):
    with pytest.raises(RuntimeError):
        with session_scope(factory) as s:
            s.add(Page(pid=0, title="lost"))
            s.flush()
            raise RuntimeError("boom")
    assert CountingSession.rolled_back == 1
    assert CountingSession.closed == 1
    with Session(engine) as check:
        assert check.scalar(sa.select(sa.func.count()).select_from(Page)) == 0


@pytest.mark.parametrize(
    "module",
    [
        "styleguide.generator.generator",
        "styleguide.generator.page_tree",
        "styleguide.services.signals",
    ],
)
def test_module_loggers_are_named_after_their_module(module):
    logger = importlib.import_module(module).logger
    assert logger is get_logger(module)
    assert logger.name == module
