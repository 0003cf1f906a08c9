# src/styleguide/db/base.py
from __future__ import annotations

import time

import sqlalchemy as sa
from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# -----------------------------------------------------------------------------
# Declarative Base with naming conventions
# -----------------------------------------------------------------------------
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Gap between two sibling "sorting" values when records are appended.
SORTING_INTERVAL = 256


class Base(DeclarativeBase):
    """Shared declarative base; TCA tables are added to the same metadata."""
    metadata = MetaData(naming_convention=NAMING_CONVENTION)


def unix_now() -> int:
    return int(time.time())


# -----------------------------------------------------------------------------
# Common mixins: integer uid / pid, timestamps as unix seconds
# -----------------------------------------------------------------------------
class RecordMixin:
    uid: Mapped[int] = mapped_column(sa.Integer, primary_key=True, autoincrement=True)
    pid: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0, index=True)


class TimestampMixin:
    tstamp: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=unix_now, onupdate=unix_now)
    crdate: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=unix_now)


__all__ = ["Base", "RecordMixin", "TimestampMixin", "SORTING_INTERVAL", "NAMING_CONVENTION", "unix_now"]
