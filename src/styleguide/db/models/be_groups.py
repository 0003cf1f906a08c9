from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, RecordMixin, TimestampMixin


class BackendGroup(RecordMixin, TimestampMixin, Base):
    __tablename__ = "be_groups"

    title: Mapped[str] = mapped_column(sa.String(50), nullable=False, default="")
    hidden: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    tx_styleguide_isdemorecord: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0, index=True)
