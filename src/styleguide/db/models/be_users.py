from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, RecordMixin, TimestampMixin


class BackendUser(RecordMixin, TimestampMixin, Base):
    __tablename__ = "be_users"

    username: Mapped[str] = mapped_column(sa.String(50), nullable=False, default="")
    # Salted hash only, never the clear text secret
    password: Mapped[str] = mapped_column(sa.String(255), nullable=False, default="")
    admin: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    disable: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    # Comma separated be_groups uids
    usergroup: Mapped[str] = mapped_column(sa.String(255), nullable=False, default="")
    tx_styleguide_isdemorecord: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0, index=True)

    @property
    def group_uids(self) -> list[int]:
        return [int(x) for x in self.usergroup.split(",") if x.strip()]
