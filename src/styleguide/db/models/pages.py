from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, RecordMixin, TimestampMixin


class Page(RecordMixin, TimestampMixin, Base):
    __tablename__ = "pages"

    title: Mapped[str] = mapped_column(sa.String(255), nullable=False, default="")
    sorting: Mapped[int] = mapped_column(sa.Integer, nullable=False, default=0)
    hidden: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)
    is_siteroot: Mapped[int] = mapped_column(sa.SmallInteger, nullable=False, default=0)

    # "tx_styleguide" on the entry page, the main table name on its sub pages
    tx_styleguide_containsdemo: Mapped[str] = mapped_column(sa.String(255), nullable=False, default="", index=True)

    def __repr__(self) -> str:
        return f"<Page uid={self.uid} pid={self.pid} title={self.title!r}>"
