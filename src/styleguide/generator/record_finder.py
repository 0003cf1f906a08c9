# src/styleguide/generator/record_finder.py
from __future__ import annotations

from typing import List, Optional

import sqlalchemy as sa
from sqlalchemy.orm import Session

from styleguide.db.models import BackendGroup, BackendUser, Page
from styleguide.exceptions import GenerationError
from styleguide.tca import DEMO_RECORD_FIELD

# Marker of the top page of a demo tree
ENTRY_PAGE_MARKER = "tx_styleguide"


class RecordFinder:
    """Lookups of styleguide demo rows. Each one is independent, there is no central index."""

    def __init__(self, session: Session, metadata: sa.MetaData) -> None:
        self.session = session
        self.metadata = metadata

    def find_uids_of_entry_pages(self) -> List[int]:
        stmt = sa.select(Page.uid).where(Page.tx_styleguide_containsdemo == ENTRY_PAGE_MARKER).order_by(Page.uid)
        return list(self.session.scalars(stmt))

    def find_uids_of_demo_be_users(self) -> List[int]:
        stmt = sa.select(BackendUser.uid).where(BackendUser.tx_styleguide_isdemorecord == 1).order_by(BackendUser.uid)
        return list(self.session.scalars(stmt))

    def find_uids_of_demo_be_groups(self) -> List[int]:
        stmt = sa.select(BackendGroup.uid).where(BackendGroup.tx_styleguide_isdemorecord == 1).order_by(BackendGroup.uid)
        return list(self.session.scalars(stmt))

    def find_pid_of_main_table_record(self, table_name: str) -> int:
        """Uid of the page holding records of ``table_name`` (newest demo tree wins)."""
        stmt = (
            sa.select(Page.uid)
            .where(Page.tx_styleguide_containsdemo == table_name)
            .order_by(Page.uid.desc())
            .limit(1)
        )
        uid = self.session.scalars(stmt).first()
        if uid is None:
            raise GenerationError(f"No demo page found for table '{table_name}'", table_name=table_name)
        return uid

    def find_uids_of_demo_records(self, table_name: str, pid: Optional[int] = None) -> List[int]:
        table = self.metadata.tables[table_name]
        stmt = sa.select(table.c.uid).where(table.c[DEMO_RECORD_FIELD] == 1)
        if pid is not None:
            stmt = stmt.where(table.c.pid == pid)
        if "sorting" in table.c:
            stmt = stmt.order_by(table.c.sorting, table.c.uid)
        else:
            stmt = stmt.order_by(table.c.uid)
        return list(self.session.scalars(stmt))

    def find_uids_of_static_data(self, static_table: str = "tx_styleguide_staticdata") -> List[int]:
        """Static rows of the newest demo tree; empty if the static table was not populated yet."""
        try:
            pid = self.find_pid_of_main_table_record(static_table)
        except GenerationError:
            return []
        return self.find_uids_of_demo_records(static_table, pid=pid)

    def find_lowest_top_level_sorting(self) -> Optional[int]:
        return self.session.scalar(sa.select(sa.func.min(Page.sorting)).where(Page.pid == 0))
