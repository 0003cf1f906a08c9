# src/styleguide/generator/table_handlers/base.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Protocol, runtime_checkable

from styleguide.app_logger import get_logger
from styleguide.services.data_handler import DataHandler
from styleguide.tca import DEMO_RECORD_FIELD, SchemaRegistry

from ..field_generator import FieldGenerator
from ..record_finder import RecordFinder

logger = get_logger(__name__)


@runtime_checkable
class TableHandler(Protocol):
    """A fixture strategy: ``match`` tells whether it populates a main table, ``handle`` does it."""

    def match(self, table_name: str) -> bool: ...
    def handle(self, table_name: str) -> None: ...


@dataclass
class HandlerContext:
    """Collaborators shared by every table handler of one generator."""

    data_handler: DataHandler
    record_finder: RecordFinder
    registry: SchemaRegistry
    field_generator: FieldGenerator
    static_table: str = "tx_styleguide_staticdata"


class AbstractTableHandler:
    # Main table the handler is written for; None matches nothing by default
    table_name: str | None = None

    def __init__(self, context: HandlerContext) -> None:
        self.context = context

    @property
    def data_handler(self) -> DataHandler:
        return self.context.data_handler

    @property
    def record_finder(self) -> RecordFinder:
        return self.context.record_finder

    def match(self, table_name: str) -> bool:
        return table_name == self.table_name

    def handle(self, table_name: str) -> None:  # pragma: no cover - abstract
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def page_of(self, table_name: str) -> int:
        return self.record_finder.find_pid_of_main_table_record(table_name)

    @staticmethod
    def demo_fields(pid: int, **fields: Any) -> Dict[str, Any]:
        row: Dict[str, Any] = {"pid": pid, DEMO_RECORD_FIELD: 1}
        row.update(fields)
        return row

    def insert_rows(self, table_name: str, rows: List[Dict[str, Any]]) -> List[int]:
        uids = [self.data_handler.insert_row(table_name, row) for row in rows]
        logger.debug("%s: inserted %d rows into %s", type(self).__name__, len(uids), table_name)
        return uids
