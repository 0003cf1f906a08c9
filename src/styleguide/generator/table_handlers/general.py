# src/styleguide/generator/table_handlers/general.py
from __future__ import annotations

from .base import AbstractTableHandler


class GeneralHandler(AbstractTableHandler):
    """Catch-all: one row with every column filled from its TCA config."""

    def match(self, table_name: str) -> bool:
        return True

    def handle(self, table_name: str) -> None:
        pid = self.page_of(table_name)
        _, datamap = self.context.field_generator.generate_record(table_name, pid)
        self.data_handler.process_datamap(datamap)
