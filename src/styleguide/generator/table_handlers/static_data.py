# src/styleguide/generator/table_handlers/static_data.py
from __future__ import annotations

from .base import AbstractTableHandler

STATIC_VALUES = ("foo", "bar", "foofoo", "foobar")


class StaticDataHandler(AbstractTableHandler):
    """Lookup rows that select fields of the other tables point to."""

    table_name = "tx_styleguide_staticdata"

    def match(self, table_name: str) -> bool:
        return table_name == self.context.static_table

    def handle(self, table_name: str) -> None:
        pid = self.page_of(table_name)
        self.insert_rows(table_name, [self.demo_fields(pid, value_1=value) for value in STATIC_VALUES])
