# src/styleguide/generator/field_generator.py
"""
Demo values for single columns, chosen from the column's TCA ``config``.

Inline columns do not get a scalar value of their own: they add child rows to
the datamap that point back to the parent placeholder.
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from styleguide.app_logger import get_logger
from styleguide.services.data_handler import DataMap, new_placeholder_id
from styleguide.tca import DEMO_RECORD_FIELD, ColumnConfig, SchemaRegistry

from .record_finder import RecordFinder

logger = get_logger(__name__)

# 2015-01-01 00:00:00 UTC
DEMO_TIMESTAMP = 1420070400

LOREM = "Lorem ipsum dolor sit amet, consectetur adipiscing elit."

# Columns managed by the backend itself
SYSTEM_FIELDS = {
    "hidden",
    "starttime",
    "endtime",
    "sys_language_uid",
    "l10n_parent",
    "l10n_diffsource",
    "t3_origuid",
}

NO_VALUE_TYPES = {"flex", "group", "none", "passthrough", "user"}

MAX_INLINE_DEPTH = 2


class FieldGenerator:
    def __init__(
        self,
        registry: SchemaRegistry,
        record_finder: RecordFinder,
        static_table: str = "tx_styleguide_staticdata",
    ) -> None:
        self.registry = registry
        self.record_finder = record_finder
        self.static_table = static_table

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------
    def generate_record(self, table_name: str, pid: int, extra: Optional[Dict[str, Any]] = None) -> Tuple[str, DataMap]:
        """Datamap with one new ``table_name`` row (plus inline children). Returns (placeholder, datamap)."""
        datamap: DataMap = {}
        placeholder = self._add_record(datamap, table_name, pid, extra or {}, depth=0)
        return placeholder, datamap

    def _add_record(self, datamap: DataMap, table_name: str, pid: int, extra: Dict[str, Any], depth: int) -> str:
        placeholder = new_placeholder_id()
        fields: Dict[str, Any] = {"pid": pid, DEMO_RECORD_FIELD: 1}
        # Parent first: children added below reference this placeholder
        datamap.setdefault(table_name, {})[placeholder] = fields

        for column_name, column in self.registry.columns(table_name).items():
            if column_name in extra or not self.wants_value(column_name, column):
                continue
            if column.config.type == "inline":
                fields[column_name] = self._add_inline_children(datamap, table_name, placeholder, column, pid, depth)
                continue
            value = self.generate_value(column_name, column)
            if value is not None:
                fields[column_name] = value

        fields.update(extra)
        return placeholder

    def _add_inline_children(
        self, datamap: DataMap, parent_table: str, parent: str, column: ColumnConfig, pid: int, depth: int
    ) -> int:
        cfg = column.config
        if not cfg.foreign_table or depth >= MAX_INLINE_DEPTH:
            return 0
        if not self.registry.has(cfg.foreign_table):
            logger.warning("Inline foreign table %s has no TCA, skipping", cfg.foreign_table)
            return 0

        link: Dict[str, Any] = {}
        if cfg.foreign_field:
            link[cfg.foreign_field] = parent
        if cfg.foreign_table_field:
            link[cfg.foreign_table_field] = parent_table
        self._add_record(datamap, cfg.foreign_table, pid, link, depth + 1)
        return 1

    # ------------------------------------------------------------------
    # Single values
    # ------------------------------------------------------------------
    @staticmethod
    def wants_value(column_name: str, column: ColumnConfig) -> bool:
        if column_name in SYSTEM_FIELDS or column.generator == "skip":
            return False
        return column.config.type not in NO_VALUE_TYPES

    def generate_value(self, column_name: str, column: ColumnConfig) -> Any:
        cfg = column.config
        kind = cfg.type

        if kind == "input":
            evals = set(cfg.evals)
            if "int" in evals:
                return 42
            if evals & {"date", "datetime", "time"}:
                return DEMO_TIMESTAMP
            return column_name

        if kind == "text":
            if column.is_richtext:
                return f"<p><strong>{column_name}</strong></p>\n<p>{LOREM}</p>"
            return f"{column_name}\n{LOREM}"

        if kind == "check":
            return 1

        if kind == "radio":
            return self._first_item_value(column)

        if kind == "select":
            if cfg.foreign_table:
                return self._first_foreign_uid(cfg.foreign_table)
            return self._first_item_value(column)

        logger.debug("No value generator for %s (type %s)", column_name, kind)
        return None

    @staticmethod
    def _first_item_value(column: ColumnConfig) -> Any:
        for item in column.config.items:
            if len(item) > 1 and item[1] not in (None, "", "--div--"):
                return item[1]
        return None

    def _first_foreign_uid(self, foreign_table: str) -> Optional[int]:
        if foreign_table == self.static_table:
            uids = self.record_finder.find_uids_of_static_data(self.static_table)
        elif self.registry.has(foreign_table):
            uids = self.record_finder.find_uids_of_demo_records(foreign_table)
        else:
            uids = []
        return uids[0] if uids else None
