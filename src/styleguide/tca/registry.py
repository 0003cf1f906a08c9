# src/styleguide/tca/registry.py
"""
Declarative field-configuration (TCA) registry.

Each ``*.yaml`` file in a TCA directory declares one table: the file stem is
the table name, the document holds ``ctrl``, ``columns`` and ``types``. The
registry keeps the declarations in discovery order and can turn them into
SQLAlchemy ``Table`` objects on a given ``MetaData``.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Set

import sqlalchemy as sa
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from styleguide.app_logger import get_logger
from styleguide.db.base import Base, unix_now
from styleguide.exceptions import SchemaError

logger = get_logger(__name__)

BUNDLED_TCA_DIR = Path(__file__).resolve().parent / "tables"

DEMO_RECORD_FIELD = "tx_styleguide_isdemorecord"

# Columns every TCA table gets, whether declared or not
SYSTEM_COLUMNS = ("uid", "pid", "sorting", "hidden", "tstamp", "crdate", DEMO_RECORD_FIELD)

_DB_TYPES = {
    "integer": sa.Integer,
    "smallint": sa.SmallInteger,
    "string": lambda: sa.String(255),
    "text": sa.Text,
}


class FieldConfig(BaseModel):
    """The ``config`` section of a column. Unknown TCA keys are kept as-is."""
    model_config = ConfigDict(extra="allow")

    type: str
    eval: Optional[str] = None
    items: List[List[Any]] = Field(default_factory=list)
    default: Any = None
    foreign_table: Optional[str] = None
    foreign_field: Optional[str] = None
    foreign_table_field: Optional[str] = None
    enableRichtext: bool = False

    @property
    def evals(self) -> List[str]:
        return [e.strip() for e in (self.eval or "").split(",") if e.strip()]


class ColumnConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    label: str = ""
    exclude: int = 0
    config: FieldConfig
    defaultExtras: Optional[str] = None
    # storage type override: integer | smallint | string | text
    db: Optional[str] = None
    # "skip" keeps the column out of generated demo rows
    generator: Optional[str] = None

    @property
    def is_richtext(self) -> bool:
        return self.config.enableRichtext or "richtext" in (self.defaultExtras or "")


class TableConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str
    ctrl: Dict[str, Any] = Field(default_factory=dict)
    columns: Dict[str, ColumnConfig] = Field(default_factory=dict)
    types: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    @property
    def title(self) -> str:
        return str(self.ctrl.get("title") or self.name)


def _sql_type_for(column: ColumnConfig):
    if column.db:
        try:
            factory = _DB_TYPES[column.db]
        except KeyError:
            raise SchemaError(f"Unknown db type '{column.db}'") from None
        return factory()

    cfg = column.config
    if cfg.type == "input":
        if {"int", "date", "datetime", "time"} & set(cfg.evals):
            return sa.Integer()
        return sa.String(255)
    if cfg.type == "check":
        return sa.SmallInteger()
    if cfg.type == "inline":
        # number of children
        return sa.Integer()
    if cfg.type == "select" and cfg.foreign_table:
        return sa.Integer()
    if cfg.type in ("radio", "select"):
        return sa.String(255)
    return sa.Text()


class SchemaRegistry:
    """In-memory TCA: table name -> :class:`TableConfig`, in discovery order."""

    def __init__(self) -> None:
        self._tables: Dict[str, TableConfig] = {}

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    @classmethod
    def from_directories(cls, directories: Iterable[Path | str]) -> "SchemaRegistry":
        registry = cls()
        for directory in directories:
            registry.load_directory(directory)
        return registry

    @classmethod
    def default(cls, extra_dirs: Iterable[Path | str] = ()) -> "SchemaRegistry":
        """Bundled styleguide tables plus any extra directories."""
        return cls.from_directories([BUNDLED_TCA_DIR, *extra_dirs])

    def load_directory(self, directory: Path | str) -> None:
        path = Path(directory)
        if not path.is_dir():
            raise SchemaError(f"TCA directory '{path}' does not exist", source=str(path))
        files = sorted(path.glob("*.yaml"))
        for file in files:
            self.load_file(file)
        logger.debug("Loaded %d TCA files from %s", len(files), path)

    def load_file(self, file: Path | str) -> TableConfig:
        file = Path(file)
        try:
            with open(file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SchemaError(f"Invalid YAML in {file.name}", table_name=file.stem, source=str(file), cause=e) from e
        return self.register(file.stem, data, source=str(file))

    def register(self, name: str, data: Dict[str, Any], source: Optional[str] = None) -> TableConfig:
        if not isinstance(data, dict):
            raise SchemaError(f"TCA for '{name}' must be a mapping", table_name=name, source=source)
        try:
            table = TableConfig(name=name, **data)
        except ValidationError as e:
            raise SchemaError(f"Invalid TCA for '{name}': {e}", table_name=name, source=source, cause=e) from e
        if name in self._tables:
            logger.info("TCA for %s overridden by %s", name, source or "register()")
        self._tables[name] = table
        return table

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------
    def table_names(self) -> List[str]:
        return list(self._tables)

    def has(self, name: str) -> bool:
        return name in self._tables

    def get(self, name: str) -> TableConfig:
        try:
            return self._tables[name]
        except KeyError:
            raise SchemaError(f"No TCA defined for table '{name}'", table_name=name) from None

    def columns(self, name: str) -> Dict[str, ColumnConfig]:
        return self.get(name).columns

    def reference_columns(self, name: str) -> Set[str]:
        """
        Columns of ``name`` that point to other records: select fields with a
        foreign table, group and inline fields, and every column another table
        names as ``foreign_field`` of an inline relation into ``name``.
        """
        refs: Set[str] = set()
        for column_name, column in self.columns(name).items():
            cfg = column.config
            if cfg.type in ("group", "inline") or (cfg.type == "select" and cfg.foreign_table):
                refs.add(column_name)
        for table in self._tables.values():
            for column in table.columns.values():
                cfg = column.config
                if cfg.type == "inline" and cfg.foreign_table == name and cfg.foreign_field:
                    refs.add(cfg.foreign_field)
        return refs

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def __len__(self) -> int:
        return len(self._tables)

    # ------------------------------------------------------------------
    # SQLAlchemy
    # ------------------------------------------------------------------
    def define_table(self, name: str, metadata: sa.MetaData) -> sa.Table:
        if name in metadata.tables:
            return metadata.tables[name]

        table = self.get(name)
        cols: List[sa.Column] = [
            sa.Column("uid", sa.Integer, primary_key=True, autoincrement=True),
            sa.Column("pid", sa.Integer, nullable=False, default=0, index=True),
            sa.Column("sorting", sa.Integer, nullable=False, default=0),
            sa.Column("hidden", sa.SmallInteger, nullable=False, default=0),
            sa.Column("tstamp", sa.Integer, nullable=False, default=unix_now, onupdate=unix_now),
            sa.Column("crdate", sa.Integer, nullable=False, default=unix_now),
            sa.Column(DEMO_RECORD_FIELD, sa.SmallInteger, nullable=False, default=0, index=True),
        ]
        for column_name, column in table.columns.items():
            if column_name in SYSTEM_COLUMNS:
                continue
            cols.append(sa.Column(column_name, _sql_type_for(column), nullable=True))
        return sa.Table(name, metadata, *cols)

    def define_tables(self, metadata: sa.MetaData) -> List[sa.Table]:
        return [self.define_table(name, metadata) for name in self._tables]

    def build_metadata(self) -> sa.MetaData:
        """Fresh ``MetaData`` holding the host tables (pages, be_users, be_groups) and every TCA table."""
        metadata = sa.MetaData(naming_convention=Base.metadata.naming_convention)
        for host_table in Base.metadata.sorted_tables:
            host_table.to_metadata(metadata)
        self.define_tables(metadata)
        return metadata
