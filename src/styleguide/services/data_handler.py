# src/styleguide/services/data_handler.py
"""
Record mutation subsystem.

``process_datamap`` takes ``{table: {id: {field: value}}}``. An id is either a
real uid (update) or a placeholder starting with ``NEW`` (insert). Placeholders
may be used as ``pid`` (``"NEWabc"`` = inside that page, ``"-NEWabc"`` = after
that record) and in relation columns (single id or comma list): select and
group fields, inline foreign fields and ``be_users.usergroup``. Other
fields are stored as given. All substitutions of one call live in the
returned mapping; nothing is kept between calls.

``process_cmdmap`` takes ``{table: {uid: {"delete": 1}}}``. With
``delete_tree`` a page is removed with all its sub pages and every record
stored on them.

Each call runs in a single transaction.
"""
from __future__ import annotations

import re
import uuid
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Protocol, Tuple, runtime_checkable

import sqlalchemy as sa
from sqlalchemy.orm import Session

from styleguide.app_logger import get_logger
from styleguide.db.base import SORTING_INTERVAL, unix_now
from styleguide.exceptions import DataHandlerError, UnknownTableError, UnresolvedPlaceholderError
from styleguide.tca import SchemaRegistry

logger = get_logger(__name__)

PLACEHOLDER_PREFIX = "NEW"
_PLACEHOLDER_RE = re.compile(r"^NEW[0-9a-fA-F]+$")

# Relation columns of the host tables; TCA tables get theirs from the registry
HOST_REFERENCE_COLUMNS: Dict[str, Tuple[str, ...]] = {
    "be_users": ("usergroup",),
}

DataMap = Dict[str, Dict[Any, Dict[str, Any]]]
CmdMap = Dict[str, Dict[Any, Dict[str, Any]]]


def new_placeholder_id(prefix: str = PLACEHOLDER_PREFIX) -> str:
    """Unique id for a record that does not exist yet."""
    return f"{prefix}{uuid.uuid4().hex[:14]}"


def is_placeholder(value: Any) -> bool:
    return isinstance(value, str) and bool(_PLACEHOLDER_RE.match(value))


@runtime_checkable
class DataHandler(Protocol):
    def process_datamap(self, datamap: DataMap) -> Dict[str, int]: ...
    def process_cmdmap(self, cmdmap: CmdMap, delete_tree: bool = False) -> None: ...
    def insert_row(self, table: str, fields: Mapping[str, Any]) -> int: ...


class SqlDataHandler:
    """:class:`DataHandler` on a SQLAlchemy session and a ``MetaData`` holding every table."""

    def __init__(
        self,
        session: Session,
        metadata: sa.MetaData,
        registry: Optional[SchemaRegistry] = None,
        page_table: str = "pages",
    ) -> None:
        self.session = session
        self.metadata = metadata
        self.registry = registry
        self.page_table = page_table
        self._references: Dict[str, FrozenSet[str]] = {}

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def table(self, name: str) -> sa.Table:
        try:
            return self.metadata.tables[name]
        except KeyError:
            raise UnknownTableError(name) from None

    def reference_columns(self, table_name: str) -> FrozenSet[str]:
        """Columns of ``table_name`` whose values may hold placeholder ids."""
        if table_name not in self._references:
            columns = set(HOST_REFERENCE_COLUMNS.get(table_name, ()))
            if self.registry is not None and self.registry.has(table_name):
                columns |= self.registry.reference_columns(table_name)
            self._references[table_name] = frozenset(columns)
        return self._references[table_name]

    def _has(self, table: sa.Table, column: str) -> bool:
        return column in table.c

    def _row(self, table: sa.Table, uid: int) -> Optional[Mapping[str, Any]]:
        return self.session.execute(sa.select(table).where(table.c.uid == uid)).mappings().first()

    def _siblings(self, table: sa.Table, pid: int) -> List[Tuple[int, int]]:
        rows = self.session.execute(
            sa.select(table.c.uid, table.c.sorting).where(table.c.pid == pid).order_by(table.c.sorting, table.c.uid)
        ).all()
        return [(r.uid, r.sorting) for r in rows]

    def _sorting_at_end(self, table: sa.Table, pid: int) -> int:
        current = self.session.execute(sa.select(sa.func.max(table.c.sorting)).where(table.c.pid == pid)).scalar()
        return (current or 0) + SORTING_INTERVAL

    def _sorting_after(self, table: sa.Table, uid: int) -> Tuple[int, int]:
        """(pid, sorting) for a new record placed directly after ``uid``."""
        anchor = self._row(table, uid)
        if anchor is None:
            raise DataHandlerError(f"Record {table.name}:{uid} to insert after does not exist", table_name=table.name)
        pid = anchor["pid"]
        if not self._has(table, "sorting"):
            return pid, 0

        siblings = self._siblings(table, pid)
        position = next(i for i, (s_uid, _) in enumerate(siblings) if s_uid == uid)
        if position == len(siblings) - 1:
            return pid, anchor["sorting"] + SORTING_INTERVAL

        next_sorting = siblings[position + 1][1]
        if next_sorting - anchor["sorting"] > 1:
            return pid, (anchor["sorting"] + next_sorting) // 2

        # No gap left: respace every sibling, keep a slot free after the anchor
        sorting = 0
        new_sorting = 0
        for s_uid, _ in siblings:
            sorting += SORTING_INTERVAL
            self.session.execute(sa.update(table).where(table.c.uid == s_uid).values(sorting=sorting))
            if s_uid == uid:
                sorting += SORTING_INTERVAL
                new_sorting = sorting
        return pid, new_sorting

    # ------------------------------------------------------------------
    # Datamap
    # ------------------------------------------------------------------
    def _resolve(self, value: Any, substitutions: Dict[str, int]) -> Tuple[Any, bool]:
        """Replace placeholders in ``value``. Second item is False if one is still unknown."""
        if is_placeholder(value):
            if value in substitutions:
                return substitutions[value], True
            return value, False
        if isinstance(value, str) and "," in value and PLACEHOLDER_PREFIX in value:
            parts = [p.strip() for p in value.split(",")]
            if not all(is_placeholder(p) or p.isdigit() for p in parts):
                return value, True
            resolved: List[str] = []
            complete = True
            for part in parts:
                if is_placeholder(part):
                    if part in substitutions:
                        part = str(substitutions[part])
                    else:
                        complete = False
                resolved.append(part)
            return ",".join(resolved), complete
        return value, True

    def _resolve_pid(self, table: sa.Table, raw_pid: Any, substitutions: Dict[str, int]) -> Tuple[int, Optional[int]]:
        """Return (pid, sorting). ``sorting`` is None when the record goes to the end."""
        after = False
        pid = raw_pid if raw_pid is not None else 0
        if isinstance(pid, str) and pid.startswith("-"):
            after, pid = True, pid[1:]
        if is_placeholder(pid):
            if pid not in substitutions:
                raise UnresolvedPlaceholderError(pid, table_name=table.name, field="pid")
            pid = substitutions[pid]
        pid = int(pid)
        if pid < 0:
            after, pid = True, -pid
        if after:
            return self._sorting_after(table, pid)
        return pid, None

    def _insert(self, table: sa.Table, fields: Dict[str, Any]) -> int:
        values = {k: v for k, v in fields.items() if k in table.c and k != "uid"}
        unknown = set(fields) - set(values) - {"uid"}
        if unknown:
            logger.debug("Ignoring unknown fields for %s: %s", table.name, sorted(unknown))
        if self._has(table, "crdate"):
            values.setdefault("crdate", unix_now())
        if self._has(table, "tstamp"):
            values.setdefault("tstamp", unix_now())
        result = self.session.execute(sa.insert(table).values(**values))
        return int(result.inserted_primary_key[0])

    def process_datamap(self, datamap: DataMap) -> Dict[str, int]:
        """Insert/update every record of ``datamap`` and return placeholder -> uid."""
        substitutions: Dict[str, int] = {}
        deferred: List[Tuple[sa.Table, int, str, Any]] = []
        try:
            for table_name, records in datamap.items():
                table = self.table(table_name)
                for record_id, incoming in records.items():
                    fields = dict(incoming)
                    if is_placeholder(record_id):
                        uid = self._insert_new(table, record_id, fields, substitutions, deferred)
                        substitutions[record_id] = uid
                    else:
                        self._update(table, int(record_id), fields, substitutions, deferred)

            # Forward references: resolve now that every record of the batch exists
            for table, uid, field, value in deferred:
                resolved, complete = self._resolve(value, substitutions)
                if not complete:
                    raise UnresolvedPlaceholderError(str(value), table_name=table.name, field=field)
                self.session.execute(sa.update(table).where(table.c.uid == uid).values({field: resolved}))

            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

        logger.info("Datamap processed: %d new records", len(substitutions))
        return substitutions

    def _split_fields(
        self, table: sa.Table, fields: Dict[str, Any], substitutions: Dict[str, int]
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        ready: Dict[str, Any] = {}
        later: Dict[str, Any] = {}
        references = self.reference_columns(table.name)
        for field, value in fields.items():
            if field not in references:
                ready[field] = value
                continue
            resolved, complete = self._resolve(value, substitutions)
            if complete:
                ready[field] = resolved
            else:
                later[field] = value
        return ready, later

    def _insert_new(
        self,
        table: sa.Table,
        placeholder: str,
        fields: Dict[str, Any],
        substitutions: Dict[str, int],
        deferred: List[Tuple[sa.Table, int, str, Any]],
    ) -> int:
        raw_pid = fields.pop("pid", 0)
        pid, sorting = self._resolve_pid(table, raw_pid, substitutions)
        ready, later = self._split_fields(table, fields, substitutions)
        ready["pid"] = pid
        if self._has(table, "sorting"):
            if sorting is not None:
                ready["sorting"] = sorting
            elif "sorting" not in ready:
                ready["sorting"] = self._sorting_at_end(table, pid)
        uid = self._insert(table, ready)
        for field, value in later.items():
            deferred.append((table, uid, field, value))
        logger.debug("Inserted %s:%d for %s", table.name, uid, placeholder)
        return uid

    def _update(
        self,
        table: sa.Table,
        uid: int,
        fields: Dict[str, Any],
        substitutions: Dict[str, int],
        deferred: List[Tuple[sa.Table, int, str, Any]],
    ) -> None:
        if self._row(table, uid) is None:
            raise DataHandlerError(f"Record {table.name}:{uid} does not exist", table_name=table.name)
        ready, later = self._split_fields(table, fields, substitutions)
        ready = {k: v for k, v in ready.items() if k in table.c and k != "uid"}
        if self._has(table, "tstamp"):
            ready["tstamp"] = unix_now()
        if ready:
            self.session.execute(sa.update(table).where(table.c.uid == uid).values(**ready))
        for field, value in later.items():
            deferred.append((table, uid, field, value))

    def insert_row(self, table: str, fields: Mapping[str, Any]) -> int:
        """Plain insert outside the datamap logic, committed immediately."""
        target = self.table(table)
        try:
            uid = self._insert(target, dict(fields))
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return uid

    # ------------------------------------------------------------------
    # Cmdmap
    # ------------------------------------------------------------------
    def _page_tree_uids(self, root_uid: int) -> List[int]:
        pages = self.table(self.page_table)
        uids = [root_uid]
        level = [root_uid]
        while level:
            level = list(self.session.execute(sa.select(pages.c.uid).where(pages.c.pid.in_(level))).scalars())
            uids.extend(level)
        return uids

    def _delete_page(self, uid: int, delete_tree: bool) -> int:
        pages = self.table(self.page_table)
        if delete_tree:
            page_uids = self._page_tree_uids(uid)
        else:
            has_children = self.session.execute(
                sa.select(sa.func.count()).select_from(pages).where(pages.c.pid == uid)
            ).scalar()
            if has_children:
                raise DataHandlerError(
                    f"Page {uid} has sub pages; delete them first or use delete_tree",
                    table_name=self.page_table,
                )
            page_uids = [uid]

        removed = 0
        for table in self.metadata.sorted_tables:
            if table.name == self.page_table or "pid" not in table.c:
                continue
            removed += self.session.execute(sa.delete(table).where(table.c.pid.in_(page_uids))).rowcount or 0
        removed += self.session.execute(sa.delete(pages).where(pages.c.uid.in_(page_uids))).rowcount or 0
        return removed

    def process_cmdmap(self, cmdmap: CmdMap, delete_tree: bool = False) -> None:
        removed = 0
        try:
            for table_name, records in cmdmap.items():
                table = self.table(table_name)
                for uid, commands in records.items():
                    for command, value in commands.items():
                        if command != "delete":
                            raise DataHandlerError(f"Unsupported command '{command}'", table_name=table_name)
                        if not value:
                            continue
                        if table_name == self.page_table:
                            removed += self._delete_page(int(uid), delete_tree)
                        else:
                            removed += self.session.execute(
                                sa.delete(table).where(table.c.uid == int(uid))
                            ).rowcount or 0
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        logger.info("Cmdmap processed: %d rows deleted", removed)
