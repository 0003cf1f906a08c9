# src/styleguide/generator/tables.py
"""
Main / child table discovery.

A styleguide table is either a "main" table or a "child" table that belongs
to a main table. The difference is a naming thing: ``<prefix><identifier>``
is a main table, ``<prefix><identifier>_<more>`` is a child of
``<prefix><identifier>``. Example with prefix ``tx_styleguide_inline_``:

- ``tx_styleguide_inline_1n``       -> main
- ``tx_styleguide_inline_1n_child`` -> child of ``tx_styleguide_inline_1n``

Each main table gets its own page in the demo tree, children live on the
page of their main table.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence


class TableKind(str, Enum):
    MAIN = "main"
    CHILD = "child"
    NOT_MATCHED = "not_matched"


@dataclass(frozen=True)
class TableClassification:
    name: str
    kind: TableKind
    prefix: Optional[str] = None
    owner: Optional[str] = None

    @property
    def is_main(self) -> bool:
        return self.kind is TableKind.MAIN

    @property
    def is_child(self) -> bool:
        return self.kind is TableKind.CHILD


def classify(table_name: str, prefixes: Sequence[str], reserved: Optional[str] = None) -> TableClassification:
    """Classify ``table_name`` against ``prefixes`` (priority order, first literal prefix wins)."""
    if reserved is not None and table_name == reserved:
        return TableClassification(table_name, TableKind.NOT_MATCHED)

    for prefix in prefixes:
        if not table_name.startswith(prefix):
            continue
        remainder = table_name[len(prefix):]
        if not remainder:
            break
        segments = remainder.split("_")
        if len(segments) == 1:
            return TableClassification(table_name, TableKind.MAIN, prefix=prefix)
        return TableClassification(table_name, TableKind.CHILD, prefix=prefix, owner=prefix + segments[0])

    return TableClassification(table_name, TableKind.NOT_MATCHED)


def main_tables(table_names: Iterable[str], prefixes: Sequence[str], reserved_first: str) -> List[str]:
    """
    Ordered list of main tables.

    ``reserved_first`` (the static lookup table) is always first: other tables
    select its rows, so it has to be populated before them.
    """
    result: List[str] = [reserved_first]
    for name in table_names:
        if name in result:
            continue
        if classify(name, prefixes, reserved=reserved_first).is_main:
            result.append(name)
    return result


def page_title_for(table_name: str, base_prefix: str = "tx_styleguide_") -> str:
    """``tx_styleguide_elements_rte`` -> ``elements rte``."""
    if table_name.startswith(base_prefix):
        table_name = table_name[len(base_prefix):]
    return table_name.replace("_", " ")
