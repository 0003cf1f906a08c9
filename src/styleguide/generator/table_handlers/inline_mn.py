# src/styleguide/generator/table_handlers/inline_mn.py
from __future__ import annotations

from styleguide.services.data_handler import DataMap, new_placeholder_id

from .base import AbstractTableHandler


class InlineMnHandler(AbstractTableHandler):
    """
    m:n inline relation through an intermediate table.

    One parent, two children and one ``_mm`` row per child, submitted as one
    datamap so the mm rows can point to parent and children by placeholder.
    """

    table_name = "tx_styleguide_inline_mn"

    def handle(self, table_name: str) -> None:
        pid = self.page_of(table_name)
        child_table = f"{table_name}_child"
        mm_table = f"{table_name}_mm"

        parent = new_placeholder_id()
        children = [new_placeholder_id(), new_placeholder_id()]

        datamap: DataMap = {
            table_name: {parent: self.demo_fields(pid, input_1="parent", inline_1=len(children))},
            child_table: {
                child: self.demo_fields(pid, input_1=f"child {position}", parents=1)
                for position, child in enumerate(children, start=1)
            },
            mm_table: {
                new_placeholder_id(): self.demo_fields(
                    pid, parentid=parent, childid=child, parentsort=position, childsort=1
                )
                for position, child in enumerate(children, start=1)
            },
        }
        self.data_handler.process_datamap(datamap)
