# src/styleguide/generator/table_handlers/inline_mn_symmetric.py
from __future__ import annotations

from styleguide.services.data_handler import DataMap, new_placeholder_id

from .base import AbstractTableHandler


class InlineMnSymmetricHandler(AbstractTableHandler):
    """Two hotels of the same table, linked to each other by one symmetric ``_mm`` row."""

    table_name = "tx_styleguide_inline_mnsymmetric"

    def handle(self, table_name: str) -> None:
        pid = self.page_of(table_name)
        hotel, branch = new_placeholder_id(), new_placeholder_id()

        datamap: DataMap = {
            table_name: {
                hotel: self.demo_fields(pid, input_1="hotel 1", branches=1),
                branch: self.demo_fields(pid, input_1="hotel 2", branches=1),
            },
            f"{table_name}_mm": {
                new_placeholder_id(): self.demo_fields(
                    pid, hotelid=hotel, branchid=branch, hotelsort=1, branchsort=1
                ),
            },
        }
        self.data_handler.process_datamap(datamap)
