# src/styleguide/generator/page_tree.py
from __future__ import annotations

from typing import Dict, Optional, Sequence

from styleguide.app_logger import get_logger
from styleguide.db.base import SORTING_INTERVAL
from styleguide.services.data_handler import DataHandler, DataMap, new_placeholder_id
from styleguide.services.signals import UpdateSignals

from .record_finder import ENTRY_PAGE_MARKER, RecordFinder
from .tables import page_title_for

logger = get_logger(__name__)

ROOT_PAGE_TITLE = "styleguide TCA demo"


class TreeBuilder:
    """
    Demo page tree: one root page at pid 0, one page per main table below it.

    The root sorts before every existing top level page. Table pages are chained
    with ``pid = "-<previous placeholder>"`` so they keep the given table order.
    """

    def __init__(self, data_handler: DataHandler, record_finder: RecordFinder, signals: UpdateSignals) -> None:
        self.data_handler = data_handler
        self.record_finder = record_finder
        self.signals = signals

    def root_sorting(self) -> int:
        lowest: Optional[int] = self.record_finder.find_lowest_top_level_sorting()
        if lowest is None:
            return SORTING_INTERVAL
        return lowest - SORTING_INTERVAL

    def build_datamap(self, main_tables: Sequence[str]) -> DataMap:
        root = new_placeholder_id()
        pages: Dict[str, dict] = {
            root: {
                "pid": 0,
                "sorting": self.root_sorting(),
                "title": ROOT_PAGE_TITLE,
                "hidden": 0,
                "is_siteroot": 1,
                "tx_styleguide_containsdemo": ENTRY_PAGE_MARKER,
            }
        }

        previous: Optional[str] = None
        for table_name in main_tables:
            placeholder = new_placeholder_id()
            pages[placeholder] = {
                # first page goes into the root, the others after their predecessor
                "pid": root if previous is None else f"-{previous}",
                "title": page_title_for(table_name),
                "hidden": 0,
                "tx_styleguide_containsdemo": table_name,
            }
            previous = placeholder
        return {"pages": pages}

    def build(self, main_tables: Sequence[str]) -> Dict[str, int]:
        """Create the tree in one batch; returns the placeholder substitutions."""
        substitutions = self.data_handler.process_datamap(self.build_datamap(main_tables))
        self.signals.set_update_signal("updatePageTree")
        logger.info("Created demo page tree with %d table pages", len(main_tables))
        return substitutions
