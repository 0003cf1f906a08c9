# src/styleguide/generator/remover.py
from __future__ import annotations

from typing import Dict

from styleguide.app_logger import get_logger
from styleguide.exceptions import FolderDoesNotExistError
from styleguide.services.data_handler import CmdMap, DataHandler
from styleguide.services.signals import UpdateSignals
from styleguide.services.storage import AssetStorage

from .record_finder import RecordFinder
from .third_party import ASSET_FOLDER

logger = get_logger(__name__)


class Remover:
    """Removes every demo tree, demo account, demo group and the asset folder."""

    def __init__(
        self,
        data_handler: DataHandler,
        record_finder: RecordFinder,
        storage: AssetStorage,
        signals: UpdateSignals,
        folder_name: str = ASSET_FOLDER,
    ) -> None:
        self.data_handler = data_handler
        self.record_finder = record_finder
        self.storage = storage
        self.signals = signals
        self.folder_name = folder_name

    def build_cmdmap(self) -> CmdMap:
        cmdmap: CmdMap = {}
        lookups = (
            ("pages", self.record_finder.find_uids_of_entry_pages()),
            ("be_users", self.record_finder.find_uids_of_demo_be_users()),
            ("be_groups", self.record_finder.find_uids_of_demo_be_groups()),
        )
        for table_name, uids in lookups:
            if uids:
                cmdmap[table_name] = {uid: {"delete": 1} for uid in uids}
        return cmdmap

    def delete_all(self) -> Dict[str, int]:
        """Returns the number of deleted entry pages / users / groups per table."""
        cmdmap = self.build_cmdmap()
        if cmdmap:
            self.data_handler.process_cmdmap(cmdmap, delete_tree=True)
            self.signals.set_update_signal("updatePageTree")
        else:
            logger.info("No demo records found")

        self.remove_asset_folder()
        return {table_name: len(records) for table_name, records in cmdmap.items()}

    def remove_asset_folder(self) -> bool:
        try:
            self.storage.get_root_level_folder().get_subfolder(self.folder_name).delete(recursive=True)
        except FolderDoesNotExistError:
            logger.debug("Asset folder %s does not exist", self.folder_name)
            return False
        return True
