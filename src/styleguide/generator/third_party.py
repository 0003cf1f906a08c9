# src/styleguide/generator/third_party.py
"""
Baseline data outside the page tree: backend users/groups and sample images.

Both steps are idempotent. Accounts are only created when no demo group
exists; this assumes groups and users are always created and deleted
together. Deleting only one of them by hand leaves the other alone on the
next run.
"""
from __future__ import annotations

from importlib import resources
from pathlib import Path
from typing import List, Optional

from styleguide.app_logger import get_logger
from styleguide.exceptions import ExistingTargetFolderError
from styleguide.services.data_handler import DataHandler
from styleguide.services.passwords import PasswordHasher, generate_random_bytes
from styleguide.services.storage import AssetStorage, DuplicationBehavior
from styleguide.tca import DEMO_RECORD_FIELD

from .record_finder import RecordFinder

logger = get_logger(__name__)

ASSET_FOLDER = "styleguide"
SAMPLE_IMAGES = ("bus_lane.jpg", "telephone_box.jpg", "underground.jpg")


def sample_image_dir() -> Path:
    return Path(str(resources.files("styleguide.resources") / "images"))


class ThirdPartyPopulator:
    def __init__(
        self,
        data_handler: DataHandler,
        record_finder: RecordFinder,
        storage: AssetStorage,
        password_hasher: PasswordHasher,
        folder_name: str = ASSET_FOLDER,
        image_dir: Optional[Path] = None,
    ) -> None:
        self.data_handler = data_handler
        self.record_finder = record_finder
        self.storage = storage
        self.password_hasher = password_hasher
        self.folder_name = folder_name
        self.image_dir = image_dir or sample_image_dir()

    def ensure_baseline_accounts(self) -> bool:
        """Create two demo groups and two demo users. Returns False if demo groups already exist."""
        if self.record_finder.find_uids_of_demo_be_groups():
            logger.info("Demo backend groups exist, skipping accounts")
            return False

        group_uids: List[int] = []
        for position in (1, 2):
            group_uids.append(
                self.data_handler.insert_row(
                    "be_groups",
                    {
                        "pid": 0,
                        "title": f"styleguide demo group {position}",
                        "hidden": 1,
                        DEMO_RECORD_FIELD: 1,
                    },
                )
            )

        users = [
            ("styleguide demo user 1", 0, ",".join(str(uid) for uid in group_uids)),
            ("styleguide demo user 2", 1, ""),
        ]
        for username, admin, usergroup in users:
            self.data_handler.insert_row(
                "be_users",
                {
                    "pid": 0,
                    "username": username,
                    # never stored or reused, the account is only meant to exist
                    "password": self.password_hasher.get_hashed_password(generate_random_bytes(10)),
                    "admin": admin,
                    "disable": 1,
                    "usergroup": usergroup,
                    DEMO_RECORD_FIELD: 1,
                },
            )
        logger.info("Created demo backend groups %s and 2 users", group_uids)
        return True

    def ensure_baseline_assets(self) -> bool:
        """Create the asset folder and copy the sample images. Returns False if the folder existed."""
        root = self.storage.get_root_level_folder()
        try:
            folder = root.create_folder(self.folder_name)
        except ExistingTargetFolderError:
            logger.info("Asset folder %s exists, skipping sample images", self.folder_name)
            return False

        for name in SAMPLE_IMAGES:
            folder.add_file(self.image_dir / name, name=name, conflict_mode=DuplicationBehavior.RENAME)
        logger.info("Copied %d sample images to %s", len(SAMPLE_IMAGES), folder)
        return True
