# src/styleguide/services/storage.py
"""
Local filesystem asset storage.

A storage is a root directory; folders are addressed by their identifier
relative to that root (``/`` is the root level folder, ``/styleguide/`` a
sub folder).
"""
from __future__ import annotations

import re
import shutil
from enum import Enum
from pathlib import Path
from typing import List, Protocol, runtime_checkable

from styleguide.app_logger import get_logger
from styleguide.exceptions import (
    ExistingTargetFolderError,
    FileOperationError,
    FolderDoesNotExistError,
)

logger = get_logger(__name__)

_VALID_NAME = re.compile(r"^[^/\\\x00]+$")


class DuplicationBehavior(str, Enum):
    """What ``add_file`` does when the target name is taken."""
    RENAME = "rename"
    REPLACE = "replace"
    CANCEL = "cancel"


@runtime_checkable
class AssetStorage(Protocol):
    def get_root_level_folder(self) -> "Folder": ...


def _check_name(name: str) -> str:
    if not name or name in (".", "..") or not _VALID_NAME.match(name):
        raise FileOperationError(f"Invalid file or folder name '{name}'", path=name, operation="validate")
    return name


class Folder:
    def __init__(self, storage: "LocalStorage", identifier: str) -> None:
        self.storage = storage
        self.identifier = identifier if identifier.endswith("/") else identifier + "/"

    @property
    def name(self) -> str:
        return self.identifier.rstrip("/").rsplit("/", 1)[-1]

    @property
    def path(self) -> Path:
        return self.storage.root / self.identifier.strip("/")

    def exists(self) -> bool:
        return self.path.is_dir()

    def has_folder(self, name: str) -> bool:
        return (self.path / name).is_dir()

    def create_folder(self, name: str) -> "Folder":
        """Create a sub folder; raises :class:`ExistingTargetFolderError` if it is there already."""
        target = self.path / _check_name(name)
        if target.exists():
            raise ExistingTargetFolderError(self.identifier + name + "/")
        target.mkdir(parents=True)
        logger.debug("Created folder %s", target)
        return Folder(self.storage, self.identifier + name + "/")

    def get_subfolder(self, name: str) -> "Folder":
        identifier = self.identifier + _check_name(name) + "/"
        if not self.has_folder(name):
            raise FolderDoesNotExistError(identifier)
        return Folder(self.storage, identifier)

    def delete(self, recursive: bool = True) -> None:
        if self.identifier == "/":
            raise FileOperationError("Refusing to delete the storage root", path=str(self.path), operation="delete")
        if not self.exists():
            raise FolderDoesNotExistError(self.identifier)
        if recursive:
            shutil.rmtree(self.path)
        else:
            try:
                self.path.rmdir()
            except OSError as e:
                raise FileOperationError(
                    f"Folder '{self.identifier}' is not empty", path=str(self.path), operation="delete", cause=e
                ) from e
        logger.info("Deleted folder %s", self.identifier)

    def get_files(self) -> List[Path]:
        if not self.exists():
            return []
        return sorted(p for p in self.path.iterdir() if p.is_file())

    def add_file(
        self,
        source: Path | str,
        name: str | None = None,
        conflict_mode: DuplicationBehavior = DuplicationBehavior.RENAME,
    ) -> Path:
        """Copy ``source`` into this folder and return the stored path."""
        source = Path(source)
        if not source.is_file():
            raise FileOperationError(f"Source file '{source}' not found", path=str(source))
        if not self.exists():
            raise FolderDoesNotExistError(self.identifier)

        target = self.path / _check_name(name or source.name)
        if target.exists():
            if conflict_mode is DuplicationBehavior.CANCEL:
                raise FileOperationError(f"File '{target.name}' already exists", path=str(target))
            if conflict_mode is DuplicationBehavior.RENAME:
                target = self._available_name(target)

        shutil.copyfile(source, target)
        logger.debug("Stored %s as %s", source.name, target)
        return target

    @staticmethod
    def _available_name(target: Path) -> Path:
        # bus_lane.jpg -> bus_lane_01.jpg -> bus_lane_02.jpg ...
        for i in range(1, 100):
            candidate = target.with_name(f"{target.stem}_{i:02d}{target.suffix}")
            if not candidate.exists():
                return candidate
        raise FileOperationError(f"No free file name for '{target.name}'", path=str(target))

    def __repr__(self) -> str:
        return f"<Folder {self.identifier} in {self.storage.root}>"


class LocalStorage:
    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def get_root_level_folder(self) -> Folder:
        self.root.mkdir(parents=True, exist_ok=True)
        return Folder(self, "/")
