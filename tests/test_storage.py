# tests/test_storage.py
from __future__ import annotations

import pytest

from styleguide.exceptions import (
    AlreadyExistsError,
    ExistingTargetFolderError,
    FileOperationError,
    FolderDoesNotExistError,
)
from styleguide.services.storage import DuplicationBehavior


@pytest.fixture
def source(tmp_path):
    path = tmp_path / "bus_lane.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0 not really a jpeg")
    return path


def test_create_folder_twice_raises_already_exists(storage):
    root = storage.get_root_level_folder()
    folder = root.create_folder("styleguide")
    assert folder.identifier == "/styleguide/"
    assert folder.exists()

    with pytest.raises(ExistingTargetFolderError) as exc:
        root.create_folder("styleguide")
    assert isinstance(exc.value, AlreadyExistsError)


def test_get_missing_subfolder(storage):
    with pytest.raises(FolderDoesNotExistError):
        storage.get_root_level_folder().get_subfolder("styleguide")


def test_add_file_renames_on_conflict(storage, source):
    folder = storage.get_root_level_folder().create_folder("styleguide")
    names = [folder.add_file(source).name for _ in range(3)]
    assert names == ["bus_lane.jpg", "bus_lane_01.jpg", "bus_lane_02.jpg"]
    assert [p.name for p in folder.get_files()] == sorted(names)
    assert source.exists()


def test_add_file_cancel_and_replace(storage, source):
    folder = storage.get_root_level_folder().create_folder("styleguide")
    folder.add_file(source)
    with pytest.raises(FileOperationError):
        folder.add_file(source, conflict_mode=DuplicationBehavior.CANCEL)
    folder.add_file(source, conflict_mode=DuplicationBehavior.REPLACE)
    assert len(folder.get_files()) == 1


def test_add_file_with_missing_source(storage, tmp_path):
    folder = storage.get_root_level_folder().create_folder("styleguide")
    with pytest.raises(FileOperationError):
        folder.add_file(tmp_path / "nope.jpg")


def test_recursive_delete(storage, source):
    root = storage.get_root_level_folder()
    folder = root.create_folder("styleguide")
    folder.add_file(source)
    folder.delete(recursive=True)
    assert not root.has_folder("styleguide")
    with pytest.raises(FolderDoesNotExistError):
        folder.delete()


def test_non_recursive_delete_of_filled_folder(storage, source):
    folder = storage.get_root_level_folder().create_folder("styleguide")
    folder.add_file(source)
    with pytest.raises(FileOperationError):
        folder.delete(recursive=False)


def test_root_folder_cannot_be_deleted(storage):
    with pytest.raises(FileOperationError):
        storage.get_root_level_folder().delete()


@pytest.mark.parametrize("name", ["", "..", "a/b"])
def test_invalid_folder_names(storage, name):
    with pytest.raises(FileOperationError):
        storage.get_root_level_folder().create_folder(name)
