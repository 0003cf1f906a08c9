"""
Storage and file operation exceptions for styleguide.
"""

from typing import Optional, Dict, Any
from . import StyleguideError


class StorageError(StyleguideError):
    """
    Base exception for asset storage failures.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: str = "storage_error",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        context = context or {}
        if path:
            context["path"] = path
        if operation:
            context["operation"] = operation

        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            cause=cause,
        )
        self.path = path
        self.operation = operation


class AlreadyExistsError(StorageError):
    """A folder or file that should be created is already present."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: Optional[str] = None,
        error_code: str = "already_exists",
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            operation=operation,
            error_code=error_code,
        )


class ExistingTargetFolderError(AlreadyExistsError):
    """Raised by ``Folder.create_folder`` when the target folder exists."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Folder '{path}' already exists",
            path=path,
            operation="create_folder",
            error_code="folder_exists",
        )


class FolderDoesNotExistError(StorageError):
    """Raised by ``Folder.get_subfolder`` when the folder is missing."""

    def __init__(self, path: str) -> None:
        super().__init__(
            message=f"Folder '{path}' does not exist",
            path=path,
            operation="get_subfolder",
            error_code="folder_missing",
        )


class FileOperationError(StorageError):
    """
    Raised when a file cannot be added to a folder.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        operation: str = "add_file",
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message=message,
            path=path,
            operation=operation,
            error_code="file_operation_failed",
            cause=cause,
        )
