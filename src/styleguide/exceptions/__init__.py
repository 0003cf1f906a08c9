"""
styleguide exception hierarchy.

Every error raised by the generator, the data handler, the storage layer or
the TCA registry derives from :class:`StyleguideError`, which carries a
machine-readable ``error_code`` and a structured ``context`` for logging.
"""

from datetime import datetime, timezone
from typing import Optional, Dict, Any


class StyleguideError(Exception):
    """
    Base exception class for all styleguide errors.

    Attributes
    ----------
    message : str
        Human-readable error message
    error_code : str
        Machine-readable error code for categorization
    context : Dict[str, Any]
        Additional error context and metadata
    timestamp : datetime
        When the error occurred
    cause : Optional[Exception]
        Original exception that caused this error
    """

    def __init__(
        self,
        message: str,
        error_code: str = "styleguide_error",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = dict(context or {})  # Create a copy to avoid mutation
        self.timestamp = datetime.now(timezone.utc)
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary for logging and serialization.

        Returns
        -------
        Dict[str, Any]
            Structured error data with all metadata
        """
        return {
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "cause": str(self.cause) if self.cause else None,
            "exception_type": self.__class__.__name__,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}'"
            f")"
        )


# Import all exception types for convenient access
from .config_errors import (
    ConfigurationError,
    GeneratorNotFoundError,
    TableHandlerConfigurationError,
    SchemaError,
)
from .storage_errors import (
    StorageError,
    AlreadyExistsError,
    ExistingTargetFolderError,
    FolderDoesNotExistError,
    FileOperationError,
)
from .data_errors import (
    DataHandlerError,
    UnknownTableError,
    UnresolvedPlaceholderError,
    GenerationError,
)

__all__ = [
    "StyleguideError",
    # Configuration
    "ConfigurationError",
    "GeneratorNotFoundError",
    "TableHandlerConfigurationError",
    "SchemaError",
    # Storage
    "StorageError",
    "AlreadyExistsError",
    "ExistingTargetFolderError",
    "FolderDoesNotExistError",
    "FileOperationError",
    # Data handler
    "DataHandlerError",
    "UnknownTableError",
    "UnresolvedPlaceholderError",
    "GenerationError",
]
