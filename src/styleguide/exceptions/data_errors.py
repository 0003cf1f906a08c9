"""
Record mutation exceptions raised by the data handler.
"""

from typing import Optional, Dict, Any
from . import StyleguideError


class DataHandlerError(StyleguideError):
    """
    Base exception for datamap / cmdmap processing failures.

    Raising one of these inside a batch rolls the whole batch back.
    """

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        error_code: str = "data_handler_error",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        context = context or {}
        if table_name:
            context["table_name"] = table_name
        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            cause=cause,
        )
        self.table_name = table_name


class UnknownTableError(DataHandlerError):
    """The datamap or cmdmap names a table with no schema."""

    def __init__(self, table_name: str) -> None:
        super().__init__(
            message=f"Unknown table '{table_name}'",
            table_name=table_name,
            error_code="unknown_table",
        )


class UnresolvedPlaceholderError(DataHandlerError):
    """A placeholder id was referenced but never created in the batch."""

    def __init__(self, placeholder: str, table_name: Optional[str] = None, field: Optional[str] = None) -> None:
        context: Dict[str, Any] = {"placeholder": placeholder}
        if field:
            context["field"] = field
        super().__init__(
            message=f"Placeholder '{placeholder}' could not be resolved",
            table_name=table_name,
            error_code="placeholder_unresolved",
            context=context,
        )
        self.placeholder = placeholder
        self.field = field


class GenerationError(StyleguideError):
    """A table handler could not build its demo rows."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="generation_failed",
            context={"table_name": table_name} if table_name else None,
            cause=cause,
        )
        self.table_name = table_name
