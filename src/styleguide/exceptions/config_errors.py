"""
Configuration-related exceptions for styleguide.

These are programming or setup errors: a table with no matching handler, a
handler that does not implement the handler protocol, or a broken TCA file.
They are fatal and never retried.
"""

from typing import Optional, Dict, Any
from . import StyleguideError


class ConfigurationError(StyleguideError):
    """
    Base exception for configuration-related failures.
    """

    def __init__(
        self,
        message: str,
        config_section: Optional[str] = None,
        error_code: str = "config_error",
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        context = context or {}
        if config_section:
            context["config_section"] = config_section

        super().__init__(
            message=message,
            error_code=error_code,
            context=context,
            cause=cause,
        )
        self.config_section = config_section


class GeneratorNotFoundError(ConfigurationError):
    """
    Raised when no table handler matches a main table.

    Aborts ``create`` immediately; tables populated before the failing one
    are left in place.
    """

    def __init__(
        self,
        table_name: str,
        handlers: Optional[list] = None,
        message: Optional[str] = None,
    ) -> None:
        message = message or f"No table handler found for '{table_name}'"
        super().__init__(
            message=message,
            config_section="table_handlers",
            error_code="generator_not_found",
            context={
                "table_name": table_name,
                "handlers": [type(h).__name__ for h in handlers or []],
            },
        )
        self.table_name = table_name


class TableHandlerConfigurationError(ConfigurationError):
    """Raised when a configured table handler does not satisfy the handler protocol."""

    def __init__(self, handler: Any, message: Optional[str] = None) -> None:
        name = getattr(handler, "__name__", type(handler).__name__)
        message = message or f"Table handler {name} must implement match() and handle()"
        super().__init__(
            message=message,
            config_section="table_handlers",
            error_code="table_handler_invalid",
            context={"handler": name},
        )
        self.handler = handler


class SchemaError(ConfigurationError):
    """Raised when a TCA definition is missing or invalid."""

    def __init__(
        self,
        message: str,
        table_name: Optional[str] = None,
        source: Optional[str] = None,
        cause: Optional[Exception] = None,
    ) -> None:
        context: Dict[str, Any] = {}
        if table_name:
            context["table_name"] = table_name
        if source:
            context["source"] = source
        super().__init__(
            message=message,
            config_section="tca",
            error_code="schema_invalid",
            context=context,
            cause=cause,
        )
        self.table_name = table_name
        self.source = source
