# src/styleguide/generator/table_handlers/__init__.py
"""
Fixture strategies, one per table shape.

The generator asks each handler in ``DEFAULT_TABLE_HANDLERS`` order whether it
``match``es a main table and lets the first one ``handle`` it. ``GeneralHandler``
matches everything and has to stay last.
"""
from typing import List, Type

from .base import AbstractTableHandler, HandlerContext, TableHandler
from .general import GeneralHandler
from .inline_mn import InlineMnHandler
from .inline_mn_symmetric import InlineMnSymmetricHandler
from .static_data import StaticDataHandler

DEFAULT_TABLE_HANDLERS: List[Type[AbstractTableHandler]] = [
    StaticDataHandler,
    InlineMnHandler,
    InlineMnSymmetricHandler,
    GeneralHandler,
]

__all__ = [
    "AbstractTableHandler",
    "HandlerContext",
    "TableHandler",
    "StaticDataHandler",
    "InlineMnHandler",
    "InlineMnSymmetricHandler",
    "GeneralHandler",
    "DEFAULT_TABLE_HANDLERS",
]
