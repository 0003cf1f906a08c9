# src/styleguide/generator/__init__.py
from .field_generator import FieldGenerator
from .generator import Generator, build_generator
from .page_tree import TreeBuilder
from .record_finder import ENTRY_PAGE_MARKER, RecordFinder
from .remover import Remover
from .tables import TableClassification, TableKind, classify, main_tables, page_title_for
from .third_party import ThirdPartyPopulator

__all__ = [
    "Generator",
    "build_generator",
    "FieldGenerator",
    "TreeBuilder",
    "RecordFinder",
    "ENTRY_PAGE_MARKER",
    "Remover",
    "ThirdPartyPopulator",
    "TableClassification",
    "TableKind",
    "classify",
    "main_tables",
    "page_title_for",
]
