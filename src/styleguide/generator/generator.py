# src/styleguide/generator/generator.py
"""
Entry point: ``Generator.create()`` builds a complete demo tree,
``Generator.delete()`` removes every demo tree again.

Creation is not one transaction. The page tree, the accounts and each main
table are separate data handler batches; a failing table aborts ``create``
and leaves the batches before it in place.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, Type, Union

import sqlalchemy as sa
from sqlalchemy.orm import Session

from styleguide.app_logger import get_logger
from styleguide.core.config import Settings, get_settings
from styleguide.exceptions import GeneratorNotFoundError, TableHandlerConfigurationError
from styleguide.services.data_handler import DataHandler, SqlDataHandler
from styleguide.services.passwords import PasswordHasher, SaltedPasswordHasher
from styleguide.services.signals import UpdateSignals
from styleguide.services.storage import AssetStorage, LocalStorage
from styleguide.tca import SchemaRegistry

from .field_generator import FieldGenerator
from .page_tree import TreeBuilder
from .record_finder import RecordFinder
from .remover import Remover
from .table_handlers import DEFAULT_TABLE_HANDLERS, AbstractTableHandler, HandlerContext, TableHandler
from .tables import main_tables
from .third_party import ThirdPartyPopulator

logger = get_logger(__name__)

# handler classes are instantiated with the shared context, instances are used as given
HandlerLike = Union[Type[AbstractTableHandler], TableHandler]


class Generator:
    def __init__(
        self,
        data_handler: DataHandler,
        record_finder: RecordFinder,
        registry: SchemaRegistry,
        storage: AssetStorage,
        password_hasher: PasswordHasher,
        prefixes: Sequence[str],
        static_table: str = "tx_styleguide_staticdata",
        asset_folder: str = "styleguide",
        signals: Optional[UpdateSignals] = None,
        table_handlers: Optional[Sequence[HandlerLike]] = None,
    ) -> None:
        self.data_handler = data_handler
        self.record_finder = record_finder
        self.registry = registry
        self.prefixes = list(prefixes)
        self.static_table = static_table
        self.signals = signals or UpdateSignals()

        self.context = HandlerContext(
            data_handler=data_handler,
            record_finder=record_finder,
            registry=registry,
            field_generator=FieldGenerator(registry, record_finder, static_table=static_table),
            static_table=static_table,
        )
        self.tree_builder = TreeBuilder(data_handler, record_finder, self.signals)
        self.populator = ThirdPartyPopulator(
            data_handler, record_finder, storage, password_hasher, folder_name=asset_folder
        )
        self.remover = Remover(data_handler, record_finder, storage, self.signals, folder_name=asset_folder)
        self.table_handlers = [
            self._instantiate(handler)
            for handler in (DEFAULT_TABLE_HANDLERS if table_handlers is None else table_handlers)
        ]

    def _instantiate(self, handler: HandlerLike) -> TableHandler:
        if isinstance(handler, type):
            return handler(self.context)
        return handler

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------
    def main_tables(self) -> List[str]:
        return main_tables(self.registry.table_names(), self.prefixes, self.static_table)

    def handler_for(self, table_name: str) -> TableHandler:
        """First handler whose ``match`` accepts ``table_name``."""
        for handler in self.table_handlers:
            if not isinstance(handler, TableHandler):
                raise TableHandlerConfigurationError(handler)
            if handler.match(table_name):
                return handler
        raise GeneratorNotFoundError(table_name, handlers=self.table_handlers)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    def create(self) -> List[str]:
        """Build a new demo tree and fill it. Returns the populated main tables in order."""
        tables = self.main_tables()
        self.tree_builder.build(tables)

        self.populator.ensure_baseline_accounts()
        self.populator.ensure_baseline_assets()

        for table_name in tables:
            handler = self.handler_for(table_name)
            logger.debug("Populating %s with %s", table_name, type(handler).__name__)
            handler.handle(table_name)

        logger.info("Demo data created for %d tables", len(tables))
        return tables

    def delete(self) -> None:
        removed = self.remover.delete_all()
        logger.info("Demo data deleted: %s", removed or "nothing found")


def build_generator(
    session: Session,
    metadata: sa.MetaData,
    registry: SchemaRegistry,
    cfg: Optional[Settings] = None,
    storage: Optional[AssetStorage] = None,
    password_hasher: Optional[PasswordHasher] = None,
) -> Generator:
    """Wire a :class:`Generator` with the SQL data handler and the configured storage."""
    cfg = cfg or get_settings()
    return Generator(
        data_handler=SqlDataHandler(session, metadata, registry=registry),
        record_finder=RecordFinder(session, metadata),
        registry=registry,
        storage=storage or LocalStorage(cfg.FILEADMIN_DIR),
        password_hasher=password_hasher or SaltedPasswordHasher(cfg.PASSWORD_HASH_ITERATIONS),
        prefixes=cfg.TABLE_PREFIXES,
        static_table=cfg.STATIC_TABLE,
        asset_folder=cfg.ASSET_FOLDER,
    )
