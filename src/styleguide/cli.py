# src/styleguide/cli.py
"""
Command line interface.

    styleguide init-db     create the pages/accounts tables and every TCA table
    styleguide create      build a demo page tree and fill it
    styleguide delete      remove every demo tree, demo account and the asset folder
    styleguide tables      list the TCA tables and how they are classified
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from sqlalchemy import Engine, MetaData

from styleguide import __version__
from styleguide.app_logger import get_logger, setup_logging
from styleguide.core.config import Settings, get_settings
from styleguide.db.session import create_db_engine, get_sessionmaker, init_db, session_scope
from styleguide.exceptions import StyleguideError
from styleguide.generator import Generator, build_generator, classify
from styleguide.tca import SchemaRegistry

logger = get_logger(__name__)
console = Console()

app = typer.Typer(
    name="styleguide",
    help="styleguide - demo page trees and records for TCA form configuration",
    no_args_is_help=True,
)


def _load(cfg: Settings) -> Tuple[SchemaRegistry, MetaData, Engine]:
    registry = SchemaRegistry.default(cfg.TCA_DIRS)
    metadata = registry.build_metadata()
    engine = create_db_engine(cfg=cfg)
    return registry, metadata, engine


@contextmanager
def _generator(cfg: Settings) -> Iterator[Generator]:
    registry, metadata, engine = _load(cfg)
    init_db(engine, metadata)
    try:
        with session_scope(get_sessionmaker(engine)) as session:
            yield build_generator(session, metadata, registry, cfg=cfg)
    finally:
        engine.dispose()


def _fail(error: StyleguideError) -> None:
    logger.debug("Command failed: %s", error.to_dict())
    console.print(f"[red]❌ {error.message}[/red] [dim]({error.error_code})[/dim]")
    raise typer.Exit(1)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    setup_logging(log_level or get_settings().LOG_LEVEL)


@app.command()
def version() -> None:
    """Show the installed version."""
    console.print(f"styleguide {__version__}")


@app.command("init-db")
def init_db_command() -> None:
    """Create all tables in the configured database."""
    cfg = get_settings()
    try:
        _, metadata, engine = _load(cfg)
        init_db(engine, metadata)
        engine.dispose()
    except StyleguideError as e:
        _fail(e)
    console.print(f"✅ [bold green]{len(metadata.tables)} tables ready[/bold green] in {cfg.DATABASE_URL}")


@app.command()
def create() -> None:
    """Create a demo page tree with records for every main table."""
    cfg = get_settings()
    try:
        with _generator(cfg) as generator:
            tables = generator.create()
    except StyleguideError as e:
        _fail(e)

    table = Table(title="Populated tables")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Table", style="cyan")
    for position, name in enumerate(tables, start=1):
        table.add_row(str(position), name)
    console.print(table)
    console.print(Panel(f"Demo data created in {cfg.DATABASE_URL}", style="green"))


@app.command()
def delete() -> None:
    """Delete all demo page trees, accounts, groups and the asset folder."""
    cfg = get_settings()
    try:
        with _generator(cfg) as generator:
            generator.delete()
    except StyleguideError as e:
        _fail(e)
    console.print("🧹 [bold]Demo data deleted[/bold]")


@app.command()
def tables() -> None:
    """List the TCA tables with their main/child classification."""
    cfg = get_settings()
    try:
        registry = SchemaRegistry.default(cfg.TCA_DIRS)
    except StyleguideError as e:
        _fail(e)

    table = Table(title="TCA tables")
    table.add_column("Table", style="cyan")
    table.add_column("Kind")
    table.add_column("Main table", style="dim")
    table.add_column("Title")
    for name in registry.table_names():
        if name == cfg.STATIC_TABLE:
            kind, owner = "main (first)", ""
        else:
            result = classify(name, cfg.TABLE_PREFIXES, reserved=cfg.STATIC_TABLE)
            kind, owner = result.kind.value, result.owner or ""
        table.add_row(name, kind, owner, registry.get(name).title)
    console.print(table)


if __name__ == "__main__":
    app()
