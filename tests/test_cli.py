# tests/test_cli.py
from __future__ import annotations

import pytest
import sqlalchemy as sa
from typer.testing import CliRunner

from styleguide import __version__
from styleguide.cli import app

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a throwaway sqlite file and fileadmin directory."""
    monkeypatch.chdir(tmp_path)
    db_url = f"sqlite:///{tmp_path / 'styleguide.db'}"
    monkeypatch.setenv("STYLEGUIDE_DATABASE_URL", db_url)
    monkeypatch.setenv("STYLEGUIDE_FILEADMIN_DIR", str(tmp_path / "fileadmin"))
    monkeypatch.setenv("STYLEGUIDE_PASSWORD_HASH_ITERATIONS", "1")
    monkeypatch.delenv("STYLEGUIDE_TCA_DIRS", raising=False)
    return {"db_url": db_url, "fileadmin": tmp_path / "fileadmin"}


def _page_count(db_url: str) -> int:
    engine = sa.create_engine(db_url)
    try:
        with engine.connect() as conn:
            return conn.execute(sa.text("SELECT count(*) FROM pages")).scalar()
    finally:
        engine.dispose()


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_init_db_creates_tables(cli_env):
    result = runner.invoke(app, ["init-db"])
    assert result.exit_code == 0, result.output
    assert _page_count(cli_env["db_url"]) == 0


def test_create_then_delete(cli_env):
    result = runner.invoke(app, ["create"])
    assert result.exit_code == 0, result.output
    assert "Populated tables" in result.output
    assert _page_count(cli_env["db_url"]) > 1
    assert (cli_env["fileadmin"] / "styleguide").is_dir()

    result = runner.invoke(app, ["delete"])
    assert result.exit_code == 0, result.output
    assert _page_count(cli_env["db_url"]) == 0
    assert not (cli_env["fileadmin"] / "styleguide").exists()


def test_tables_lists_registry(cli_env):
    result = runner.invoke(app, ["tables"])
    assert result.exit_code == 0, result.output
    assert "TCA tables" in result.output


def test_broken_tca_dir_exits_with_error(cli_env, tmp_path, monkeypatch):
    monkeypatch.setenv("STYLEGUIDE_TCA_DIRS", str(tmp_path / "missing"))
    result = runner.invoke(app, ["create"])
    assert result.exit_code == 1
    assert "schema_invalid" in result.output
