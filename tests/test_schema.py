# tests/test_schema.py
from __future__ import annotations

import pytest
import sqlalchemy as sa

from styleguide.exceptions import ConfigurationError, SchemaError
from styleguide.tca import DEMO_RECORD_FIELD, SchemaRegistry


def test_bundled_tables_are_loaded_in_file_order(registry):
    names = registry.table_names()
    assert names == sorted(names)
    assert "tx_styleguide_staticdata" in registry
    assert len(registry) == 14


def test_columns_and_title(registry):
    rte = registry.get("tx_styleguide_elements_rte")
    assert rte.title == "Form engine elements - rte"
    assert rte.columns["rte_1"].is_richtext
    assert rte.columns["rte_flex_1"].config.type == "flex"
    assert registry.columns("tx_styleguide_elements_basic")["input_3"].config.evals == ["int"]


def test_unknown_table(registry):
    with pytest.raises(SchemaError) as exc:
        registry.get("tx_nope")
    assert isinstance(exc.value, ConfigurationError)
    assert exc.value.context["table_name"] == "tx_nope"


def test_metadata_holds_host_and_tca_tables(metadata, registry):
    assert {"pages", "be_users", "be_groups"} <= set(metadata.tables)
    for name in registry.table_names():
        table = metadata.tables[name]
        for column in ("uid", "pid", "sorting", "hidden", "tstamp", "crdate", DEMO_RECORD_FIELD):
            assert column in table.c

    mm = metadata.tables["tx_styleguide_inline_mn_mm"]
    assert isinstance(mm.c.parentid.type, sa.Integer)
    assert isinstance(metadata.tables["tx_styleguide_elements_basic"].c.input_1.type, sa.String)


def test_extra_directory_overrides_and_adds(tmp_path):
    (tmp_path / "tx_styleguide_custom.yaml").write_text(
        "ctrl:\n  title: Custom\ncolumns:\n  input_1:\n    config:\n      type: input\n",
        encoding="utf-8",
    )
    registry = SchemaRegistry.default([tmp_path])
    assert registry.table_names()[-1] == "tx_styleguide_custom"
    assert registry.get("tx_styleguide_custom").title == "Custom"


def test_invalid_yaml(tmp_path):
    (tmp_path / "tx_broken.yaml").write_text("columns: [unclosed\n", encoding="utf-8")
    with pytest.raises(SchemaError):
        SchemaRegistry.from_directories([tmp_path])


def test_column_without_config_type(tmp_path):
    registry = SchemaRegistry()
    with pytest.raises(SchemaError):
        registry.register("tx_bad", {"columns": {"input_1": {"config": {}}}})


def test_unknown_db_type():
    registry = SchemaRegistry()
    registry.register("tx_bad", {"columns": {"c": {"config": {"type": "passthrough"}, "db": "blob"}}})
    with pytest.raises(SchemaError):
        registry.define_table("tx_bad", sa.MetaData())


def test_missing_directory(tmp_path):
    with pytest.raises(SchemaError):
        SchemaRegistry.from_directories([tmp_path / "missing"])


def test_reference_columns_follow_relations(registry):
    assert registry.reference_columns("tx_styleguide_inline_mnsymmetric_mm") == {"hotelid", "branchid"}
    assert registry.reference_columns("tx_styleguide_inline_mnsymmetric") == {"branches"}
    child = registry.reference_columns("tx_styleguide_inline_1n_child")
    assert {"parentid", "select_1"} <= child
    assert "parenttable" not in child
    assert "input_1" not in child


def test_undeclared_config_keys_are_kept(registry):
    cfg = registry.get("tx_styleguide_inline_mn").columns["inline_1"].config
    assert cfg.model_extra["foreign_sortby"] == "parentsort"
