# tests/test_generator.py
from __future__ import annotations

import pytest
import sqlalchemy as sa

from styleguide.db.models import BackendGroup, BackendUser, Page
from styleguide.exceptions import (
    ConfigurationError,
    GeneratorNotFoundError,
    TableHandlerConfigurationError,
    UnresolvedPlaceholderError,
)
from styleguide.generator import ENTRY_PAGE_MARKER, Generator
from styleguide.generator.table_handlers import StaticDataHandler
from styleguide.generator.third_party import SAMPLE_IMAGES
from styleguide.services.data_handler import new_placeholder_id
from styleguide.tca import DEMO_RECORD_FIELD

STATIC = "tx_styleguide_staticdata"


def _count(session, table, *where):
    stmt = sa.select(sa.func.count()).select_from(table)
    for clause in where:
        stmt = stmt.where(clause)
    return session.execute(stmt).scalar()


def _demo_rows(session, metadata):
    total = 0
    for table in metadata.tables.values():
        if DEMO_RECORD_FIELD in table.c:
            total += _count(session, table, table.c[DEMO_RECORD_FIELD] == 1)
    return total


# ----------------------------------------------------------------------
# create
# ----------------------------------------------------------------------
def test_create_builds_tree_in_table_order(generator, session):
    tables = generator.create()
    assert tables[0] == STATIC

    (root,) = session.scalars(sa.select(Page).where(Page.tx_styleguide_containsdemo == ENTRY_PAGE_MARKER)).all()
    assert root.pid == 0
    assert root.is_siteroot == 1
    assert root.title == "styleguide TCA demo"

    children = session.scalars(sa.select(Page).where(Page.pid == root.uid).order_by(Page.sorting)).all()
    assert [p.tx_styleguide_containsdemo for p in children] == tables
    assert children[1].title == "elements basic"
    assert "updatePageTree" in generator.signals.pending


def test_create_places_root_before_existing_pages(generator, data_handler, session):
    uid = data_handler.insert_row("pages", {"pid": 0, "title": "existing", "sorting": 100})
    generator.create()
    top_level = session.scalars(sa.select(Page).where(Page.pid == 0).order_by(Page.sorting)).all()
    assert [p.title for p in top_level] == ["styleguide TCA demo", "existing"]
    assert top_level[0].sorting == 100 - 256
    assert top_level[1].uid == uid


def test_every_record_lives_on_its_main_table_page(generator, session, metadata):
    generator.create()
    pages = {p.tx_styleguide_containsdemo: p.uid for p in session.scalars(sa.select(Page))}

    for main_table in generator.main_tables():
        table = metadata.tables[main_table]
        rows = session.execute(sa.select(table.c.pid, table.c[DEMO_RECORD_FIELD])).all()
        assert rows, main_table
        assert {r.pid for r in rows} == {pages[main_table]}
        assert all(r[1] == 1 for r in rows)


def test_create_seeds_accounts_and_assets(generator, session, storage):
    generator.create()

    groups = session.scalars(sa.select(BackendGroup).order_by(BackendGroup.uid)).all()
    users = session.scalars(sa.select(BackendUser).order_by(BackendUser.uid)).all()
    assert [g.title for g in groups] == ["styleguide demo group 1", "styleguide demo group 2"]
    assert all(g.hidden == 1 and g.tx_styleguide_isdemorecord == 1 for g in groups)

    regular, admin = users
    assert (regular.admin, admin.admin) == (0, 1)
    assert regular.group_uids == [g.uid for g in groups]
    assert admin.usergroup == ""
    assert all(u.disable == 1 and u.tx_styleguide_isdemorecord == 1 for u in users)
    assert regular.password != admin.password
    assert regular.password.startswith("$pbkdf2-sha256$")

    folder = storage.get_root_level_folder().get_subfolder("styleguide")
    assert sorted(p.name for p in folder.get_files()) == sorted(SAMPLE_IMAGES)


def test_second_create_appends_tree_but_not_accounts(generator, session, record_finder):
    generator.create()
    generator.create()
    assert len(record_finder.find_uids_of_entry_pages()) == 2
    assert len(record_finder.find_uids_of_demo_be_groups()) == 2
    assert len(record_finder.find_uids_of_demo_be_users()) == 2


def test_ensure_baseline_accounts_is_idempotent(generator, record_finder):
    assert generator.populator.ensure_baseline_accounts() is True
    assert generator.populator.ensure_baseline_accounts() is False
    assert len(record_finder.find_uids_of_demo_be_groups()) == 2
    assert len(record_finder.find_uids_of_demo_be_users()) == 2


def test_existing_asset_folder_is_left_alone(generator, storage):
    storage.get_root_level_folder().create_folder("styleguide")
    assert generator.populator.ensure_baseline_assets() is False
    assert storage.get_root_level_folder().get_subfolder("styleguide").get_files() == []


def test_no_matching_handler_aborts_create_keeping_earlier_tables(generator, session, metadata):
    generator.table_handlers = [StaticDataHandler(generator.context)]

    with pytest.raises(ConfigurationError) as exc:
        generator.create()
    assert isinstance(exc.value, GeneratorNotFoundError)
    assert exc.value.table_name == "tx_styleguide_elements_basic"

    assert _count(session, metadata.tables[STATIC]) == 4
    assert _count(session, metadata.tables["tx_styleguide_elements_basic"]) == 0


def test_invalid_handler_is_a_configuration_error(generator):
    generator.table_handlers = [object()]
    with pytest.raises(TableHandlerConfigurationError):
        generator.handler_for(STATIC)


def test_handler_instances_are_used_as_given(generator):
    class Recorder:
        def __init__(self):
            self.handled = []

        def match(self, table_name):
            return True

        def handle(self, table_name):
            self.handled.append(table_name)

    recorder = Recorder()
    generator.table_handlers = [recorder]
    tables = generator.create()
    assert recorder.handled == tables


def test_handler_classes_and_instances_can_be_mixed(
    data_handler, record_finder, registry, storage, password_hasher, settings
):
    class Fallback:
        def match(self, table_name):
            return True

        def handle(self, table_name):
            pass

    fallback = Fallback()
    generator = Generator(
        data_handler=data_handler,
        record_finder=record_finder,
        registry=registry,
        storage=storage,
        password_hasher=password_hasher,
        prefixes=settings.TABLE_PREFIXES,
        table_handlers=[StaticDataHandler, fallback],
    )
    static, rest = generator.table_handlers
    assert isinstance(static, StaticDataHandler)
    assert static.context is generator.context
    assert rest is fallback
    assert generator.handler_for(STATIC) is static
    assert generator.handler_for("tx_styleguide_elements_basic") is fallback


# ----------------------------------------------------------------------
# delete
# ----------------------------------------------------------------------
def test_delete_removes_everything_marked(generator, session, metadata, storage):
    generator.create()
    generator.create()
    generator.delete()

    assert _demo_rows(session, metadata) == 0
    assert _count(session, Page.__table__) == 0
    assert not storage.get_root_level_folder().has_folder("styleguide")


def test_delete_keeps_unmarked_data(generator, data_handler, session, metadata):
    keep = data_handler.insert_row("pages", {"pid": 0, "title": "mine"})
    data_handler.insert_row(STATIC, {"pid": keep, "value_1": "mine"})
    generator.create()
    generator.delete()

    assert [p.title for p in session.scalars(sa.select(Page))] == ["mine"]
    assert _count(session, metadata.tables[STATIC]) == 1


def test_delete_without_demo_data_is_a_no_op(generator, storage):
    generator.delete()
    assert generator.signals.pending == []
    assert not storage.get_root_level_folder().has_folder("styleguide")


def test_delete_removes_asset_folder_even_without_rows(generator, storage):
    storage.get_root_level_folder().create_folder("styleguide")
    generator.delete()
    assert not storage.get_root_level_folder().has_folder("styleguide")


def test_remover_cmdmap_covers_pages_users_groups(generator):
    generator.create()
    cmdmap = generator.remover.build_cmdmap()
    assert set(cmdmap) == {"pages", "be_users", "be_groups"}
    assert all(cmd == {"delete": 1} for records in cmdmap.values() for cmd in records.values())


def test_placeholders_are_not_shared_between_batches(generator, data_handler):
    subs = generator.tree_builder.build([STATIC])
    # placeholders of an earlier batch mean nothing to a later one
    stale = next(iter(subs))
    with pytest.raises(UnresolvedPlaceholderError):
        data_handler.process_datamap({"pages": {new_placeholder_id(): {"pid": stale}}})


def test_update_signals_are_collected_once(signals):
    signals.set_update_signal("updatePageTree")
    signals.set_update_signal("updatePageTree")
    pending = signals.pending
    assert pending == ["updatePageTree"]
    pending.append("other")
    assert signals.pending == ["updatePageTree"]
