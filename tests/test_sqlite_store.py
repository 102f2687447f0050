"""Tests for the SQLite template store."""

from datetime import UTC, datetime, timedelta

import pytest

from core import LogicKind, PrintRecord, StoreError, Template
from printanything.database import SqliteTemplateStore, get_db
from printanything.editor import EditingSession


@pytest.fixture
def store(tmp_path):
    return SqliteTemplateStore(tmp_path / "templates.db")


class TestSqliteTemplateStore:
    def test_missing_template(self, store):
        assert store.get_template("nope") is None

    def test_save_new_assigns_id(self, store, make_text):
        template_id = store.save_template(Template(id="new", name="Cheque", fields=(make_text(),)))
        assert template_id != "new"
        loaded = store.get_template(template_id)
        assert loaded.name == "Cheque"
        assert loaded.fields == (make_text(),)

    def test_overwrite(self, store):
        store.save_template(Template(id="t1", name="First"))
        store.save_template(Template(id="t1", name="Second", is_public=True))
        loaded = store.get_template("t1")
        assert loaded.name == "Second"
        assert loaded.is_public

    def test_chinese_text_survives(self, store, make_text):
        field = make_text(logic_kind=LogicKind.STATIC, raw_value="收據")
        store.save_template(Template(id="t1", name="收據", fields=(field,)))
        assert store.get_template("t1").fields[0].raw_value == "收據"

    def test_blank_name_rejected(self, store):
        with pytest.raises(StoreError):
            store.save_template(Template(id="t1", name=""))

    def test_list_owner_and_public(self, store):
        now = datetime.now(UTC)
        store.save_template(Template(id="a", name="Mine", owner_id="u1", updated_at=now))
        store.save_template(
            Template(id="b", name="Shared", owner_id="u2", is_public=True, updated_at=now + timedelta(1))
        )
        store.save_template(Template(id="c", name="Theirs", owner_id="u2", updated_at=now))
        assert [t.id for t in store.list_templates("u1")] == ["b", "a"]

    def test_delete(self, store):
        store.save_template(Template(id="t1", name="Gone"))
        assert store.delete_template("t1")
        assert not store.delete_template("t1")

    def test_unreadable_database_is_store_error(self, tmp_path):
        path = tmp_path / "not-a-db"
        path.write_bytes(b"garbage" * 100)
        with pytest.raises(StoreError):
            SqliteTemplateStore(path).get_template("x")

    def test_session_round_trip(self, store, today):
        session = EditingSession.new(owner_id="u1", today=today)
        session.rename("Receipt")
        session.add_text(LogicKind.CURRENCY_CHI, raw_value="10001")
        saved = session.save(store)
        assert saved.success

        other = EditingSession.new(today=today)
        assert other.load(store, saved.template_id).success
        assert other.fields[0].resolved_text == "壹萬零壹圓整"


def test_get_db_requires_path(monkeypatch):
    from printanything.config import get_settings

    monkeypatch.delenv("PRINTANYTHING_DATABASE_PATH", raising=False)
    get_settings.cache_clear()
    with pytest.raises(ValueError):
        with get_db():
            pass
    get_settings.cache_clear()


class TestSqlitePrintHistory:
    def test_save_and_list(self, store):
        now = datetime.now(UTC)
        store.save_print_record(
            PrintRecord(id="p1", template_id="t1", user_id="u1", data={"payee": "陳大文"}, created_at=now)
        )
        store.save_print_record(
            PrintRecord(id="p2", template_id="t2", user_id="u1", created_at=now + timedelta(1))
        )
        history = store.get_print_history(template_id="t1")
        assert [r.id for r in history] == ["p1"]
        assert history[0].data == {"payee": "陳大文"}
        assert [r.id for r in store.get_print_history(user_id="u1")] == ["p2", "p1"]
        assert len(store.get_print_history(limit=1)) == 1


class TestSqliteErrors:
    @pytest.fixture
    def broken(self, tmp_path):
        path = tmp_path / "not-a-db"
        path.write_bytes(b"garbage" * 100)
        return SqliteTemplateStore(path)

    def test_list_is_store_error(self, broken):
        with pytest.raises(StoreError):
            broken.list_templates()

    def test_delete_is_store_error(self, broken):
        with pytest.raises(StoreError):
            broken.delete_template("x")

    def test_print_history_is_store_error(self, broken):
        with pytest.raises(StoreError):
            broken.get_print_history(template_id="x")
        with pytest.raises(StoreError):
            broken.save_print_record(PrintRecord(id="p", template_id="x"))
