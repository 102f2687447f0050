"""Tests for the editing session."""

import pytest

from core import LogicKind, StoreError, Template, TemplateNotFoundError
from printanything.database import MemoryTemplateStore
from printanything.editor import EditingSession, RecentNames


@pytest.fixture
def session(today):
    return EditingSession.new(owner_id="user-1", today=today)


class FailingStore:
    """Store whose backend is unavailable."""

    def get_template(self, template_id):
        raise StoreError("connection refused", template_id=template_id)

    def save_template(self, template):
        raise StoreError("connection refused", template_id=template.id)

    def save_print_record(self, record):
        raise StoreError("connection refused", template_id=record.template_id)


class RaisingNotFoundStore(FailingStore):
    def get_template(self, template_id):
        raise TemplateNotFoundError(template_id)


class TestEdits:
    def test_new_session(self, session):
        assert session.is_new
        assert session.fields == ()
        assert len(session.history) == 1

    def test_added_field_is_resolved(self, session):
        added = session.add_text(LogicKind.CURRENCY_ENG, variable_key="amount")
        assert added.resolved_text == (
            "One Thousand Two Hundred Thirty Four Dollars And Fifty Six Cents"
        )

    def test_update_re_resolves(self, session):
        added = session.add_text(LogicKind.CURRENCY_NUM)
        session.update(added.id, raw_value="99")
        assert session.fields[0].resolved_text == "99.00"

    def test_undo_redo(self, session):
        session.add_text()
        session.add_image("data:x", 100, 100)
        assert session.undo()
        assert len(session.fields) == 1
        assert session.redo()
        assert len(session.fields) == 2
        assert not session.redo()

    def test_drag_records_once(self, session):
        added = session.add_text()
        before = len(session.history)
        session.move(added.id, 60, 60, record=False)
        session.move(added.id, 70, 70, record=False)
        assert len(session.history) == before
        session.move(added.id, 70, 70)
        assert len(session.history) == before + 1
        session.undo()
        assert (session.fields[0].x, session.fields[0].y) == (50, 50)

    def test_noop_edit_not_recorded(self, session):
        session.add_text()
        before = len(session.history)
        session.delete("missing")
        assert len(session.history) == before

    def test_settings_and_metadata(self, session):
        settings = session.update_settings(width_unit=100)
        assert settings.width == 378
        session.rename("Receipt")
        session.set_public(True)
        assert session.template.name == "Receipt"
        assert session.template.is_public


class TestBindings:
    def test_bindings_update_text(self, session):
        session.add_text(LogicKind.VARIABLE, variable_key="payee")
        assert session.fields[0].resolved_text == "{{payee}}"
        assert session.set_bindings({"payee": "Acme"})
        assert session.fields[0].resolved_text == "Acme"
        assert not session.set_bindings({"payee": "Acme"})
        assert session.clear_bindings()
        assert session.fields[0].resolved_text == "{{payee}}"

    def test_bindings_not_recorded(self, session):
        session.add_text(LogicKind.VARIABLE, variable_key="payee")
        before = len(session.history)
        session.set_bindings({"payee": "Acme"})
        assert len(session.history) == before

    def test_undo_uses_current_bindings(self, session):
        first = session.add_text(LogicKind.VARIABLE, variable_key="payee")
        session.add_text()
        session.set_bindings({"payee": "Acme"})
        session.undo()
        assert session.fields == (session.fields[0],)
        assert session.fields[0].id == first.id
        assert session.fields[0].resolved_text == "Acme"

    def test_refresh_date(self, session, today):
        session.add_text(LogicKind.DATE)
        assert session.fields[0].resolved_text == "2026-10-18"
        assert session.refresh(today.replace(day=19))
        assert session.fields[0].resolved_text == "2026-10-19"


class TestStorage:
    def test_save_assigns_id_and_load_round_trips(self, session, today):
        store = MemoryTemplateStore()
        session.rename("Cheque")
        session.add_text(LogicKind.CURRENCY_CHI, raw_value="100")

        result = session.save(store)
        assert result.success
        assert result.template_id != "new"
        assert not session.is_new

        other = EditingSession.new(today=today)
        loaded = other.load(store, result.template_id)
        assert loaded.success
        assert other.template.name == "Cheque"
        assert other.fields == session.fields
        assert len(other.history) == 1

    def test_load_not_found(self, session):
        result = session.load(MemoryTemplateStore(), "missing")
        assert not result.success
        assert result.not_found

    def test_load_not_found_raised_by_store(self, session):
        result = session.load(RaisingNotFoundStore(), "gone")
        assert result.not_found

    def test_load_failure_leaves_session(self, session):
        session.add_text()
        fields = session.fields
        result = session.load(FailingStore(), "abc")
        assert not result.success
        assert not result.not_found
        assert "connection refused" in result.error
        assert session.fields is fields

    def test_save_failure(self, session):
        result = session.save(FailingStore())
        assert not result.success
        assert session.is_new

    def test_save_requires_name(self, session):
        session.rename("  ")
        result = session.save(MemoryTemplateStore())
        assert not result.success


class TestPayloads:
    def test_render_payload_images_first(self, session):
        session.add_text(raw_value="Hi")
        session.add_image("data:x", 100, 50)
        payload = session.render_payload()
        assert [entry["kind"] for entry in payload] == ["image", "text"]
        assert payload[0]["opacity"] == 0.5
        assert payload[1]["text"] == "Hi"
        assert payload[1]["style"]["font_family"] == "Arial"

    def test_print_payload_leaves_session_untouched(self, session):
        session.add_text(LogicKind.BOUND_NAME, raw_value="Default", variable_key="client")
        fields = session.fields
        payload = session.print_payload({"client": "Chan Tai Man"})
        assert payload[0]["text"] == "Chan Tai Man"
        assert session.fields is fields
        assert session.bindings == {}
        assert "Chan Tai Man" in session.recent_names


class TestRecentNames:
    def test_most_recent_first_without_duplicates(self):
        names = RecentNames()
        assert names.add("Alice")
        assert names.add("Bob")
        assert not names.add("Alice")
        assert not names.add("   ")
        assert list(names) == ["Bob", "Alice"]

    def test_limit(self):
        names = RecentNames((f"n{i}" for i in range(5)), limit=3)
        assert list(names) == ["n4", "n3", "n2"]

    def test_empty_instance_is_used(self, today):
        names = RecentNames()
        session = EditingSession(Template(id="new"), today=today, recent_names=names)
        assert session.recent_names is names


class TestHistoryMatchesLiveFields:
    """After undo/redo the current history entry is the live collection."""

    def test_undo_redo_after_binding_change(self, session):
        session.add_text(LogicKind.VARIABLE, variable_key="payee")
        session.add_text()
        session.set_bindings({"payee": "Acme"})
        assert session.history.current == session.fields

        session.undo()
        assert session.fields[0].resolved_text == "Acme"
        assert session.history.current == session.fields

        session.redo()
        assert session.history.current == session.fields

    def test_refresh_updates_current_entry(self, session, today):
        session.add_text(LogicKind.DATE)
        session.refresh(today.replace(day=19))
        assert session.history.current == session.fields

    def test_binding_during_drag_keeps_pre_drag_entry(self, session):
        added = session.add_text(LogicKind.VARIABLE, variable_key="payee")
        session.move(added.id, 80, 80, record=False)
        session.set_bindings({"payee": "Acme"})
        assert session.history.current[0].x == 50
        assert session.history.current[0].resolved_text == "Acme"


class TestPrintRecords:
    def test_print_values_are_text(self, session):
        session.add_text(LogicKind.VARIABLE, variable_key="n")
        payload = session.print_payload({"n": 5})
        assert payload[0]["text"] == "5"
        assert isinstance(payload[0]["text"], str)

    def test_record_and_reapply(self, session):
        store = MemoryTemplateStore()
        session.rename("Cheque")
        session.add_text(LogicKind.VARIABLE, variable_key="payee")
        session.save(store)

        record = session.record_print(store, {"payee": "Acme", "amount": 12}, user_id="user-1")
        assert record.data == {"payee": "Acme", "amount": "12"}
        assert store.get_print_history(template_id=session.template.id) == [record]

        assert session.apply_print_record(record)
        assert session.fields[0].resolved_text == "Acme"

    def test_unsaved_template_not_recorded(self, session):
        assert session.record_print(MemoryTemplateStore(), {"a": "1"}) is None

    def test_store_failure_is_reported_as_none(self, session):
        session.template.id = "t1"
        assert session.record_print(FailingStore(), {"a": "1"}) is None


def test_recent_names_shared_between_threads():
    import threading

    names = RecentNames(limit=100)
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        for i in range(50):
            names.add(f"name-{i}")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert sorted(names) == sorted(f"name-{i}" for i in range(50))
