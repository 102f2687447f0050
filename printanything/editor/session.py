"""Editing session.

The single writer of a template while it is open in the editor. The
session owns the live template, its undo/redo history, the print-time
bindings and the names recently used in bound-name fields, and re-runs
resolution synchronously after every change to any of them.
"""

import logging
import threading
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

from core import (
    Field,
    LoadResult,
    LogicKind,
    PageSettings,
    PrintRecord,
    ResolutionContext,
    SaveResult,
    StoreError,
    Template,
    TemplateNotFoundError,
    TemplateStore,
)
from core import document
from core.document import Fields
from printanything.config import get_default_date_format
from printanything.editor.history import HistoryManager
from printanything.utilities.dates import today_user
from template_resolver import TemplateResolver

logger = logging.getLogger(__name__)

NEW_TEMPLATE_ID = "new"


class RecentNames:
    """Names recently printed in bound-name fields, for autocomplete.

    Kept per session, most recent first, without duplicates. Safe to share
    between request threads.
    """

    def __init__(self, names: Iterable[str] = (), limit: int = 50):
        self._lock = threading.Lock()
        self._limit = limit
        self._names: list[str] = []
        for name in names:
            self.add(name)

    def add(self, name: str) -> bool:
        """Remember a name; returns False when blank or already known."""
        name = (name or "").strip()
        if not name:
            return False
        with self._lock:
            if name in self._names:
                return False
            self._names.insert(0, name)
            del self._names[self._limit :]
        return True

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self):
        with self._lock:
            return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)


class EditingSession:
    """Live editing state for one template.

    Usage:
        session = EditingSession.new(owner_id="user-1")
        session.add_text(LogicKind.CURRENCY_ENG, variable_key="amount")
        session.set_bindings({"amount": "99.5"})
        payload = session.render_payload()
    """

    def __init__(
        self,
        template: Template,
        resolver: TemplateResolver | None = None,
        today: date | None = None,
        recent_names: RecentNames | None = None,
    ):
        self._resolver = resolver or TemplateResolver()
        self._today = today or today_user()
        self._bindings: dict[str, str] = {}
        self._uncommitted = False  # applied with record=False since the last record
        self.recent_names = recent_names if recent_names is not None else RecentNames()
        self.template = template
        self.template.fields = self._resolve(template.fields)
        self.history = HistoryManager(self.template.fields)

    @classmethod
    def new(cls, owner_id: str | None = None, **kwargs) -> "EditingSession":
        """Start a session on an empty, unsaved template."""
        return cls(Template(id=NEW_TEMPLATE_ID, owner_id=owner_id), **kwargs)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def fields(self) -> Fields:
        return self.template.fields

    @property
    def bindings(self) -> Mapping[str, str]:
        return dict(self._bindings)

    @property
    def today(self) -> date:
        return self._today

    @property
    def is_new(self) -> bool:
        return self.template.id == NEW_TEMPLATE_ID

    def _context(self, bindings: Mapping[str, str] | None = None) -> ResolutionContext:
        return ResolutionContext(
            bindings=self._bindings if bindings is None else bindings,
            today=self._today,
        )

    def _resolve(self, fields: Fields) -> Fields:
        return self._resolver.resolve_fields(fields, self._context())

    def _sync_history(self) -> None:
        """Re-resolve the current history entry so it matches the live fields."""
        self.history.replace_current(self._resolve(self.history.current))

    def _set_fields(self, fields: Fields) -> bool:
        """Store resolved fields; returns False when nothing changed."""
        resolved = self._resolve(fields)
        if resolved == self.template.fields:
            return False
        self.template.fields = resolved
        return True

    # =========================================================================
    # Edits
    # =========================================================================

    def apply(self, fields: Fields, record: bool = True) -> Fields:
        """Replace the live collection, resolve it and optionally record it.

        Pass ``record=False`` for intermediate states such as an in-progress
        drag; record the final state once the gesture ends.
        """
        changed = self._set_fields(tuple(fields))
        if not record:
            self._uncommitted = self._uncommitted or changed
        elif changed or self._uncommitted:
            self.history.record(self.template.fields)
            self._uncommitted = False
        return self.template.fields

    def add_text(self, logic_kind: LogicKind = LogicKind.STATIC, **overrides) -> Field:
        overrides.setdefault("date_format", get_default_date_format())
        fields = self.apply(document.add_text_field(self.fields, logic_kind, **overrides))
        return fields[-1]

    def add_image(self, src: str, natural_width: float, natural_height: float) -> Field:
        fields = self.apply(document.add_image_field(self.fields, src, natural_width, natural_height))
        return fields[-1]

    def update(self, field_id: str, **changes) -> Fields:
        return self.apply(document.update_field(self.fields, field_id, **changes))

    def move(self, field_id: str, x: float, y: float, record: bool = True) -> Fields:
        return self.apply(document.move_field(self.fields, field_id, x, y), record=record)

    def resize(self, field_id: str, width: float, height: float | None = None) -> Fields:
        return self.apply(document.resize_field(self.fields, field_id, width, height))

    def scale_text(self, field_id: str, factor: float) -> Fields:
        return self.apply(document.scale_text_field(self.fields, field_id, factor))

    def delete(self, field_id: str) -> Fields:
        return self.apply(document.remove_field(self.fields, field_id))

    def update_settings(self, **changes) -> PageSettings:
        self.template.settings = document.update_settings(self.template.settings, **changes)
        return self.template.settings

    def rename(self, name: str) -> None:
        self.template.name = name

    def set_public(self, is_public: bool) -> None:
        self.template.is_public = is_public

    def undo(self) -> bool:
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self._uncommitted = False
        self._set_fields(snapshot)
        self._sync_history()
        return True

    def redo(self) -> bool:
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self._uncommitted = False
        self._set_fields(snapshot)
        self._sync_history()
        return True

    # =========================================================================
    # Resolution inputs
    # =========================================================================

    def set_bindings(self, bindings: Mapping[str, str]) -> bool:
        """Replace print-time bindings; returns True if any text changed."""
        self._bindings = _normalize_bindings(bindings)
        changed = self._set_fields(self.fields)
        self._sync_history()
        return changed

    def clear_bindings(self) -> bool:
        return self.set_bindings({})

    def refresh(self, today: date | None = None) -> bool:
        """Re-resolve for a new wall-clock date."""
        self._today = today or today_user()
        changed = self._set_fields(self.fields)
        self._sync_history()
        return changed

    # =========================================================================
    # Storage boundary
    # =========================================================================

    def load(self, store: TemplateStore, template_id: str) -> LoadResult:
        """Replace the live template with a stored one.

        On success the history restarts from the loaded fields. On failure
        the session is left untouched.
        """
        try:
            loaded = store.get_template(template_id)
        except TemplateNotFoundError:
            loaded = None
        except StoreError as e:
            logger.warning(f"[SESSION] Load of {template_id} failed: {e}")
            return LoadResult(success=False, error=str(e))

        if loaded is None:
            logger.info(f"[SESSION] Template {template_id} not found")
            return LoadResult(success=False, error=f"Template not found: {template_id}", not_found=True)

        loaded.fields = self._resolve(loaded.fields)
        self.template = loaded
        self.history.reset(loaded.fields)
        self._uncommitted = False
        logger.debug(f"[SESSION] Loaded template {template_id} ({len(loaded.fields)} fields)")
        return LoadResult(success=True, template=loaded)

    def save(self, store: TemplateStore) -> SaveResult:
        """Persist the template; a new template adopts the id the store assigns."""
        candidate = Template(
            id=self.template.id,
            name=self.template.name,
            owner_id=self.template.owner_id,
            fields=self.template.fields,
            settings=self.template.settings,
            is_public=self.template.is_public,
            updated_at=datetime.now(UTC),
        )
        try:
            template_id = store.save_template(candidate)
        except StoreError as e:
            logger.warning(f"[SESSION] Save of '{self.template.name}' failed: {e}")
            return SaveResult(success=False, error=str(e))

        self.template.id = template_id
        self.template.updated_at = candidate.updated_at
        logger.info(f"[SESSION] Saved template '{self.template.name}' as {template_id}")
        return SaveResult(success=True, template_id=template_id)

    # =========================================================================
    # Renderer boundary
    # =========================================================================

    def render_payload(self, fields: Fields | None = None) -> list[dict[str, Any]]:
        """Fields as the renderer consumes them, images beneath text."""
        return [_render_entry(f) for f in document.render_order(self.fields if fields is None else fields)]

    def print_payload(self, bindings: Mapping[str, str]) -> list[dict[str, Any]]:
        """Resolve with one-off print values without touching session state.

        Names printed in bound-name fields are remembered for autocomplete.
        """
        resolved = self._resolver.resolve_fields(
            self.fields, self._context(_normalize_bindings(bindings))
        )
        for f in resolved:
            if f.is_text and f.logic_kind == LogicKind.BOUND_NAME:
                self.recent_names.add(f.resolved_text)
        return self.render_payload(resolved)

    def record_print(
        self,
        store: TemplateStore,
        bindings: Mapping[str, str],
        user_id: str | None = None,
    ) -> PrintRecord | None:
        """Store the values the template was printed with.

        Returns None for an unsaved template or when the store fails; a
        failed history write never blocks printing.
        """
        if self.is_new:
            return None
        record = PrintRecord(
            id=document.generate_id(),
            template_id=self.template.id,
            user_id=user_id,
            data=_normalize_bindings(bindings),
        )
        try:
            store.save_print_record(record)
        except StoreError as e:
            logger.warning(f"[SESSION] Print record for {self.template.id} not saved: {e}")
            return None
        return record

    def apply_print_record(self, record: PrintRecord) -> bool:
        """Reuse the values of an earlier print as the current bindings."""
        return self.set_bindings(record.data)


def _normalize_bindings(bindings: Mapping[str, Any]) -> dict[str, str]:
    return {str(k): "" if v is None else str(v) for k, v in bindings.items()}


def _render_entry(field: Field) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "id": field.id,
        "kind": field.kind.value,
        "x": field.x,
        "y": field.y,
        "width": field.width,
        "height": field.height,
    }
    if field.is_image:
        entry["src"] = field.src
        entry["opacity"] = field.opacity
    else:
        entry["text"] = field.resolved_text
        entry["style"] = {
            "font_size": field.font_size,
            "font_family": field.font_family,
            "align": field.align.value,
        }
    return entry
