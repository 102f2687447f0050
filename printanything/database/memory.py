"""In-memory template store.

Satisfies the TemplateStore interface for local use and tests. Stored
templates and print records are serialized so callers never share
mutable state with the store.
"""

import logging
import threading

from core import PrintRecord, StoreError, Template
from core.document import generate_id

logger = logging.getLogger(__name__)

NEW_TEMPLATE_ID = "new"

# Oldest print records are dropped past this many
MAX_PRINT_RECORDS = 50


class MemoryTemplateStore:
    """Dict-backed template storage.

    Usage:
        store = MemoryTemplateStore()
        template_id = store.save_template(template)
        loaded = store.get_template(template_id)
    """

    def __init__(self, templates: list[Template] | None = None):
        self._lock = threading.Lock()
        self._rows: dict[str, dict] = {}
        self._prints: list[dict] = []
        for template in templates or []:
            self.save_template(template)

    def get_template(self, template_id: str) -> Template | None:
        with self._lock:
            row = self._rows.get(template_id)
        if row is None:
            return None
        return Template.from_dict(row)

    def save_template(self, template: Template) -> str:
        if not template.name or not template.name.strip():
            raise StoreError("Template name is required", template_id=template.id)

        template_id = template.id
        if not template_id or template_id == NEW_TEMPLATE_ID:
            template_id = generate_id()

        row = template.to_dict()
        row["id"] = template_id
        with self._lock:
            self._rows[template_id] = row
        logger.debug(f"[STORE] Saved template {template_id}")
        return template_id

    def delete_template(self, template_id: str) -> bool:
        with self._lock:
            deleted = self._rows.pop(template_id, None) is not None
        if deleted:
            logger.debug(f"[STORE] Deleted template {template_id}")
        return deleted

    def list_templates(self, owner_id: str | None = None) -> list[Template]:
        """Templates owned by owner_id plus public ones, newest first."""
        with self._lock:
            rows = list(self._rows.values())
        templates = [Template.from_dict(r) for r in rows]
        if owner_id is not None:
            templates = [t for t in templates if t.owner_id == owner_id or t.is_public]
        return sorted(templates, key=lambda t: t.updated_at, reverse=True)

    def save_print_record(self, record: PrintRecord) -> str:
        row = record.to_dict()
        if not row["id"]:
            row["id"] = generate_id()
        with self._lock:
            self._prints.append(row)
            del self._prints[:-MAX_PRINT_RECORDS]
        logger.debug(f"[STORE] Saved print record {row['id']} for template {record.template_id}")
        return row["id"]

    def get_print_history(
        self,
        template_id: str | None = None,
        user_id: str | None = None,
        limit: int = 50,
    ) -> list[PrintRecord]:
        """Print records, newest first, optionally for one template or user."""
        with self._lock:
            rows = list(self._prints)
        records = [PrintRecord.from_dict(r) for r in rows]
        if template_id is not None:
            records = [r for r in records if r.template_id == template_id]
        if user_id is not None:
            records = [r for r in records if r.user_id == user_id]
        records.sort(key=lambda r: r.created_at, reverse=True)
        return records[:limit]
