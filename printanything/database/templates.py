"""Database operations for templates.

Rows mirror the stored editor JSON: ``objects`` and ``settings`` are
JSON text columns holding the same dicts Template.to_dict produces.
"""

import json
import logging
import sqlite3
from pathlib import Path
from sqlite3 import Connection

from core import PrintRecord, StoreError, Template
from core.document import generate_id
from printanything.database.connection import get_db
from printanything.database.print_history import insert_print_record, list_print_records

logger = logging.getLogger(__name__)

NEW_TEMPLATE_ID = "new"


def _parse_json(value: str | None, default):
    if not value:
        return default
    try:
        return json.loads(value)
    except (json.JSONDecodeError, TypeError):
        logger.warning("[STORE] Unreadable JSON column, using default")
        return default


def _row_to_dict(row) -> dict:
    """Convert a database row to the stored template dict."""
    data = dict(row)
    data["objects"] = _parse_json(data.get("objects"), [])
    data["settings"] = _parse_json(data.get("settings"), {})
    data["is_public"] = bool(data.get("is_public"))
    data["updatedAt"] = data.pop("updated_at", None)
    return data


def get_template_row(conn: Connection, template_id: str) -> dict | None:
    """Get a template by ID.

    Returns:
        Template dict, or None if not found
    """
    cursor = conn.execute("SELECT * FROM templates WHERE id = ?", (template_id,))
    row = cursor.fetchone()
    return _row_to_dict(row) if row else None


def upsert_template(conn: Connection, data: dict) -> str:
    """Insert or overwrite a template row.

    Args:
        conn: Database connection
        data: Template dict as produced by Template.to_dict

    Returns:
        The template ID
    """
    conn.execute(
        """
        INSERT INTO templates (id, user_id, name, objects, settings, is_public, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(id) DO UPDATE SET
            user_id = excluded.user_id,
            name = excluded.name,
            objects = excluded.objects,
            settings = excluded.settings,
            is_public = excluded.is_public,
            updated_at = excluded.updated_at
        """,
        (
            data["id"],
            data.get("user_id"),
            data["name"],
            json.dumps(data.get("objects", []), ensure_ascii=False),
            json.dumps(data.get("settings", {})),
            1 if data.get("is_public") else 0,
            data["updatedAt"],
        ),
    )
    logger.info(f"[STORE] Saved template id={data['id']} name={data['name']}")
    return data["id"]


def delete_template(conn: Connection, template_id: str) -> bool:
    cursor = conn.execute("DELETE FROM templates WHERE id = ?", (template_id,))
    if cursor.rowcount == 0:
        return False
    logger.info(f"[STORE] Deleted template id={template_id}")
    return True


def list_templates(conn: Connection, owner_id: str | None = None) -> list[dict]:
    """List templates, newest first.

    Args:
        conn: Database connection
        owner_id: If given, only this owner's templates plus public ones
    """
    if owner_id is None:
        cursor = conn.execute("SELECT * FROM templates ORDER BY updated_at DESC")
    else:
        cursor = conn.execute(
            "SELECT * FROM templates WHERE user_id = ? OR is_public = 1 ORDER BY updated_at DESC",
            (owner_id,),
        )
    return [_row_to_dict(row) for row in cursor.fetchall()]


class SqliteTemplateStore:
    """TemplateStore backed by a SQLite file.

    Database errors surface as StoreError so callers can report them
    without crashing.
    """

    def __init__(self, path: str | Path):
        self.path = path

    def get_template(self, template_id: str) -> Template | None:
        try:
            with get_db(self.path) as conn:
                row = get_template_row(conn, template_id)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", template_id=template_id) from e
        return Template.from_dict(row) if row else None

    def save_template(self, template: Template) -> str:
        if not template.name or not template.name.strip():
            raise StoreError("Template name is required", template_id=template.id)

        data = template.to_dict()
        if not template.id or template.id == NEW_TEMPLATE_ID:
            data["id"] = generate_id()
        try:
            with get_db(self.path) as conn:
                return upsert_template(conn, data)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", template_id=template.id) from e

    def delete_template(self, template_id: str) -> bool:
        try:
            with get_db(self.path) as conn:
                return delete_template(conn, template_id)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", template_id=template_id) from e

    def list_templates(self, owner_id: str | None = None) -> list[Template]:
        try:
            with get_db(self.path) as conn:
                rows = list_templates(conn, owner_id)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}") from e
        return [Template.from_dict(r) for r in rows]

    def save_print_record(self, record: PrintRecord) -> str:
        data = record.to_dict()
        if not data["id"]:
            data["id"] = generate_id()
        try:
            with get_db(self.path) as conn:
                return insert_print_record(conn, data)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", template_id=record.template_id) from e

    def get_print_history(
        self,
        template_id: str | None = None,
        user_id: str | None = None,
        limit: int = 50,
    ) -> list[PrintRecord]:
        try:
            with get_db(self.path) as conn:
                rows = list_print_records(conn, template_id, user_id, limit)
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", template_id=template_id) from e
        return [PrintRecord.from_dict(r) for r in rows]
