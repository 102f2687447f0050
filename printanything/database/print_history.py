"""Database operations for print history.

One row per print: the template, who printed it and the bindings used.
"""

import json
import logging
from sqlite3 import Connection

logger = logging.getLogger(__name__)


def _row_to_dict(row) -> dict:
    """Convert a database row to a print record dict with parsed data."""
    data = dict(row)
    try:
        data["data"] = json.loads(data.get("data") or "{}")
    except (json.JSONDecodeError, TypeError):
        logger.warning(f"[STORE] Unreadable bindings on print record {data.get('id')}")
        data["data"] = {}
    return data


def insert_print_record(conn: Connection, record: dict) -> str:
    """Insert a print record.

    Args:
        conn: Database connection
        record: Dict as produced by PrintRecord.to_dict

    Returns:
        The record ID
    """
    conn.execute(
        """
        INSERT INTO print_history (id, template_id, user_id, data, created_at)
        VALUES (?, ?, ?, ?, ?)
        """,
        (
            record["id"],
            record["template_id"],
            record.get("user_id"),
            json.dumps(record.get("data") or {}, ensure_ascii=False),
            record["created_at"],
        ),
    )
    logger.debug(f"[STORE] Saved print record {record['id']} for template {record['template_id']}")
    return record["id"]


def list_print_records(
    conn: Connection,
    template_id: str | None = None,
    user_id: str | None = None,
    limit: int = 50,
) -> list[dict]:
    """List print records, newest first.

    Args:
        conn: Database connection
        template_id: If given, only prints of this template
        user_id: If given, only prints by this user
        limit: Maximum number of records
    """
    clauses = []
    params: list = []
    if template_id is not None:
        clauses.append("template_id = ?")
        params.append(template_id)
    if user_id is not None:
        clauses.append("user_id = ?")
        params.append(user_id)
    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    cursor = conn.execute(
        f"SELECT * FROM print_history {where} ORDER BY created_at DESC LIMIT ?",
        [*params, limit],
    )
    return [_row_to_dict(row) for row in cursor.fetchall()]
