"""SQLite-backed key-value store for pipeline outputs."""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

DEFAULT_DB_PATH = Path("data/leadmerge.db")


def get_connection(db_path: Path = DEFAULT_DB_PATH) -> sqlite3.Connection:
    """Get a database connection with row factory."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_store(db_path: Path = DEFAULT_DB_PATH) -> None:
    """Initialize the key-value table."""
    conn = get_connection(db_path)

    conn.executescript("""
        CREATE TABLE IF NOT EXISTS kv (
            key TEXT PRIMARY KEY,
            value TEXT NOT NULL,
            content_type TEXT NOT NULL DEFAULT 'application/json',
            updated_at TIMESTAMP NOT NULL
        );
    """)

    conn.commit()
    conn.close()


def set_value(db_path: Path, key: str, value: Any) -> None:
    """Store a value under key, replacing any previous value.

    Strings are stored as-is (CSV exports); everything else is JSON-encoded.
    """
    if isinstance(value, str):
        payload, content_type = value, "text/plain"
    else:
        payload, content_type = json.dumps(value, default=str), "application/json"

    conn = get_connection(db_path)
    try:
        conn.execute(
            """
            INSERT INTO kv (key, value, content_type, updated_at)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                content_type = excluded.content_type,
                updated_at = excluded.updated_at
            """,
            (key, payload, content_type, datetime.now(timezone.utc).isoformat())
        )
        conn.commit()
    finally:
        conn.close()


def get_value(db_path: Path, key: str) -> Optional[Any]:
    """Get a stored value, decoding JSON entries. Returns None if missing."""
    conn = get_connection(db_path)
    cursor = conn.execute("SELECT value, content_type FROM kv WHERE key = ?", (key,))
    row = cursor.fetchone()
    conn.close()

    if row is None:
        return None
    if row["content_type"] == "application/json":
        return json.loads(row["value"])
    return row["value"]


def get_raw_value(db_path: Path, key: str) -> Optional[str]:
    """Get a stored value exactly as persisted."""
    conn = get_connection(db_path)
    cursor = conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
    row = cursor.fetchone()
    conn.close()
    return row["value"] if row else None


def list_keys(db_path: Path) -> list[str]:
    """List all stored keys in alphabetical order."""
    conn = get_connection(db_path)
    cursor = conn.execute("SELECT key FROM kv ORDER BY key")
    keys = [row["key"] for row in cursor.fetchall()]
    conn.close()
    return keys
