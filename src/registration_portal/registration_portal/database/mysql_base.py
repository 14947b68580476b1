from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

# MySQL server error for "Duplicate entry ... for key ..."
ER_DUP_ENTRY = 1062


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def like_pattern(term: str) -> str:
    """Substring LIKE pattern with MySQL wildcards escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def duplicate_key_name(error: Exception) -> Optional[str]:
    """Name of the violated unique key for a duplicate-entry error, else None.

    mysql-connector reports: ``Duplicate entry 'x' for key 'registrations.uq_mobile'``.
    """

    if getattr(error, "errno", None) != ER_DUP_ENTRY:
        return None
    msg = str(getattr(error, "msg", "") or error)
    marker = "for key '"
    idx = msg.rfind(marker)
    if idx < 0:
        return ""
    key = msg[idx + len(marker):].rstrip("'")
    return key.rsplit(".", 1)[-1]
