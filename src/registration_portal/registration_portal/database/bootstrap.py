from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterator

import mysql.connector

from .connection import DBConfig

logger = logging.getLogger(__name__)

# schema.sql may carry its own CREATE DATABASE / USE lines for manual runs;
# the configured database always wins.
_SKIPPED_STATEMENT = re.compile(r"^\s*(CREATE\s+DATABASE|USE)\b", re.IGNORECASE)


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def split_sql(sql: str) -> Iterator[str]:
    """Yield statements of a schema file.

    Handles ';' inside quoted strings and identifiers, and drops `--` line comments.
    """

    buf: list[str] = []
    quote = ""
    i = 0
    n = len(sql)

    while i < n:
        ch = sql[i]

        if quote:
            buf.append(ch)
            if ch == "\\" and quote != "`" and i + 1 < n:
                buf.append(sql[i + 1])
                i += 2
                continue
            if ch == quote:
                quote = ""
            i += 1
            continue

        if ch in ("'", '"', "`"):
            quote = ch
            buf.append(ch)
        elif ch == "-" and sql.startswith("--", i):
            end = sql.find("\n", i)
            i = n if end < 0 else end
            continue
        elif ch == ";":
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt and not _SKIPPED_STATEMENT.match(stmt):
                yield stmt
        else:
            buf.append(ch)
        i += 1

    tail = "".join(buf).strip()
    if tail and not _SKIPPED_STATEMENT.match(tail):
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_mapping(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Create the database if needed and run every statement of schema.sql.

    The schema uses CREATE TABLE IF NOT EXISTS, so this is safe on every startup.
    Returns the number of statements executed.
    """

    target = DBConfig.from_mapping(db_config)
    ensure_database_exists(db_config)
    statements = list(split_sql(Path(schema_path).read_text(encoding="utf-8")))

    conn = _connect(target)
    try:
        cur = conn.cursor()
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()

    logger.info("Applied %s statement(s) from %s to %s", len(statements), schema_path, target.database)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_mapping(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
