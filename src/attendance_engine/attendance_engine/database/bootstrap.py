from __future__ import annotations

import logging
import re
from contextlib import closing
from pathlib import Path
from typing import Iterator

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

# schema.sql names its own database; the configured DB_NAME wins.
_DB_DIRECTIVE = re.compile(r"(?im)^\s*(CREATE\s+DATABASE|USE)\b[^;]*;\s*$")


def split_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema script on ``;``, ignoring ``--`` comments and quoted semicolons."""
    buf: list[str] = []
    quote: str | None = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            buf.append(ch)
            if ch == "\\" and i + 1 < len(sql):
                buf.append(sql[i + 1])
                i += 1
            elif ch == quote:
                quote = None
        elif ch in ("'", '"', "`"):
            quote = ch
            buf.append(ch)
        elif sql.startswith("--", i):
            end = sql.find("\n", i)
            i = len(sql) if end == -1 else end
            continue
        elif ch == ";":
            stmt = "".join(buf).strip()
            if stmt:
                yield stmt
            buf.clear()
        else:
            buf.append(ch)
        i += 1

    stmt = "".join(buf).strip()
    if stmt:
        yield stmt


def ensure_database_exists(factory: DatabaseConnection) -> None:
    with closing(factory.connect(with_database=False)) as conn, closing(conn.cursor()) as cur:
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{factory.config.database}` "
            "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> int:
    """Run schema.sql against the configured database; returns the statement count.

    Every statement is ``CREATE ... IF NOT EXISTS`` so re-running is harmless.
    """
    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    ensure_database_exists(factory)

    sql = _DB_DIRECTIVE.sub("", Path(schema_path).read_text(encoding="utf-8"))
    statements = list(split_sql_statements(sql))

    with closing(factory.connect()) as conn, closing(conn.cursor()) as cur:
        for stmt in statements:
            cur.execute(stmt)
        conn.commit()

    logger.info("Applied %d schema statements to %s", len(statements), factory.config.database)
    return len(statements)


def list_tables(db_config: dict) -> list[str]:
    factory = DatabaseConnection(DBConfig.from_dict(db_config))
    with closing(factory.connect()) as conn, closing(conn.cursor()) as cur:
        cur.execute("SHOW TABLES")
        return sorted(row[0] for row in cur.fetchall())
