from __future__ import annotations

import logging
from contextlib import closing, contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Short-lived connection + cursor; commit on success, rollback and re-raise on error."""
    with closing(conn_factory.connect()) as conn, closing(conn.cursor(dictionary=dictionary)) as cur:
        try:
            yield conn, cur
            conn.commit()
        except Exception:
            logger.warning("Rolling back MySQL transaction", exc_info=True)
            conn.rollback()
            raise


def fetchone(cur) -> Optional[Dict[str, Any]]:
    return cur.fetchone() or None


def fetchall(cur) -> List[Dict[str, Any]]:
    return list(cur.fetchall() or [])


def mysql_time_of_day(value: Any) -> Optional[time]:
    """TIME column -> ``datetime.time``.

    The pure-Python connector hands TIME back as ``timedelta``; other drivers
    give ``time`` or ``'HH:MM[:SS]'`` text. Durations past 24h wrap.
    """
    if value is None or isinstance(value, time):
        return value
    if isinstance(value, timedelta):
        seconds = int(value.total_seconds()) % 86400
        hours, rest = divmod(seconds, 3600)
        return time(hours, *divmod(rest, 60))
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    if isinstance(value, str):
        return time.fromisoformat(value.strip())
    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def optional_int(value: Any) -> Optional[int]:
    return int(value) if value is not None else None
