"""SQLite-backed cache-aside store for provider payloads."""

from __future__ import annotations

import json
import logging
import sqlite3
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, List, Optional

from ffengine.config import settings


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    key: str
    value: Any
    created_at: float
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now


class StatsStore:
    """Key/value store with per-entry TTL.

    Values are JSON-serialised. Expired entries read as missing and are
    removed lazily by ``purge_expired``.
    """

    def __init__(self, db_path: Path | str | None = None, *, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._use_uri = False
        target = db_path if db_path is not None else settings.db_path()
        if isinstance(target, str) and target.startswith("file:"):
            self.db_path: Path | str = target
            self._use_uri = True
        else:
            self.db_path = Path(target)
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "ffengine-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "ffengine.sqlite"
            logger.warning("Unable to open %s; falling back to %s", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS cache_entries (
                key TEXT PRIMARY KEY,
                value_json TEXT NOT NULL,
                created_at REAL NOT NULL,
                expires_at REAL NOT NULL
            )
            """
        )
        conn.commit()

    def get_entry(self, key: str) -> Optional[CacheEntry]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM cache_entries WHERE key = ?", (key,)).fetchone()
        if row is None:
            return None
        entry = self._row_to_entry(row)
        if entry.is_expired(self._clock()):
            return None
        return entry

    def get(self, key: str, default: Any = None) -> Any:
        entry = self.get_entry(key)
        return entry.value if entry is not None else default

    def put(self, key: str, value: Any, ttl_seconds: float | None = None) -> None:
        ttl = settings.stats_ttl_seconds() if ttl_seconds is None else ttl_seconds
        now = self._clock()
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO cache_entries (key, value_json, created_at, expires_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    value_json = excluded.value_json,
                    created_at = excluded.created_at,
                    expires_at = excluded.expires_at
                """,
                (key, json.dumps(value), now, now + ttl),
            )
            conn.commit()

    def get_or_load(self, key: str, loader: Callable[[], Any], ttl_seconds: float | None = None) -> Any:
        """Return the cached value for ``key`` or call ``loader`` and cache its result.

        A loader returning ``None`` is treated as "no data" and is not cached.
        """

        entry = self.get_entry(key)
        if entry is not None:
            logger.debug("Cache hit for %s", key)
            return entry.value
        value = loader()
        if value is not None:
            self.put(key, value, ttl_seconds)
        return value

    def purge_expired(self) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM cache_entries WHERE expires_at <= ?", (self._clock(),))
            conn.commit()
        return cursor.rowcount

    def clear(self, prefix: str = "") -> int:
        with self._connect() as conn:
            if prefix:
                escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
                cursor = conn.execute(
                    "DELETE FROM cache_entries WHERE key LIKE ? ESCAPE '\\'",
                    (escaped + "%",),
                )
            else:
                cursor = conn.execute("DELETE FROM cache_entries")
            conn.commit()
        return cursor.rowcount

    def keys(self) -> List[str]:
        now = self._clock()
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key FROM cache_entries WHERE expires_at > ? ORDER BY key",
                (now,),
            ).fetchall()
        return [row["key"] for row in rows]

    def _row_to_entry(self, row: sqlite3.Row) -> CacheEntry:
        return CacheEntry(
            key=row["key"],
            value=json.loads(row["value_json"]),
            created_at=row["created_at"],
            expires_at=row["expires_at"],
        )
