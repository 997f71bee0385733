"""SQLite-backed movie cache keyed by IMDb id.

Single WAL-mode database holding one row per looked-up movie. Upserts are
idempotent per IMDb id: a repeated lookup replaces the stored fields and
bumps updated_at, keeping created_at. Thread-safe via per-thread
connections and SQLite's built-in locking.
"""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path

from loguru import logger

from .errors import StoreError
from .models import MovieRecord

log = logger.bind(stage="db")

_SCHEMA = """\
PRAGMA journal_mode=WAL;
PRAGMA busy_timeout=5000;

CREATE TABLE IF NOT EXISTS movies (
    imdb_id     TEXT PRIMARY KEY,
    title       TEXT NOT NULL,
    year        TEXT NOT NULL DEFAULT '',
    synopsis    TEXT NOT NULL DEFAULT '',
    rating      TEXT NOT NULL DEFAULT 'N/A',
    created_at  TEXT NOT NULL,
    updated_at  TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_movies_title ON movies(title);
"""

_RECORD_COLUMNS = ("imdb_id", "title", "year", "synopsis", "rating")


def _utcnow() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def _row_to_record(row: sqlite3.Row) -> MovieRecord:
    return MovieRecord(**{col: row[col] for col in _RECORD_COLUMNS})


class MovieDB:
    """SQLite movie cache.

    Thread-safe: each thread gets its own connection via threading.local().
    All sqlite3 failures surface as StoreError.
    """

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path
        self._local = threading.local()
        self._init_schema()

    def _get_conn(self) -> sqlite3.Connection:
        """Get or create a per-thread SQLite connection."""
        conn = getattr(self._local, "conn", None)
        if conn is None:
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
                conn = sqlite3.connect(str(self.db_path), timeout=10.0)
            except (OSError, sqlite3.Error) as e:
                raise StoreError(f"Cannot open movie cache {self.db_path}: {e}") from e
            conn.row_factory = sqlite3.Row
            try:
                # First statement to read the file; fails here on a non-SQLite file
                conn.execute("PRAGMA journal_mode=WAL")
                conn.execute("PRAGMA busy_timeout=5000")
            except sqlite3.Error as e:
                conn.close()
                raise StoreError(f"Cannot open movie cache {self.db_path}: {e}") from e
            self._local.conn = conn
        return conn

    def _init_schema(self) -> None:
        """Create tables if they don't exist."""
        conn = self._get_conn()
        try:
            conn.executescript(_SCHEMA)
            conn.commit()
        except sqlite3.Error as e:
            raise StoreError(f"Cannot initialize movie cache: {e}") from e

    def close(self) -> None:
        """Close the current thread's connection."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            self._local.conn = None

    def upsert(self, record: MovieRecord) -> None:
        """Insert or replace the record stored under record.imdb_id."""
        now = _utcnow()
        conn = self._get_conn()
        try:
            conn.execute(
                """INSERT INTO movies
                   (imdb_id, title, year, synopsis, rating, created_at, updated_at)
                   VALUES (?, ?, ?, ?, ?, ?, ?)
                   ON CONFLICT(imdb_id) DO UPDATE SET
                       title = excluded.title,
                       year = excluded.year,
                       synopsis = excluded.synopsis,
                       rating = excluded.rating,
                       updated_at = excluded.updated_at""",
                (
                    record.imdb_id,
                    record.title,
                    record.year,
                    record.synopsis,
                    record.rating,
                    now,
                    now,
                ),
            )
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Upsert failed for {record.imdb_id}: {e}") from e
        log.debug(f"Upserted {record.imdb_id} ({record.title!r})")

    def read(self, imdb_id: str) -> MovieRecord | None:
        conn = self._get_conn()
        try:
            row = conn.execute(
                "SELECT * FROM movies WHERE imdb_id = ?", (imdb_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Read failed for {imdb_id}: {e}") from e
        return _row_to_record(row) if row is not None else None

    def list_all(self) -> list[MovieRecord]:
        """Return every cached record, ordered by title."""
        conn = self._get_conn()
        try:
            rows = conn.execute(
                "SELECT * FROM movies ORDER BY title COLLATE NOCASE, imdb_id"
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Listing movies failed: {e}") from e
        return [_row_to_record(r) for r in rows]

    def count(self) -> int:
        conn = self._get_conn()
        try:
            row = conn.execute("SELECT COUNT(*) AS n FROM movies").fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Counting movies failed: {e}") from e
        return row["n"]

    def clear(self) -> int:
        """Delete every cached record. Returns the number deleted (0 if empty)."""
        conn = self._get_conn()
        try:
            cur = conn.execute("DELETE FROM movies")
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Clearing movies failed: {e}") from e
        deleted = cur.rowcount
        log.info(f"Cleared {deleted} cached movies")
        return deleted
