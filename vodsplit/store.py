"""Persistent video status store.

The pipeline only needs two things from its store: the records that are
ready to be split, and a way to persist a status change. ``VideoStore``
captures that; ``SQLiteVideoStore`` is the implementation used by the CLI.
"""

import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .exceptions import StoreError
from .models import VideoRecord, VideoStatus

SCHEMA_VERSION = 1


class VideoStore(ABC):
    """Interface for the store holding video records."""

    @abstractmethod
    def find_eligible(self, limit: int) -> List[VideoRecord]:
        """Get up to ``limit`` records whose status is ``Downloaded``.

        The order is store-defined.
        """
        pass

    @abstractmethod
    def update_status(self, video_id: str, status: VideoStatus,
                      part_count: Optional[int] = None) -> None:
        """Atomically set the status (and, when given, the part count) of a record.

        Raises:
            StoreError: If the write fails or the record does not exist
        """
        pass


class SQLiteVideoStore(VideoStore):
    """Video store kept in a SQLite database file."""

    def __init__(self, db_path: Path, logger: Optional[logging.Logger] = None) -> None:
        self.db_path = Path(db_path)
        self.logger = logger or logging.getLogger(__name__)
        self._conn: Optional[sqlite3.Connection] = None

    def __enter__(self) -> "SQLiteVideoStore":
        self.open_database()
        self.migrate()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        self.close()
        return False

    @property
    def conn(self) -> sqlite3.Connection:
        if self._conn is None:
            raise StoreError("Database is not open", module="store")
        return self._conn

    def open_database(self) -> None:
        """Open (and create if needed) the database file.

        Raises:
            StoreError: If the database cannot be opened
        """
        if self._conn is not None:
            return
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self.db_path))
            self._conn.execute("PRAGMA journal_mode=WAL")
        except (OSError, sqlite3.Error) as e:
            raise StoreError(f"Could not open database {self.db_path}: {e}", module="store") from e
        self.logger.debug("Opened database %s", self.db_path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _get_schema_version(self) -> int:
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_version "
            "(id INTEGER PRIMARY KEY CHECK (id = 1), "
            "version INTEGER NOT NULL)")
        row = self.conn.execute(
            "SELECT version FROM schema_version WHERE id=1"
        ).fetchone()
        return row[0] if row else 0

    def migrate(self) -> None:
        """Bring the schema up to date.

        Raises:
            StoreError: If the migration fails
        """
        try:
            version = self._get_schema_version()
            if version < 1:
                self.conn.execute("""
                    CREATE TABLE IF NOT EXISTS videos (
                        id TEXT PRIMARY KEY,
                        status TEXT NOT NULL,
                        part_count INTEGER,
                        updated_at TEXT
                    )""")
                self.conn.execute(
                    "CREATE INDEX IF NOT EXISTS idx_videos_status ON videos (status)")
                self.conn.execute(
                    "INSERT OR REPLACE INTO schema_version (id, version) VALUES (1, ?)",
                    (SCHEMA_VERSION,))
                self.logger.info("Migrated database to schema version %d", SCHEMA_VERSION)
            self.conn.commit()
        except sqlite3.Error as e:
            self.conn.rollback()
            raise StoreError(f"Could not migrate database: {e}", module="store") from e

    def find_eligible(self, limit: int) -> List[VideoRecord]:
        try:
            rows = self.conn.execute(
                "SELECT id, status, part_count FROM videos WHERE status = ? LIMIT ?",
                (VideoStatus.DOWNLOADED.value, limit)
            ).fetchall()
        except sqlite3.Error as e:
            raise StoreError(f"Could not query videos: {e}", module="store") from e
        return [VideoRecord(id=row[0], status=row[1], part_count=row[2]) for row in rows]

    def update_status(self, video_id: str, status: VideoStatus,
                      part_count: Optional[int] = None) -> None:
        now = datetime.now().isoformat()
        try:
            with self.conn:
                if part_count is None:
                    cursor = self.conn.execute(
                        "UPDATE videos SET status = ?, updated_at = ? WHERE id = ?",
                        (status.value, now, video_id))
                else:
                    cursor = self.conn.execute(
                        "UPDATE videos SET status = ?, part_count = ?, updated_at = ? WHERE id = ?",
                        (status.value, part_count, now, video_id))
        except sqlite3.Error as e:
            raise StoreError(f"Could not update video {video_id}: {e}", module="store") from e
        if cursor.rowcount == 0:
            raise StoreError(f"No video with id {video_id}", module="store")
        self.logger.debug("Video %s is now %s", video_id, status.value)

    def add_video(self, video_id: str, status: VideoStatus = VideoStatus.DOWNLOADED) -> VideoRecord:
        """Insert a record, or reset the status of an existing one."""
        try:
            with self.conn:
                self.conn.execute(
                    "INSERT INTO videos (id, status, updated_at) VALUES (?, ?, ?) "
                    "ON CONFLICT(id) DO UPDATE SET status = excluded.status, "
                    "updated_at = excluded.updated_at",
                    (str(video_id), status.value, datetime.now().isoformat()))
        except sqlite3.Error as e:
            raise StoreError(f"Could not add video {video_id}: {e}", module="store") from e
        return VideoRecord(id=video_id, status=status)

    def get_video(self, video_id: str) -> Optional[VideoRecord]:
        try:
            row = self.conn.execute(
                "SELECT id, status, part_count FROM videos WHERE id = ?", (str(video_id),)
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(f"Could not read video {video_id}: {e}", module="store") from e
        if row is None:
            return None
        return VideoRecord(id=row[0], status=row[1], part_count=row[2])
