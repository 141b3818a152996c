"""
Database layer for Clippie
Handles SQLite storage of deduplicated clipboard history entries
"""

import hashlib
import logging
import sqlite3
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Union

from clippie.exceptions import StorageError

logger = logging.getLogger("clippie.Database")

Timestamp = Union[datetime, str]


@dataclass(frozen=True)
class ClipboardEntry:
    """One distinct clipboard value and its copy statistics"""

    id: int
    content: str
    content_hash: str
    created_at: str
    last_copied: str
    copy_count: int


class ClipboardDB:
    """SQLite database for clipboard history entries"""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = str(db_path)
        try:
            if self.db_path != ":memory:":
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
            self.conn = sqlite3.connect(self.db_path, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            self._init_db()
        except (sqlite3.Error, OSError) as e:
            raise StorageError(f"Failed to open database at {self.db_path}", e) from e

    def _init_db(self):
        """Initialize database schema and durability settings"""
        cursor = self.conn.cursor()
        cursor.execute(
            """
            CREATE TABLE IF NOT EXISTS clipboard_entries (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                content TEXT NOT NULL UNIQUE,
                content_hash TEXT NOT NULL UNIQUE,
                created_at TEXT NOT NULL,
                last_copied TEXT NOT NULL,
                copy_count INTEGER NOT NULL DEFAULT 1
            )
        """
        )
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_created_at
            ON clipboard_entries(created_at DESC)
        """
        )
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_last_copied
            ON clipboard_entries(last_copied DESC)
        """
        )
        cursor.execute(
            """
            CREATE INDEX IF NOT EXISTS idx_content_hash
            ON clipboard_entries(content_hash)
        """
        )
        self.conn.commit()

        # WAL + NORMAL: a committed transaction survives a crash of this process
        cursor.execute("PRAGMA journal_mode = WAL")
        cursor.execute("PRAGMA synchronous = NORMAL")
        logger.info(f"Database initialized or already exists at: {self.db_path}")

    @contextmanager
    def _reading(self, action: str) -> Iterator[sqlite3.Cursor]:
        try:
            yield self.conn.cursor()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to {action}", e) from e

    @contextmanager
    def _writing(self, action: str) -> Iterator[sqlite3.Cursor]:
        """Run a write in one transaction; roll back everything on failure"""
        try:
            yield self.conn.cursor()
            self.conn.commit()
        except sqlite3.Error as e:
            try:
                self.conn.rollback()
            except sqlite3.Error as rollback_error:
                logger.error(f"Rollback after failed {action} also failed: {rollback_error}")
            raise StorageError(f"Failed to {action}", e) from e

    @staticmethod
    def calculate_hash(content: str) -> str:
        """
        Calculate SHA256 hash of text content
        Returns hex digest (64 characters)
        """
        return hashlib.sha256(content.encode("utf-8")).hexdigest()

    @staticmethod
    def format_timestamp(value: Optional[Timestamp] = None) -> str:
        """
        Normalize a timestamp to the stored representation

        Naive datetimes are taken as local time. Strings are passed through.
        Returns ISO-8601 UTC with microseconds, so text order is time order.
        """
        if isinstance(value, str):
            return value
        if value is None:
            value = datetime.now(timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="microseconds")

    @staticmethod
    def _row_to_entry(row: sqlite3.Row) -> ClipboardEntry:
        return ClipboardEntry(
            id=row["id"],
            content=row["content"],
            content_hash=row["content_hash"],
            created_at=row["created_at"],
            last_copied=row["last_copied"],
            copy_count=row["copy_count"],
        )

    def insert_or_touch(self, content: str, timestamp: Optional[Timestamp] = None) -> int:
        """
        Record an observation of clipboard content

        Args:
            content: The copied text
            timestamp: Observation time (defaults to now)

        Returns:
            ID of the new row, or of the existing row holding the same content
        """
        now = self.format_timestamp(timestamp)
        content_hash = self.calculate_hash(content)

        with self._writing("record clipboard entry") as cursor:
            try:
                cursor.execute(
                    """
                    INSERT INTO clipboard_entries (content, content_hash, created_at, last_copied, copy_count)
                    VALUES (?, ?, ?, ?, 1)
                """,
                    (content, content_hash, now, now),
                )
                item_id = cursor.lastrowid
                logger.info(f"Added entry to DB: ID={item_id}, Hash={content_hash[:16]}...")
            except sqlite3.IntegrityError:
                # Duplicate content - fold into the existing row
                cursor.execute(
                    """
                    UPDATE clipboard_entries
                    SET last_copied = ?, copy_count = copy_count + 1
                    WHERE content_hash = ?
                """,
                    (now, content_hash),
                )
                cursor.execute(
                    "SELECT id FROM clipboard_entries WHERE content_hash = ?",
                    (content_hash,),
                )
                row = cursor.fetchone()
                if row is None:
                    raise sqlite3.IntegrityError(
                        "content conflicts with an entry of a different hash"
                    )
                item_id = row["id"]
                logger.info(f"Updated duplicate entry: ID={item_id}")
        return item_id

    def list_all(self) -> List[ClipboardEntry]:
        """Get all entries, most recently copied first"""
        with self._reading("list entries") as cursor:
            cursor.execute(
                """
                SELECT id, content, content_hash, created_at, last_copied, copy_count
                FROM clipboard_entries
                ORDER BY last_copied DESC, id DESC
            """
            )
            return [self._row_to_entry(row) for row in cursor.fetchall()]

    def get_entry(self, entry_id: int) -> Optional[ClipboardEntry]:
        """Get a single entry by ID"""
        with self._reading("read entry") as cursor:
            cursor.execute(
                """
                SELECT id, content, content_hash, created_at, last_copied, copy_count
                FROM clipboard_entries
                WHERE id = ?
            """,
                (entry_id,),
            )
            row = cursor.fetchone()
        return self._row_to_entry(row) if row else None

    def get_latest_entry(self) -> Optional[ClipboardEntry]:
        """Get the most recently copied entry"""
        with self._reading("read latest entry") as cursor:
            cursor.execute(
                """
                SELECT id, content, content_hash, created_at, last_copied, copy_count
                FROM clipboard_entries
                ORDER BY last_copied DESC, id DESC
                LIMIT 1
            """
            )
            row = cursor.fetchone()
        return self._row_to_entry(row) if row else None

    def delete_by_id(self, entry_id: int) -> bool:
        """Delete an entry by ID"""
        with self._writing(f"delete entry {entry_id}") as cursor:
            cursor.execute("DELETE FROM clipboard_entries WHERE id = ?", (entry_id,))
        return cursor.rowcount > 0

    def delete_by_content(self, content: str) -> bool:
        """Delete the entry holding exactly this content"""
        with self._writing("delete entry by content") as cursor:
            cursor.execute(
                "DELETE FROM clipboard_entries WHERE content_hash = ?",
                (self.calculate_hash(content),),
            )
        return cursor.rowcount > 0

    def delete_older_than(self, cutoff: Timestamp) -> int:
        """
        Delete entries first seen before the cutoff

        Returns:
            Number of deleted entries
        """
        with self._writing("delete old entries") as cursor:
            cursor.execute(
                "DELETE FROM clipboard_entries WHERE created_at < ?",
                (self.format_timestamp(cutoff),),
            )
        logger.info(f"Deleted {cursor.rowcount} entries created before {cutoff}")
        return cursor.rowcount

    def delete_copied_since(self, cutoff: Timestamp) -> int:
        """
        Delete entries last copied at or after the cutoff

        Returns:
            Number of deleted entries
        """
        with self._writing("delete recent entries") as cursor:
            cursor.execute(
                "DELETE FROM clipboard_entries WHERE last_copied >= ?",
                (self.format_timestamp(cutoff),),
            )
        logger.info(f"Deleted {cursor.rowcount} entries copied since {cutoff}")
        return cursor.rowcount

    def clear_all(self) -> int:
        """Delete every entry, returning how many were removed"""
        with self._writing("clear history") as cursor:
            cursor.execute("DELETE FROM clipboard_entries")
        logger.info(f"Cleared {cursor.rowcount} entries")
        return cursor.rowcount

    def count(self) -> int:
        """Get total count of entries"""
        with self._reading("count entries") as cursor:
            cursor.execute("SELECT COUNT(*) as count FROM clipboard_entries")
            row = cursor.fetchone()
        return row["count"] if row else 0

    def size_bytes(self) -> int:
        """Get the database size in bytes"""
        with self._reading("read database size") as cursor:
            cursor.execute(
                "SELECT page_count * page_size as size FROM pragma_page_count(), pragma_page_size()"
            )
            row = cursor.fetchone()
        return row["size"] if row else 0

    def close(self):
        """Close database connection"""
        self.conn.close()
