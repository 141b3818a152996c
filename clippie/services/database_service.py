#!/usr/bin/env python3
"""
Database Service - Wrapper for database operations
"""
import logging
import threading
from pathlib import Path
from typing import List, Optional, Union

from clippie.database import ClipboardDB, ClipboardEntry, Timestamp

logger = logging.getLogger(__name__)


class DatabaseService:
    """Service for managing database operations with thread-safety"""

    def __init__(self, db_path: Union[str, Path]):
        """
        Initialize database service

        Args:
            db_path: Path to database file (":memory:" for a private in-memory store)

        Raises:
            StorageError: if the database cannot be opened or initialized
        """
        logger.info(f"[DatabaseService.__init__] Connecting to database: {db_path}")
        self.db = ClipboardDB(db_path)
        self.lock = threading.Lock()
        logger.info("[DatabaseService.__init__] Initialization complete")

    @property
    def db_path(self) -> str:
        return self.db.db_path

    @staticmethod
    def calculate_hash(content: str) -> str:
        """Calculate content hash used for deduplication"""
        return ClipboardDB.calculate_hash(content)

    def insert_or_touch(self, content: str, timestamp: Optional[Timestamp] = None) -> int:
        """Thread-safe record of a clipboard observation"""
        with self.lock:
            return self.db.insert_or_touch(content, timestamp)

    def list_all(self) -> List[ClipboardEntry]:
        """Thread-safe list of all entries, newest first"""
        with self.lock:
            return self.db.list_all()

    def get_entry(self, entry_id: int) -> Optional[ClipboardEntry]:
        """Thread-safe get entry"""
        with self.lock:
            return self.db.get_entry(entry_id)

    def get_latest_entry(self) -> Optional[ClipboardEntry]:
        """Thread-safe get most recently copied entry"""
        with self.lock:
            return self.db.get_latest_entry()

    def delete_by_id(self, entry_id: int) -> bool:
        """Thread-safe delete entry"""
        with self.lock:
            return self.db.delete_by_id(entry_id)

    def delete_by_content(self, content: str) -> bool:
        """Thread-safe delete entry by content"""
        with self.lock:
            return self.db.delete_by_content(content)

    def delete_older_than(self, cutoff: Timestamp) -> int:
        """Thread-safe age-based cleanup"""
        with self.lock:
            return self.db.delete_older_than(cutoff)

    def delete_copied_since(self, cutoff: Timestamp) -> int:
        """Thread-safe removal of recently copied entries"""
        with self.lock:
            return self.db.delete_copied_since(cutoff)

    def clear_all(self) -> int:
        """Thread-safe clear of all entries"""
        with self.lock:
            return self.db.clear_all()

    def count(self) -> int:
        """Thread-safe entry count"""
        with self.lock:
            return self.db.count()

    def size_bytes(self) -> int:
        """Thread-safe database size"""
        with self.lock:
            return self.db.size_bytes()

    def close(self):
        """Close the underlying connection"""
        with self.lock:
            self.db.close()
