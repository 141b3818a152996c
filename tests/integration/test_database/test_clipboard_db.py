"""Tests for ClipboardDB core operations."""

import sqlite3
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from clippie.database import ClipboardDB
from clippie.exceptions import StorageError


class TestClipboardDBCoreOperations:
    """Test core database operations."""

    def test_insert_new_content(self, temp_db: ClipboardDB):
        """A new value gets its own row with copy_count 1."""
        entry_id = temp_db.insert_or_touch("Hello, World!")

        entry = temp_db.get_entry(entry_id)
        assert entry is not None
        assert entry.content == "Hello, World!"
        assert entry.copy_count == 1
        assert entry.created_at == entry.last_copied
        assert entry.content_hash == ClipboardDB.calculate_hash("Hello, World!")

    def test_duplicate_content_touches_existing_row(self, temp_db: ClipboardDB):
        """Inserting identical content twice yields the same id and one more copy."""
        first = temp_db.insert_or_touch("same", timestamp="2026-01-01T10:00:00.000000+00:00")
        second = temp_db.insert_or_touch("same", timestamp="2026-01-02T10:00:00.000000+00:00")

        assert first == second
        assert temp_db.count() == 1

        entry = temp_db.get_entry(first)
        assert entry.copy_count == 2
        assert entry.created_at == "2026-01-01T10:00:00.000000+00:00"
        assert entry.last_copied == "2026-01-02T10:00:00.000000+00:00"

    def test_whitespace_variants_are_distinct(self, temp_db: ClipboardDB):
        """Hashing covers the full content, whitespace included."""
        temp_db.insert_or_touch("text")
        temp_db.insert_or_touch("text ")

        assert temp_db.count() == 2

    def test_list_all_orders_by_last_copied(self, temp_db: ClipboardDB):
        """Most recently copied entries come first."""
        temp_db.insert_or_touch("old", timestamp="2026-01-01T10:00:00.000000+00:00")
        temp_db.insert_or_touch("new", timestamp="2026-01-01T11:00:00.000000+00:00")
        temp_db.insert_or_touch("old", timestamp="2026-01-01T12:00:00.000000+00:00")

        contents = [entry.content for entry in temp_db.list_all()]

        assert contents == ["old", "new"]

    def test_get_latest_entry(self, temp_db: ClipboardDB):
        assert temp_db.get_latest_entry() is None

        temp_db.insert_or_touch("first", timestamp="2026-01-01T10:00:00.000000+00:00")
        temp_db.insert_or_touch("second", timestamp="2026-01-01T11:00:00.000000+00:00")

        assert temp_db.get_latest_entry().content == "second"

    def test_get_missing_entry(self, temp_db: ClipboardDB):
        assert temp_db.get_entry(999) is None

    def test_datetime_timestamps_are_stored_as_utc(self, temp_db: ClipboardDB):
        local = datetime(2026, 3, 1, 12, 0, tzinfo=timezone(timedelta(hours=2)))

        entry_id = temp_db.insert_or_touch("tz", timestamp=local)

        assert temp_db.get_entry(entry_id).created_at == "2026-03-01T10:00:00.000000+00:00"


class TestContentHash:
    """Test content hashing."""

    def test_hash_is_deterministic(self):
        assert ClipboardDB.calculate_hash("abc") == ClipboardDB.calculate_hash("abc")

    def test_hash_is_sha256_hex(self):
        digest = ClipboardDB.calculate_hash("abc")

        assert len(digest) == 64
        assert digest == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"

    def test_different_content_different_hash(self):
        assert ClipboardDB.calculate_hash("a") != ClipboardDB.calculate_hash("b")


class TestClipboardDBDeletes:
    """Test delete operations."""

    def test_delete_by_id(self, temp_db: ClipboardDB):
        entry_id = temp_db.insert_or_touch("doomed")

        assert temp_db.delete_by_id(entry_id) is True
        assert temp_db.get_entry(entry_id) is None
        assert temp_db.delete_by_id(entry_id) is False

    def test_delete_by_content(self, temp_db: ClipboardDB):
        temp_db.insert_or_touch("keep")
        temp_db.insert_or_touch("drop")

        assert temp_db.delete_by_content("drop") is True
        assert temp_db.delete_by_content("missing") is False
        assert [e.content for e in temp_db.list_all()] == ["keep"]

    def test_delete_older_than_uses_first_seen(self, temp_db: ClipboardDB):
        """Age is measured from first sighting, not from the last copy."""
        temp_db.insert_or_touch("ancient", timestamp="2025-01-01T00:00:00.000000+00:00")
        temp_db.insert_or_touch("ancient", timestamp="2026-06-01T00:00:00.000000+00:00")
        temp_db.insert_or_touch("recent", timestamp="2026-06-01T00:00:00.000000+00:00")

        deleted = temp_db.delete_older_than("2026-01-01T00:00:00.000000+00:00")

        assert deleted == 1
        assert [e.content for e in temp_db.list_all()] == ["recent"]

    def test_delete_copied_since(self, temp_db: ClipboardDB):
        now = datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc)
        temp_db.insert_or_touch("two hours ago", timestamp=now - timedelta(hours=2))
        temp_db.insert_or_touch("ten minutes ago", timestamp=now - timedelta(minutes=10))
        temp_db.insert_or_touch("just now", timestamp=now)

        deleted = temp_db.delete_copied_since(now - timedelta(hours=1))

        assert deleted == 2
        assert [e.content for e in temp_db.list_all()] == ["two hours ago"]

    def test_clear_all(self, temp_db: ClipboardDB):
        for text in ("a", "b", "c"):
            temp_db.insert_or_touch(text)

        assert temp_db.clear_all() == 3
        assert temp_db.count() == 0
        assert temp_db.clear_all() == 0


class TestClipboardDBFile:
    """Test file-backed databases."""

    def test_creates_parent_directories(self, temp_db_path: Path):
        db = ClipboardDB(temp_db_path)
        try:
            assert temp_db_path.exists()
        finally:
            db.close()

    def test_entries_survive_reopen(self, temp_db_path: Path):
        db = ClipboardDB(temp_db_path)
        db.insert_or_touch("persisted")
        db.close()

        reopened = ClipboardDB(temp_db_path)
        try:
            assert [e.content for e in reopened.list_all()] == ["persisted"]
        finally:
            reopened.close()

    def test_uses_wal_journal(self, temp_db_path: Path):
        db = ClipboardDB(temp_db_path)
        db.close()

        conn = sqlite3.connect(temp_db_path)
        try:
            mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
        finally:
            conn.close()
        assert mode == "wal"

    def test_size_bytes_is_positive(self, temp_db_path: Path):
        db = ClipboardDB(temp_db_path)
        try:
            db.insert_or_touch("x" * 10000)
            assert db.size_bytes() > 0
        finally:
            db.close()

    def test_unopenable_path_raises_storage_error(self, tmp_path: Path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file")

        with pytest.raises(StorageError):
            ClipboardDB(blocker / "clipboard.db")

    def test_failed_query_raises_storage_error(self, temp_db: ClipboardDB):
        temp_db.close()

        with pytest.raises(StorageError):
            temp_db.list_all()
