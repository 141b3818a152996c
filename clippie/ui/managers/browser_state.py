"""Browser state: cached history, filter, selection and the delete flow.

All mutation happens on the browser's single event loop. Store failures
during refresh or delete are turned into a status message; the cached
entries are left as they were.
"""

import logging
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from clippie.core.protocols import HistoryStorePort
from clippie.database import ClipboardEntry
from clippie.exceptions import StorageError
from clippie.ui.domain.modes import (
    REQUIRED_ALL_CONFIRMATIONS,
    ConfirmingAll,
    ConfirmingBulk,
    ConfirmingSingle,
    DeletePeriod,
    FilteringMode,
    Mode,
    NormalMode,
    SelectingPeriod,
)
from clippie.ui.managers.viewport_manager import ViewportManager
from clippie.ui.utils.fuzzy import FuzzyMatch, filter_and_rank

logger = logging.getLogger("clippie.BrowserState")

FilteredEntry = Tuple[ClipboardEntry, FuzzyMatch]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BrowserState:
    """In-memory view of the history plus UI-only state"""

    def __init__(
        self,
        store: HistoryStorePort,
        viewport: Optional[ViewportManager] = None,
        refresh_interval: float = 2.0,
        clock: Callable[[], float] = time.monotonic,
        now: Callable[[], datetime] = _utc_now,
    ):
        """
        Args:
            store: History store read on load/refresh and used for deletes
            viewport: Selection/scroll arithmetic
            refresh_interval: Seconds between automatic re-reads on ticks
            clock: Monotonic clock driving auto-refresh
            now: Wall clock used for bulk delete cutoffs
        """
        self.store = store
        self.viewport = viewport or ViewportManager()
        self.refresh_interval = refresh_interval
        self.clock = clock
        self.now = now

        self.entries: List[ClipboardEntry] = []
        self.filter_text = ""
        self.mode: Mode = NormalMode()
        self.message: Optional[str] = None
        self.selected_content: Optional[str] = None
        self._filtered: List[FilteredEntry] = []
        self._last_refresh = clock()

    # Loading

    def load(self) -> None:
        """
        Initial read of the store.

        Raises:
            StorageError: the store cannot be read
        """
        self._set_entries(self.store.list_all())
        self.viewport.reset()
        self._last_refresh = self.clock()
        logger.info(f"Loaded {len(self.entries)} entries")

    def refresh(self) -> None:
        """Explicit re-read; selection goes back to the top"""
        try:
            entries = self.store.list_all()
        except StorageError as e:
            logger.error(f"Refresh failed: {e}")
            self.message = f"Refresh failed: {e}"
            return
        self._set_entries(entries)
        self.viewport.reset()
        self._last_refresh = self.clock()
        self.message = "Refreshed"

    def on_tick(self) -> bool:
        """
        Auto-refresh once the refresh interval has elapsed.

        Returns:
            True if the cached entries were replaced
        """
        if self.clock() - self._last_refresh < self.refresh_interval:
            return False
        self._last_refresh = self.clock()
        try:
            entries = self.store.list_all()
        except StorageError as e:
            logger.error(f"Auto-refresh failed: {e}")
            self.message = f"Refresh failed: {e}"
            return False
        if not self._differs(entries):
            return False
        logger.debug(f"History changed, reloading {len(entries)} entries")
        self._set_entries(entries)
        self.viewport.reset()
        return True

    def _differs(self, entries: List[ClipboardEntry]) -> bool:
        if len(entries) != len(self.entries):
            return True
        return any(
            (new.content, new.last_copied) != (old.content, old.last_copied)
            for new, old in zip(entries, self.entries)
        )

    def _set_entries(self, entries: List[ClipboardEntry]) -> None:
        self.entries = list(entries)
        self._apply_filter()

    def _apply_filter(self) -> None:
        self._filtered = filter_and_rank(
            self.entries, self.filter_text, key=lambda entry: entry.content
        )

    # Filtered view

    @property
    def filtered(self) -> List[FilteredEntry]:
        return self._filtered

    @property
    def filtered_count(self) -> int:
        return len(self._filtered)

    @property
    def selected_index(self) -> int:
        return self.viewport.selected

    @property
    def scroll_offset(self) -> int:
        return self.viewport.offset

    @property
    def selected_entry(self) -> Optional[ClipboardEntry]:
        if not self._filtered:
            return None
        return self._filtered[self.viewport.selected][0]

    def visible_entries(self) -> List[Tuple[int, FilteredEntry]]:
        """(index, entry) pairs currently inside the viewport"""
        return [(i, self._filtered[i]) for i in self.viewport.visible_range(self.filtered_count)]

    def clear_message(self) -> None:
        self.message = None

    # Filtering

    def start_filter(self) -> None:
        self.mode = FilteringMode()

    def filter_append(self, char: str) -> None:
        self.filter_text += char
        self._apply_filter()
        self.viewport.reset()

    def filter_backspace(self) -> None:
        if not self.filter_text:
            return
        self.filter_text = self.filter_text[:-1]
        self._apply_filter()
        self.viewport.reset()

    def confirm_filter(self) -> None:
        self.mode = NormalMode()

    def clear_filter(self) -> None:
        self.filter_text = ""
        self._apply_filter()
        self.viewport.reset()
        self.mode = NormalMode()

    @property
    def has_filter(self) -> bool:
        return bool(self.filter_text)

    # Navigation

    def move_up(self) -> None:
        self.viewport.move_up()

    def move_down(self) -> None:
        self.viewport.move_down(self.filtered_count)

    def page_up(self) -> None:
        self.viewport.page_up()

    def page_down(self) -> None:
        self.viewport.page_down(self.filtered_count)

    def home(self) -> None:
        self.viewport.home()

    def end(self) -> None:
        self.viewport.end(self.filtered_count)

    def resize(self, terminal_height: int) -> None:
        self.viewport.resize(terminal_height)

    # Commit

    def commit(self) -> bool:
        """
        Capture the selected entry's content.

        Returns:
            True if there was an entry to commit (the session should end)
        """
        entry = self.selected_entry
        if entry is None:
            self.message = "Nothing selected"
            return False
        self.selected_content = entry.content
        return True

    # Delete flow

    def begin_single_delete(self) -> None:
        entry = self.selected_entry
        if entry is None:
            self.message = "Nothing to delete"
            return
        self.mode = ConfirmingSingle(entry.id)

    def begin_bulk_delete(self) -> None:
        self.mode = SelectingPeriod()

    def select_period(self, period: DeletePeriod) -> None:
        if period is DeletePeriod.ALL:
            self.mode = ConfirmingAll(0)
        else:
            self.mode = ConfirmingBulk(period)

    def cancel_delete(self) -> None:
        self.mode = NormalMode()
        self.message = "Delete cancelled"

    def reset_confirmations(self) -> None:
        """A non-affirmative key inside the ALL prompt starts the count over"""
        if isinstance(self.mode, ConfirmingAll):
            self.mode = ConfirmingAll(0)

    def confirm(self) -> None:
        """Affirmative answer to the current delete prompt"""
        mode = self.mode
        if isinstance(mode, ConfirmingAll):
            confirmations = mode.confirmations + 1
            if confirmations < REQUIRED_ALL_CONFIRMATIONS:
                self.mode = ConfirmingAll(confirmations)
                return
            self._run_delete(self.store.clear_all, lambda n: f"Deleted all {n} entries")
        elif isinstance(mode, ConfirmingBulk):
            cutoff = self.now() - mode.period.delta
            self._run_delete(
                lambda: self.store.delete_copied_since(cutoff),
                lambda n: f"Deleted {n} entries from the {mode.period.label}",
            )
        elif isinstance(mode, ConfirmingSingle):
            self._run_delete(
                lambda: self.store.delete_by_id(mode.entry_id),
                lambda deleted: "Entry deleted" if deleted else "Entry was already gone",
            )

    def _run_delete(self, action, describe) -> None:
        self.mode = NormalMode()
        try:
            result = action()
        except StorageError as e:
            logger.error(f"Delete failed: {e}")
            self.message = f"Delete failed: {e}"
            return
        self.message = describe(result)
        logger.info(self.message)
        self._resync()

    def _resync(self) -> None:
        """Re-read after a delete, keeping the selection as close as possible"""
        try:
            entries = self.store.list_all()
        except StorageError as e:
            logger.error(f"Re-sync after delete failed: {e}")
            self.message = f"Refresh failed: {e}"
            return
        self._set_entries(entries)
        self.viewport.clamp(self.filtered_count)
        self._last_refresh = self.clock()
