#!/usr/bin/env python3
"""
Monitor Service - Polls the clipboard and records stable values

A changed clipboard value only becomes history once it has stayed the same
for the whole stability window. Some applications write the clipboard in
several steps; the intermediate values must never be recorded.
"""
import logging
import time
import traceback
from enum import Enum
from typing import Callable, Hashable, Optional

from clippie.core.protocols import ClipboardPort, PauseFlagPort, RecorderPort
from clippie.exceptions import ClipboardAccessError, StorageError

logger = logging.getLogger(__name__)


class MonitorState(Enum):
    IDLE = "idle"
    CANDIDATE_DETECTED = "candidate_detected"


class MonitorService:
    """Clipboard polling loop with a stability debounce"""

    def __init__(
        self,
        database_service: RecorderPort,
        clipboard: ClipboardPort,
        pause_service: PauseFlagPort,
        poll_interval: float = 0.5,
        stability_window: float = 2.0,
        min_content_length: int = 1,
        sleep: Callable[[float], None] = time.sleep,
    ):
        """
        Initialize monitor service

        Args:
            database_service: Store receiving stable values via insert_or_touch
            clipboard: Clipboard to poll
            pause_service: Flag re-read every cycle; when set nothing is written
            poll_interval: Seconds between polls
            stability_window: Seconds a candidate must stay unchanged
            min_content_length: Minimum stripped length of a recordable value
            sleep: Blocking delay, replaceable in tests
        """
        self.db_service = database_service
        self.clipboard = clipboard
        self.pause_service = pause_service
        self.poll_interval = poll_interval
        self.stability_window = stability_window
        self.min_content_length = min_content_length
        self.sleep = sleep

        self.state = MonitorState.IDLE
        self.last_candidate: Optional[str] = None
        self.paused = False
        # Content already on the clipboard at startup is not history
        self.last_seen_token: Optional[Hashable] = self._initial_token()

    def _initial_token(self) -> Optional[Hashable]:
        try:
            return self.clipboard.change_token()
        except ClipboardAccessError as e:
            logger.warning(f"Clipboard unavailable at startup: {e}")
            return None

    def run_forever(self):
        """Poll until the process is terminated. Never returns."""
        logger.info(
            f"Clipboard monitoring daemon started "
            f"(poll={self.poll_interval}s, stability window={self.stability_window}s)"
        )
        while True:
            self.run_cycle()
            self.sleep(self.poll_interval)

    def run_cycle(self) -> Optional[int]:
        """
        Run one poll cycle.

        Every error is logged and swallowed so the loop keeps running.

        Returns:
            ID of the entry recorded in this cycle, if any
        """
        try:
            return self._check_clipboard()
        except ClipboardAccessError as e:
            logger.error(f"Error checking clipboard: {e}")
        except StorageError as e:
            logger.error(f"Error recording clipboard entry: {e}")
        except Exception as e:
            logger.error(f"Unexpected error in monitor cycle: {e}")
            logger.error(traceback.format_exc())
        finally:
            self.state = MonitorState.IDLE
            self.last_candidate = None
        return None

    def _check_clipboard(self) -> Optional[int]:
        self.paused = self.pause_service.is_paused()

        token = self.clipboard.change_token()
        if token == self.last_seen_token:
            return None
        self.last_seen_token = token

        candidate = self._accept(self.clipboard.read())
        if candidate is None:
            return None
        return self._confirm_stability(candidate)

    def _accept(self, content: Optional[str]) -> Optional[str]:
        """Filter out empty and whitespace-only clutter"""
        if content is None:
            return None
        if len(content.strip()) < self.min_content_length:
            logger.debug(f"Ignoring short clipboard value ({len(content)} chars)")
            return None
        return content

    def _confirm_stability(self, candidate: str) -> Optional[int]:
        # Only the immediately preceding candidate is compared: a value that
        # comes back after a different one starts a fresh window.
        while True:
            self.state = MonitorState.CANDIDATE_DETECTED
            self.last_candidate = candidate
            self.sleep(self.stability_window)

            self.last_seen_token = self.clipboard.change_token()
            current = self.clipboard.read()
            if current == candidate:
                return self._persist(candidate)

            logger.info("Clipboard changed during stability window, discarding candidate")
            candidate = self._accept(current)
            if candidate is None:
                return None

    def _persist(self, content: str) -> Optional[int]:
        if self.paused:
            logger.info(f"Monitoring paused, not recording ({len(content)} chars)")
            return None
        entry_id = self.db_service.insert_or_touch(content)
        logger.info(f"✓ Recorded clipboard entry (ID: {entry_id}, {len(content)} chars)")
        return entry_id
