"""Clipboard operations service."""

import hashlib
import logging
from typing import Optional

import pyperclip

from clippie.exceptions import ClipboardAccessError

logger = logging.getLogger("clippie.ClipboardService")


class ClipboardService:
    """Plain-text system clipboard backed by pyperclip."""

    def read(self) -> Optional[str]:
        """Return the clipboard text, or None when the clipboard is empty."""
        try:
            content = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardAccessError("Failed to read from clipboard", e) from e
        return content or None

    def write(self, text: str) -> None:
        """Copy plain text to clipboard."""
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardAccessError("Failed to write to clipboard", e) from e
        logger.info(f"Copied {len(text)} chars to clipboard")

    def change_token(self) -> Optional[str]:
        """
        Cheap value that changes whenever the clipboard content changes.

        pyperclip has no change counter, so the token is a digest of the
        current text. Re-copying identical text therefore does not count
        as a change.
        """
        content = self.read()
        if content is None:
            return None
        return hashlib.sha1(content.encode("utf-8")).hexdigest()
