"""Single history row: marker, age, copy count and a highlighted preview."""

from datetime import datetime
from typing import Optional

from rich.text import Text

from clippie.database import ClipboardEntry
from clippie.ui.utils.formatting import format_timestamp, one_line
from clippie.ui.utils.fuzzy import FuzzyMatch
from clippie.ui.utils.highlighting import highlight_text

AGE_WIDTH = 10
COUNT_WIDTH = 5


class EntryRow:
    def __init__(
        self,
        entry: ClipboardEntry,
        match: FuzzyMatch,
        selected: bool = False,
        now: Optional[datetime] = None,
    ):
        self.entry = entry
        self.match = match
        self.selected = selected
        self.now = now

    def build(self, width: int) -> Text:
        marker = "▶ " if self.selected else "  "
        age = format_timestamp(self.entry.last_copied, now=self.now)
        count = f"×{self.entry.copy_count}" if self.entry.copy_count > 1 else ""

        row = Text(marker, style="bold cyan" if self.selected else "")
        row.append(f"{age:<{AGE_WIDTH}}", style="dim")
        row.append(f"{count:>{COUNT_WIDTH}} ", style="magenta")

        room = max(0, width - len(row))
        row.append_text(self._preview(room))
        if self.selected:
            row.stylize("reverse")
        return row

    def _preview(self, room: int) -> Text:
        preview = one_line(self.entry.content)
        if len(preview) > room:
            preview = preview[:max(0, room - 1)] + "…" if room else ""
        return highlight_text(preview, self.match.ranges)
