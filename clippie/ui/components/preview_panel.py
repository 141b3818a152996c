"""Full content of the selected entry, beside the list."""

from typing import List, Optional

from rich.text import Text

from clippie.database import ClipboardEntry
from clippie.ui.utils.formatting import format_absolute_timestamp


class PreviewPanel:
    def __init__(self, entry: Optional[ClipboardEntry]):
        self.entry = entry

    def build(self, height: int) -> List[Text]:
        """At most `height` lines; longer content is cut off"""
        if self.entry is None:
            return [Text("No entry selected", style="dim")]

        entry = self.entry
        plural = "time" if entry.copy_count == 1 else "times"
        lines = [
            Text(f"─ Entry #{entry.id}", style="dim"),
            Text(f"First copied {format_absolute_timestamp(entry.created_at)}", style="dim"),
            Text(f"Copied {entry.copy_count} {plural}", style="dim"),
            Text(""),
        ]
        lines.extend(Text(line.replace("\t", "    ")) for line in entry.content.splitlines())

        if len(lines) > height:
            lines = lines[:max(0, height - 1)] + [Text("…", style="dim")]
        return lines[:height]
