"""Chrome lines around the history list: header, filter bar, prompt and key help."""

from rich.text import Text

from clippie.ui.domain.modes import (
    ConfirmingAll,
    ConfirmingBulk,
    ConfirmingSingle,
    DeletePeriod,
    FilteringMode,
    SelectingPeriod,
)
from clippie.ui.managers.browser_state import BrowserState

NORMAL_HELP = (
    "↑/k ↓/j move  g/G top/bottom  / filter  enter copy  "
    "d delete  D bulk delete  r refresh  q quit"
)
FILTER_HELP = "type to filter  enter keep  esc clear  ↑/↓ move"


class HeaderBar:
    def __init__(self, state: BrowserState):
        self.state = state

    def build(self) -> Text:
        header = Text("Clippie", style="bold cyan")
        total = len(self.state.entries)
        shown = self.state.filtered_count
        if self.state.has_filter:
            header.append(f"  {shown} of {total} entries", style="dim")
        else:
            header.append(f"  {total} entries", style="dim")
        return header


class FilterBar:
    def __init__(self, state: BrowserState):
        self.state = state

    def build(self) -> Text:
        editing = isinstance(self.state.mode, FilteringMode)
        if not editing and not self.state.has_filter:
            return Text("Press / to filter", style="dim")
        bar = Text("Filter: ", style="bold")
        bar.append(self.state.filter_text, style="yellow")
        if editing:
            bar.append("█", style="blink")
        return bar


class StatusBar:
    """Prompt for the current delete step, otherwise the last message"""

    def __init__(self, state: BrowserState):
        self.state = state

    def prompt(self) -> Text:
        mode = self.state.mode
        if isinstance(mode, SelectingPeriod):
            choices = "  ".join(f"{p.key} {p.label}" for p in DeletePeriod)
            return Text(f"Delete entries copied in: {choices}  (esc cancel)", style="bold yellow")
        if isinstance(mode, ConfirmingSingle):
            return Text("Delete the selected entry? (y/n)", style="bold yellow")
        if isinstance(mode, ConfirmingBulk):
            return Text(
                f"Delete every entry copied in the {mode.period.label}? (y/n)",
                style="bold yellow",
            )
        if isinstance(mode, ConfirmingAll):
            return Text(
                f"Delete ALL history? This cannot be undone. "
                f"Press y {mode.remaining} more time(s) (n cancels)",
                style="bold red",
            )
        if self.state.message:
            return Text(self.state.message, style="green")
        return Text("")

    def help(self) -> Text:
        if isinstance(self.state.mode, FilteringMode):
            return Text(FILTER_HELP, style="dim")
        return Text(NORMAL_HELP, style="dim")
