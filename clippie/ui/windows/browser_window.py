"""Full-screen layout of the history browser."""

from datetime import datetime, timezone
from typing import Callable, List

from rich.console import Group, RenderableType
from rich.table import Table
from rich.text import Text

from clippie.ui.components.entry_row import EntryRow
from clippie.ui.components.preview_panel import PreviewPanel
from clippie.ui.components.status_bar import FilterBar, HeaderBar, StatusBar
from clippie.ui.managers.browser_state import BrowserState

# Narrower terminals show the list only
MIN_SPLIT_WIDTH = 60


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _single_line(lines: List[Text]) -> List[Text]:
    for line in lines:
        line.no_wrap = True
        line.overflow = "ellipsis"
    return lines


class BrowserWindow:
    """Renders header, filter bar, list with preview, prompt and key help.

    The four chrome lines match the viewport's reserved lines, so the
    output is exactly one terminal screen.
    """

    def __init__(self, state: BrowserState, now: Callable[[], datetime] = _utc_now):
        self.state = state
        self.now = now

    def render(self, width: int) -> Group:
        state = self.state
        status = StatusBar(state)
        top = _single_line([HeaderBar(state).build(), FilterBar(state).build()])
        bottom = _single_line([status.prompt(), status.help()])
        return Group(*top, self._body(width), *bottom)

    def _body(self, width: int) -> RenderableType:
        height = self.state.viewport.height
        if width < MIN_SPLIT_WIDTH:
            return Group(*_single_line(self._rows(width, height)))

        list_width = width // 2
        preview_width = width - list_width - 1
        body = Table.grid(padding=0)
        body.add_column(width=list_width, no_wrap=True)
        body.add_column(width=1, style="dim")
        body.add_column(width=preview_width, no_wrap=True)
        preview = PreviewPanel(self.state.selected_entry).build(height)
        body.add_row(
            Group(*_single_line(self._rows(list_width, height))),
            Text("\n".join("│" * height)),
            Group(*_single_line(preview)),
        )
        return body

    def _rows(self, width: int, height: int) -> List[Text]:
        state = self.state
        if not state.entries:
            rows = [Text("No clipboard history yet", style="dim italic")]
        elif not state.filtered:
            rows = [Text("No entries match the filter", style="dim italic")]
        else:
            now = self.now()
            rows = [
                EntryRow(entry, match, selected=index == state.selected_index, now=now).build(width)
                for index, (entry, match) in state.visible_entries()
            ]
        rows.extend(Text("") for _ in range(height - len(rows)))
        return rows
