"""Selection and scroll state for the history list."""

RESERVED_LINES = 4


class ViewportManager:
    """Keeps the selected row inside a window of `height` visible rows.

    The scroll offset only moves when the selection would leave the window.
    """

    def __init__(self, terminal_height: int = 24, reserved_lines: int = RESERVED_LINES):
        self.reserved_lines = reserved_lines
        self.height = self._list_height(terminal_height)
        self.selected = 0
        self.offset = 0

    def _list_height(self, terminal_height: int) -> int:
        return max(1, terminal_height - self.reserved_lines)

    def _ensure_visible(self) -> None:
        if self.selected < self.offset:
            self.offset = self.selected
        elif self.selected >= self.offset + self.height:
            self.offset = self.selected - self.height + 1

    def reset(self) -> None:
        self.selected = 0
        self.offset = 0

    def resize(self, terminal_height: int) -> None:
        self.height = self._list_height(terminal_height)
        self._ensure_visible()

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1
            self._ensure_visible()

    def move_down(self, count: int) -> None:
        if self.selected < count - 1:
            self.selected += 1
            self._ensure_visible()

    def page_up(self) -> None:
        self.selected = max(0, self.selected - self.height)
        self._ensure_visible()

    def page_down(self, count: int) -> None:
        if count == 0:
            return
        self.selected = min(count - 1, self.selected + self.height)
        self._ensure_visible()

    def home(self) -> None:
        self.reset()

    def end(self, count: int) -> None:
        if count == 0:
            return
        self.selected = count - 1
        self._ensure_visible()

    def clamp(self, count: int) -> None:
        """Pull selection and scroll back into bounds after the list shrank."""
        if count == 0:
            self.reset()
            return
        self.selected = min(self.selected, count - 1)
        self.offset = min(self.offset, max(0, count - self.height))
        self._ensure_visible()

    def visible_range(self, count: int) -> range:
        return range(self.offset, min(self.offset + self.height, count))
