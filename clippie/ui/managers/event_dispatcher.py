"""Routes browser events to state transitions, per mode."""

import logging

from clippie.ui.domain.events import Event, Key, Resize, Tick
from clippie.ui.domain.modes import (
    ConfirmingAll,
    DeletePeriod,
    FilteringMode,
    SelectingPeriod,
    is_delete_flow,
)
from clippie.ui.managers.browser_state import BrowserState

logger = logging.getLogger("clippie.EventDispatcher")

YES_KEYS = ("y", "Y")
CANCEL_KEYS = ("n", "N", "escape")


class EventDispatcher:
    """Applies one event at a time to a BrowserState."""

    def __init__(self, state: BrowserState):
        self.state = state

    def handle(self, event: Event) -> bool:
        """
        Apply an event.

        Returns:
            True when the session should end
        """
        if isinstance(event, Tick):
            self.state.on_tick()
            return False
        if isinstance(event, Resize):
            self.state.resize(event.height)
            return False
        if not isinstance(event, Key):
            logger.warning(f"Ignoring unknown event {event!r}")
            return False

        self.state.clear_message()
        if event.name == "ctrl-c":
            return True

        mode = self.state.mode
        if isinstance(mode, FilteringMode):
            self._handle_filtering(event)
            return False
        if is_delete_flow(mode):
            self._handle_delete_flow(event)
            return False
        return self._handle_normal(event)

    def _handle_normal(self, key: Key) -> bool:
        name = key.name
        state = self.state
        if name in ("up", "k"):
            state.move_up()
        elif name in ("down", "j"):
            state.move_down()
        elif name == "pageup":
            state.page_up()
        elif name == "pagedown":
            state.page_down()
        elif name in ("home", "g"):
            state.home()
        elif name in ("end", "G"):
            state.end()
        elif name == "/":
            state.start_filter()
        elif name == "enter":
            return state.commit()
        elif name in ("q", "escape"):
            if state.has_filter:
                state.clear_filter()
            else:
                return True
        elif name == "r":
            state.refresh()
        elif name in ("d", "delete"):
            state.begin_single_delete()
        elif name == "D":
            state.begin_bulk_delete()
        return False

    def _handle_filtering(self, key: Key) -> None:
        name = key.name
        if name == "enter":
            self.state.confirm_filter()
        elif name == "escape":
            self.state.clear_filter()
        elif name == "backspace":
            self.state.filter_backspace()
        elif name == "up":
            self.state.move_up()
        elif name == "down":
            self.state.move_down()
        elif key.is_printable:
            self.state.filter_append(name)

    def _handle_delete_flow(self, key: Key) -> None:
        mode = self.state.mode
        if isinstance(mode, SelectingPeriod):
            self._handle_period_choice(key)
        elif isinstance(mode, ConfirmingAll):
            self._handle_all_confirmation(key)
        elif key.name in YES_KEYS:
            self.state.confirm()
        else:
            # One yes/no answer; anything but yes cancels
            self.state.cancel_delete()

    def _handle_period_choice(self, key: Key) -> None:
        if key.name in CANCEL_KEYS or key.name == "q":
            self.state.cancel_delete()
            return
        period = DeletePeriod.from_key(key.name)
        if period is not None:
            self.state.select_period(period)

    def _handle_all_confirmation(self, key: Key) -> None:
        if key.name in YES_KEYS:
            self.state.confirm()
        elif key.name in CANCEL_KEYS:
            self.state.cancel_delete()
        else:
            self.state.reset_confirmations()
