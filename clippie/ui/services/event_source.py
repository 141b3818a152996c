"""Terminal input polling thread.

Reads raw key presses through prompt_toolkit's input layer and turns them
into browser events on a queue. A poll that times out without input yields
a Tick so the browser loop has a steady heartbeat.
"""

import logging
import os
import queue
import select
import shutil
import sys
import threading
from typing import Callable, List, Optional, Tuple

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding import KeyPress
from prompt_toolkit.keys import Keys

from clippie.ui.domain.events import Event, Key, Resize, Tick

logger = logging.getLogger("clippie.EventSource")

KEY_NAMES = {
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.PageUp: "pageup",
    Keys.PageDown: "pagedown",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.Escape: "escape",
    Keys.ControlM: "enter",
    Keys.ControlJ: "enter",
    Keys.ControlH: "backspace",
    Keys.ControlC: "ctrl-c",
    Keys.Delete: "delete",
}


def key_name(key_press: KeyPress) -> Optional[str]:
    """Browser key name for a prompt_toolkit key press, None if unhandled"""
    name = KEY_NAMES.get(key_press.key)
    if name is not None:
        return name
    if isinstance(key_press.key, str) and not isinstance(key_press.key, Keys):
        if len(key_press.key) == 1 and key_press.key.isprintable():
            return key_press.key
    return None


def _terminal_size() -> Tuple[int, int]:
    """Size of the terminal behind stderr; stdout may be captured"""
    try:
        size = os.get_terminal_size(sys.stderr.fileno())
    except (AttributeError, ValueError, OSError):
        size = shutil.get_terminal_size()
    return size.columns, size.lines


class TerminalEventSource:
    """Background thread feeding Key, Tick and Resize events to a queue"""

    def __init__(
        self,
        timeout: float = 0.1,
        input_factory: Callable[[], Input] = create_input,
        size_provider: Callable[[], Tuple[int, int]] = _terminal_size,
    ):
        self.timeout = timeout
        self.input_factory = input_factory
        self.size_provider = size_provider
        self.events: "queue.Queue[Event]" = queue.Queue()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._size = size_provider()

    def start(self) -> None:
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="clippie-input")
        self._thread.start()

    def stop(self) -> None:
        """Signal the polling thread and wait for it to finish"""
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def get(self) -> Event:
        """Next event; blocks until one is available"""
        return self.events.get()

    def _run(self) -> None:
        terminal_input = self.input_factory()
        try:
            with terminal_input.raw_mode():
                while not self._stop.is_set():
                    self._poll(terminal_input)
        except Exception as e:
            logger.exception(f"Input polling failed: {e}")
            # Let the browser loop end instead of waiting forever
            self.events.put(Key("ctrl-c"))
        finally:
            terminal_input.close()

    def _poll(self, terminal_input: Input) -> None:
        ready, _, _ = select.select([terminal_input.fileno()], [], [], self.timeout)
        if ready:
            presses = terminal_input.read_keys()
        else:
            # A lone Escape is held back by the parser until flushed
            presses = terminal_input.flush_keys()

        if self._stop.is_set():
            return
        self._check_resize()
        names = self._names(presses)
        for name in names:
            self.events.put(Key(name))
        if not ready and not names:
            self.events.put(Tick())

    def _names(self, presses: List[KeyPress]) -> List[str]:
        names = []
        for press in presses:
            name = key_name(press)
            if name is None:
                logger.debug(f"Ignoring key {press.key!r}")
                continue
            names.append(name)
        return names

    def _check_resize(self) -> None:
        size = self.size_provider()
        if size != self._size:
            self._size = size
            self.events.put(Resize(*size))
