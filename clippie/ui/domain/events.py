"""Events delivered to the browser loop."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Key:
    """A key press.

    Printable keys carry their character ("a", "/", "D"); special keys a
    lowercase name ("up", "down", "pageup", "pagedown", "home", "end",
    "enter", "escape", "backspace", "delete", "ctrl-c").
    """

    name: str

    @property
    def is_printable(self) -> bool:
        return len(self.name) == 1 and self.name.isprintable()


@dataclass(frozen=True)
class Tick:
    """Input poll timed out without a key press."""


@dataclass(frozen=True)
class Resize:
    width: int
    height: int


Event = Union[Key, Tick, Resize]
