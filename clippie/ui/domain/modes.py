"""Browser interaction modes.

The browser is always in exactly one of these modes. The delete flow is a
sub-union of its own so a confirmation prompt can never coexist with an
active filter edit.
"""

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import Optional, Union

REQUIRED_ALL_CONFIRMATIONS = 3


class DeletePeriod(Enum):
    """Bulk delete ranges, keyed by the letter that selects them."""

    HOUR = ("h", "last hour", timedelta(hours=1))
    DAY = ("d", "last day", timedelta(days=1))
    WEEK = ("w", "last week", timedelta(weeks=1))
    MONTH = ("m", "last month", timedelta(days=30))
    YEAR = ("y", "last year", timedelta(days=365))
    ALL = ("a", "ALL", None)

    def __init__(self, key: str, label: str, delta: Optional[timedelta]):
        self.key = key
        self.label = label
        self.delta = delta

    @classmethod
    def from_key(cls, key: str) -> Optional["DeletePeriod"]:
        for period in cls:
            if period.key == key:
                return period
        return None


@dataclass(frozen=True)
class NormalMode:
    pass


@dataclass(frozen=True)
class FilteringMode:
    pass


@dataclass(frozen=True)
class SelectingPeriod:
    pass


@dataclass(frozen=True)
class ConfirmingSingle:
    entry_id: int


@dataclass(frozen=True)
class ConfirmingBulk:
    period: DeletePeriod


@dataclass(frozen=True)
class ConfirmingAll:
    confirmations: int = 0

    @property
    def remaining(self) -> int:
        return REQUIRED_ALL_CONFIRMATIONS - self.confirmations


DeleteFlow = Union[SelectingPeriod, ConfirmingSingle, ConfirmingBulk, ConfirmingAll]
Mode = Union[NormalMode, FilteringMode, DeleteFlow]

DELETE_FLOW_MODES = (SelectingPeriod, ConfirmingSingle, ConfirmingBulk, ConfirmingAll)


def is_delete_flow(mode: Mode) -> bool:
    return isinstance(mode, DELETE_FLOW_MODES)
