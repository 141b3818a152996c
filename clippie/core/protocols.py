"""Protocol definitions for dependency injection."""

from typing import Hashable, List, Optional, Protocol

from clippie.database import ClipboardEntry, Timestamp


class ClipboardPort(Protocol):
    def read(self) -> Optional[str]: ...

    def write(self, text: str) -> None: ...

    def change_token(self) -> Hashable: ...


class HistoryStorePort(Protocol):
    def list_all(self) -> List[ClipboardEntry]: ...

    def delete_by_id(self, entry_id: int) -> bool: ...

    def delete_copied_since(self, cutoff: Timestamp) -> int: ...

    def clear_all(self) -> int: ...


class RecorderPort(Protocol):
    def insert_or_touch(self, content: str, timestamp: Optional[Timestamp] = None) -> int: ...


class PauseFlagPort(Protocol):
    def is_paused(self) -> bool: ...
