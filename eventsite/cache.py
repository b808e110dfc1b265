import threading
from typing import Dict, Generic, Optional, TypeVar

T = TypeVar("T")


class ResultCache(Generic[T]):
    """
    Process-lifetime map of event id to resolution result.

    Entries are never expired; callers that need a fresh answer must
    invalidate the id themselves.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._entries: Dict[str, T] = {}

    def get(self, event_id: str) -> Optional[T]:
        with self._lock:
            return self._entries.get(event_id)

    def put_if_absent(self, event_id: str, result: T) -> T:
        """Store result unless one exists; return whichever is stored."""
        with self._lock:
            return self._entries.setdefault(event_id, result)

    def invalidate(self, event_id: str) -> None:
        with self._lock:
            self._entries.pop(event_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __contains__(self, event_id: str) -> bool:
        with self._lock:
            return event_id in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
