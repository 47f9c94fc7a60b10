from typing import List, Optional, Tuple
from engine.model import Event

class EventLog:
    """Append-only store of battle diagnostics, read back by offset."""

    def __init__(self):
        self._log: List[Event] = []

    def __len__(self) -> int:
        return len(self._log)

    def append_many(self, evts: List[Event]) -> Tuple[int, int]:
        """Append events and return (start_offset, end_offset)."""
        start = len(self._log)
        self._log.extend(evts)
        return start, len(self._log) - 1

    def since(self, offset: int, limit: int = 1000, kind: Optional[str] = None) -> Tuple[List[Event], int]:
        """Return up to `limit` events from `offset` and the next offset to poll.

        With `kind`, only events of that kind are returned, but the next
        offset still advances past everything scanned.
        """
        offset = max(0, offset)
        chunk = self._log[offset: offset + limit]
        nxt = offset + len(chunk)
        if kind is not None:
            chunk = [e for e in chunk if e.kind == kind]
        return chunk, nxt
