"""Stored path construction."""
import time
from typing import Callable, Optional


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class StoredPathBuilder:
    """
    Builds ``{folder}/{timestamp}-{file name}`` paths.
    
    Timestamps are milliseconds since the epoch and strictly increase per
    builder, so two paths from the same builder never collide even when
    built within the same millisecond.
    """
    
    def __init__(self, clock: Optional[Callable[[], int]] = None):
        self._clock = clock or _now_ms
        self._last = 0
    
    def next_timestamp(self) -> int:
        """Returns a timestamp greater than any previously returned."""
        stamp = max(int(self._clock()), self._last + 1)
        self._last = stamp
        return stamp
    
    def build(self, file_name: str, folder: Optional[str] = None) -> str:
        """
        Build a stored path.
        
        Args:
            file_name: Original file name
            folder: Optional folder prefix; surrounding slashes are ignored
        """
        name = f"{self.next_timestamp()}-{file_name}"
        prefix = (folder or '').strip('/')
        return f"{prefix}/{name}" if prefix else name
