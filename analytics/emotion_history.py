"""
Emotion History module.
Throttled, time-bounded record of the primary face's dominant emotion.
"""

from collections import deque
from dataclasses import dataclass
from typing import Iterator, List, Optional
import config


@dataclass(frozen=True)
class HistoryEntry:
    """One retained sample. Timestamp is in milliseconds."""
    timestamp: float
    emotion: Optional[str]
    confidence: float
    face_count: int


class EmotionHistory:
    """
    Append-only deque with throttling and oldest-first eviction.

    Invariants after every append:
        - consecutive entries are at least `resolution` ms apart
        - no entry is older than `duration` seconds before the newest one
    """

    def __init__(
        self,
        duration: float = config.HISTORY_DURATION,
        resolution: float = config.TIMELINE_RESOLUTION
    ):
        """
        Args:
            duration: Retention window in seconds.
            resolution: Minimum ms between retained entries.
        """
        self.duration = duration
        self.resolution = resolution
        self._entries: deque = deque()

    def append(self, entry: HistoryEntry) -> bool:
        """
        Add an entry unless the throttle window is still open.

        Returns:
            True if the entry was retained.
        """
        if self._entries and entry.timestamp - self._entries[-1].timestamp < self.resolution:
            return False

        self._entries.append(entry)
        self._evict(entry.timestamp)
        return True

    def _evict(self, newest: float):
        cutoff = newest - self.duration * 1000
        while self._entries and self._entries[0].timestamp < cutoff:
            self._entries.popleft()

    def window(self, cutoff: float) -> List[HistoryEntry]:
        """Entries with timestamp >= cutoff (ms), oldest first."""
        return [entry for entry in self._entries if entry.timestamp >= cutoff]

    @property
    def last(self) -> Optional[HistoryEntry]:
        return self._entries[-1] if self._entries else None

    def clear(self):
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[HistoryEntry]:
        return iter(list(self._entries))
