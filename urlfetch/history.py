"""In-memory history of recently fetched URLs."""

from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Deque, List

from urlfetch.constants import RetrievalMethod

EMPTY_HISTORY = "No URLs have been fetched yet."


@dataclass
class RecentFetchEntry:
    """One successful fetch."""
    url: str
    output_format: str
    method: str = RetrievalMethod.HTTP
    timestamp: datetime = field(default_factory=datetime.now)

    def render(self) -> str:
        line = (
            f"- {self.url} (converted to {self.output_format}) "
            f"fetched at {self.timestamp.strftime('%Y-%m-%d %H:%M:%S')}"
        )
        if self.method == RetrievalMethod.BROWSER:
            line += " via browser"
        return line


class RecentFetches:
    """Bounded, newest-first ring of fetch entries."""

    def __init__(self, maxlen: int = 10):
        if maxlen < 1:
            raise ValueError(f"History size must be positive, got {maxlen}")
        self._entries: Deque[RecentFetchEntry] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._entries.maxlen

    def __len__(self) -> int:
        return len(self._entries)

    def record(
        self, url: str, output_format: str, method: str = RetrievalMethod.HTTP
    ) -> RecentFetchEntry:
        entry = RecentFetchEntry(url=url, output_format=output_format, method=method)
        # appendleft on a full deque drops the oldest entry from the right
        self._entries.appendleft(entry)
        return entry

    def entries(self) -> List[RecentFetchEntry]:
        return list(self._entries)

    def clear(self):
        self._entries.clear()

    def render(self) -> str:
        """Plain-text listing for the history resource."""
        if not self._entries:
            return EMPTY_HISTORY
        return "\n".join(entry.render() for entry in self._entries)
