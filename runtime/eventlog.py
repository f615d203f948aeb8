from collections import deque
from typing import Deque, List, Optional, Tuple
from .pipeline import TickReport

DEFAULT_MAX_REPORTS = 1800

class ReportLog:
    """Bounded store of tick reports for paging by offset.

    Offsets keep counting from the first report ever appended; once the bound
    is reached the oldest reports drop off and their offsets are gone.
    """

    def __init__(self, max_reports: int = DEFAULT_MAX_REPORTS):
        self._log: Deque[TickReport] = deque(maxlen=max_reports)
        self._base = 0  # Offset of the oldest retained report

    def append(self, report: TickReport) -> int:
        """Append a report and return its offset."""
        if len(self._log) == self._log.maxlen:
            self._base += 1
        self._log.append(report)
        return self._base + len(self._log) - 1

    def __len__(self) -> int:
        return len(self._log)

    @property
    def first_offset(self) -> int:
        return self._base

    @property
    def latest(self) -> Optional[TickReport]:
        return self._log[-1] if self._log else None

    def since(self, offset: int, limit: int = 1000) -> Tuple[List[TickReport], int]:
        """Return reports starting from offset, up to limit."""
        start = max(self._base, offset)
        index = start - self._base
        chunk = list(self._log)[index: index + limit]
        return chunk, start + len(chunk)
