"""In-memory series store, for dry runs and tests."""

import logging
from collections import deque
from typing import Deque, Optional, Tuple

from pmubattery.core.sink import SeriesStore

log = logging.getLogger(__name__)


class MemorySeriesStore(SeriesStore):
    """Keeps (host, label, value) updates, the oldest dropped past ``maxlen``."""

    def __init__(self, series: str, maxlen: Optional[int] = None):
        self._series = series
        self.updates: Deque[Tuple[str, str, str]] = deque(maxlen=maxlen)

    @property
    def series(self) -> str:
        return self._series

    def update(self, host: str, label: str, value: str) -> None:
        log.debug("%s %s[%s] %s", host, self._series, label, value)
        self.updates.append((host, label, value))
