"""Series store implementations."""

from pmubattery.stores.base import SERIES_DEFINITIONS, SeriesDefinition
from pmubattery.stores.memory import MemorySeriesStore
from pmubattery.stores.rrd import RrdSeriesStore

__all__ = [
    "SERIES_DEFINITIONS",
    "SeriesDefinition",
    "MemorySeriesStore",
    "RrdSeriesStore",
]
