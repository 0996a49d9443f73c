"""Series definitions shared by the store implementations."""

from dataclasses import dataclass
from typing import Dict

from pmubattery.core.types import SeriesName

# Seconds without an update before a gauge value becomes unknown.
HEARTBEAT = 25


@dataclass(frozen=True)
class SeriesDefinition:
    """On-disk layout of one series: file name and single data source."""
    name: SeriesName
    heartbeat: int = HEARTBEAT
    minimum: str = "0"
    maximum: str = "U"

    @property
    def series(self) -> str:
        return self.name.series

    @property
    def data_source(self) -> str:
        """e.g. 'DS:current:GAUGE:25:0:U'."""
        return (f"DS:{self.name.metric}:GAUGE:{self.heartbeat}:"
                f"{self.minimum}:{self.maximum}")

    def file_name(self, label: str) -> str:
        """Path relative to the host directory, e.g. 'battery-0/current.rrd'."""
        return f"battery-{label}/{self.name.metric}.rrd"


SERIES_DEFINITIONS: Dict[str, SeriesDefinition] = {
    name.series: SeriesDefinition(name) for name in SeriesName
}
