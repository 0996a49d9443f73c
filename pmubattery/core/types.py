"""Core data types for the PMU battery collector."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SeriesName(Enum):
    """The three metric series a battery slot can report."""
    CURRENT = "current"
    VOLTAGE = "voltage"
    CHARGE = "charge"

    @property
    def metric(self) -> str:
        """Field name in the PMU status text and data source name."""
        return self.value

    @property
    def series(self) -> str:
        """Name the series is submitted under, e.g. 'battery_current'."""
        return f"battery_{self.value}"

    @classmethod
    def from_field(cls, name: str) -> Optional["SeriesName"]:
        """Match a status field name (case-sensitive), or None."""
        for member in cls:
            if member.value == name:
                return member
        return None


@dataclass
class Reading:
    """One slot's parsed quantities for a single poll cycle.

    Values are in base units (A, V, Ah). A field stays 0.0 when the
    status text did not report it.
    """
    current: float = 0.0
    voltage: float = 0.0
    charge: float = 0.0

    def value(self, name: SeriesName) -> float:
        return getattr(self, name.metric)

    def set(self, name: SeriesName, value: float) -> None:
        setattr(self, name.metric, value)


@dataclass(frozen=True)
class MetricSample:
    """A single gauge value ready for submission."""
    name: SeriesName
    label: str
    value: float

    @property
    def formatted(self) -> str:
        """Tagged gauge text: 'N' (now) followed by the value to 3 places."""
        return f"N:{self.value:.3f}"


@dataclass
class CollectorContext:
    """Startup configuration threaded through discovery and polling.

    ``slot_count`` is None until discovery runs and is fixed after that.
    """
    slot_path: str = "/proc/pmu/battery_{index}"
    host: str = "localhost"
    slot_count: Optional[int] = None

    @property
    def discovered(self) -> bool:
        return self.slot_count is not None
