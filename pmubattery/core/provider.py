"""Abstract base class for battery slot sources."""

from abc import ABC, abstractmethod
from typing import Optional

from pmubattery.core.types import Reading


class BatterySource(ABC):
    """A source of per-slot battery status.

    Implementations:
    - PmuBatterySource: /proc/pmu/battery_<n> status files
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name (e.g., 'pmu')."""
        ...

    @abstractmethod
    def discover(self) -> int:
        """Count the battery slots currently exposed.

        Called once by the collector before the first poll cycle.
        Returning 0 is valid and makes every poll a no-op.
        """
        ...

    @abstractmethod
    def read_slot(self, index: int) -> Optional[Reading]:
        """Read and parse one slot's status.

        Returns a fresh Reading, or None if the slot has no data this
        cycle (e.g. the battery was removed).
        """
        ...

    def close(self) -> None:
        """Clean up resources."""
        pass
