"""Capability interfaces at the metrics pipeline boundary."""

from abc import ABC, abstractmethod


class MetricSink(ABC):
    """Receives formatted samples from the emitter.

    Submission is fire-and-forget: callers never inspect the outcome.
    """

    @abstractmethod
    def submit(self, series: str, label: str, value: str) -> None:
        """Accept one sample, e.g. ('battery_current', '0', 'N:1.500')."""
        ...


class SeriesStore(ABC):
    """Persists the values of a single named series."""

    @property
    @abstractmethod
    def series(self) -> str:
        """Series this store persists (e.g., 'battery_voltage')."""
        ...

    @abstractmethod
    def update(self, host: str, label: str, value: str) -> None:
        """Append one value for ``host``. Raises StoreError on failure."""
        ...

    def close(self) -> None:
        pass
