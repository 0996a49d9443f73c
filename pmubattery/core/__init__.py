"""Core abstractions for the PMU battery collector."""

from pmubattery.core.types import (
    SeriesName,
    Reading,
    MetricSample,
    CollectorContext,
)
from pmubattery.core.errors import CollectorError, StoreError
from pmubattery.core.provider import BatterySource
from pmubattery.core.sink import MetricSink, SeriesStore
from pmubattery.core.emitter import MetricEmitter, should_emit
from pmubattery.core.collector import BatteryCollector, CollectorState

__all__ = [
    "SeriesName",
    "Reading",
    "MetricSample",
    "CollectorContext",
    "CollectorError",
    "StoreError",
    "BatterySource",
    "MetricSink",
    "SeriesStore",
    "MetricEmitter",
    "should_emit",
    "BatteryCollector",
    "CollectorState",
]
