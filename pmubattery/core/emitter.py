"""Emission gate and metric emitter."""

import logging
from typing import List

from pmubattery.core.sink import MetricSink
from pmubattery.core.types import MetricSample, Reading, SeriesName

log = logging.getLogger(__name__)


def should_emit(value: float) -> bool:
    """Only strictly positive values are reported."""
    return value > 0.0


def samples_for(slot: int, reading: Reading) -> List[MetricSample]:
    """Gated samples for one slot, in current/voltage/charge order."""
    label = str(slot)
    return [
        MetricSample(name=name, label=label, value=reading.value(name))
        for name in SeriesName
        if should_emit(reading.value(name))
    ]


class MetricEmitter:
    """Submits a slot's gated samples to a MetricSink."""

    def __init__(self, sink: MetricSink):
        self._sink = sink

    def emit(self, slot: int, reading: Reading) -> int:
        """Submit every valid quantity of ``reading``. Returns the count."""
        samples = samples_for(slot, reading)
        for sample in samples:
            self._sink.submit(sample.name.series, sample.label, sample.formatted)
        if not samples:
            log.debug("Battery slot %d reported nothing this cycle", slot)
        return len(samples)
