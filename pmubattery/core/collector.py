"""Battery collector - discovers slots once, then polls them on demand."""

import logging
from enum import Enum, auto
from typing import Dict, Optional

from pmubattery.core.emitter import MetricEmitter
from pmubattery.core.errors import CollectorError
from pmubattery.core.provider import BatterySource
from pmubattery.core.sink import MetricSink
from pmubattery.core.types import CollectorContext, Reading

log = logging.getLogger(__name__)


class CollectorState(Enum):
    UNINITIALIZED = auto()
    IDLE = auto()
    POLLING = auto()


class BatteryCollector:
    """Pure-Python collector core without Qt dependency.

    Used directly by the CLI and driven by the Qt-aware CollectorService.
    The slot count is established by ``discover()`` and never changes;
    batteries hot-plugged after startup are not picked up.
    """

    def __init__(self, context: CollectorContext, source: BatterySource,
                 sink: MetricSink):
        self._context = context
        self._source = source
        self._emitter = MetricEmitter(sink)
        self._state = CollectorState.UNINITIALIZED

    @property
    def state(self) -> CollectorState:
        return self._state

    @property
    def slot_count(self) -> int:
        if not self._context.discovered:
            raise CollectorError("battery slots have not been discovered")
        return self._context.slot_count

    def discover(self) -> int:
        """Count the battery slots. Must be called exactly once."""
        if self._state is not CollectorState.UNINITIALIZED:
            raise CollectorError("battery slots were already discovered")

        count = self._source.discover()
        self._context.slot_count = count
        self._state = CollectorState.IDLE
        log.info("Found %d battery slot(s) via %s", count, self._source.name)
        return count

    def read_slot(self, index: int) -> Optional[Reading]:
        """Read one slot; any failure means no reading this cycle."""
        try:
            return self._source.read_slot(index)
        except Exception:
            log.debug("Battery read failed for slot %d", index, exc_info=True)
            return None

    def read_all(self) -> Dict[int, Reading]:
        """Read every known slot. Returns {slot: reading} for slots with data."""
        results = {}
        for index in range(self.slot_count):
            reading = self.read_slot(index)
            if reading is not None:
                results[index] = reading
        return results

    def poll(self) -> int:
        """Run one poll cycle over all slots. Returns the number of samples sent."""
        if self._state is CollectorState.UNINITIALIZED or not self._context.discovered:
            raise CollectorError("poll() called before discover()")
        if self._state is CollectorState.POLLING:
            raise CollectorError("poll() called while a cycle is running")

        self._state = CollectorState.POLLING
        submitted = 0
        try:
            for index in range(self.slot_count):
                reading = self.read_slot(index)
                if reading is not None:
                    submitted += self._emitter.emit(index, reading)
        finally:
            self._state = CollectorState.IDLE

        log.debug("Poll cycle submitted %d sample(s)", submitted)
        return submitted

    def scan_once(self) -> Dict[int, Reading]:
        """Synchronous one-shot: discover if needed and read all slots.

        Useful for the CLI where nothing is persisted.
        """
        if self._state is CollectorState.UNINITIALIZED:
            self.discover()
        return self.read_all()

    def close(self) -> None:
        try:
            self._source.close()
        except Exception:
            log.debug("Closing source %s failed", self._source.name)
