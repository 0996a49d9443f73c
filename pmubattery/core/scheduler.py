"""Qt-driven periodic scheduler for the battery collector."""

import logging
from typing import Optional

from PyQt5.QtCore import QObject, QTimer, pyqtSignal

from pmubattery.core.collector import BatteryCollector, CollectorState

log = logging.getLogger(__name__)


class CollectorService(QObject):
    """Runs discovery once, then a poll cycle on every timer tick.

    Signals:
        slots_discovered(int): Slot count established at startup.
        cycle_finished(int): Samples submitted by the last poll cycle.
    """

    slots_discovered = pyqtSignal(int)
    cycle_finished = pyqtSignal(int)

    def __init__(self, collector: BatteryCollector, interval_ms: int = 10000,
                 parent: Optional[QObject] = None):
        super().__init__(parent)
        self._collector = collector
        self._interval = interval_ms

        self._poll_timer = QTimer(self)
        self._poll_timer.timeout.connect(self._run_cycle)

    @property
    def interval_ms(self) -> int:
        return self._interval

    def is_active(self) -> bool:
        return self._poll_timer.isActive()

    def start(self) -> None:
        """Discover slots and begin polling."""
        if self._collector.state is CollectorState.UNINITIALIZED:
            count = self._collector.discover()
            self.slots_discovered.emit(count)
        self._run_cycle()
        self._poll_timer.start(self._interval)

    def stop(self) -> None:
        self._poll_timer.stop()
        self._collector.close()

    def _run_cycle(self) -> None:
        submitted = self._collector.poll()
        self.cycle_finished.emit(submitted)
