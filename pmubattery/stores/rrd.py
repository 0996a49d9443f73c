"""RRD series store - persists samples through the rrdtool executable.

Files live at ``<data_dir>/<host>/battery-<slot>/<metric>.rrd`` and are
created on first update.
"""

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from pmubattery.core.errors import StoreError
from pmubattery.core.sink import SeriesStore
from pmubattery.stores.base import SeriesDefinition

log = logging.getLogger(__name__)

DEFAULT_STEP = 10

# Per-step averages for ~3h, then 1min and 30min consolidations.
_RRA_SPANS = ((1, 1200), (6, 1190), (180, 1210))
_RRA_FUNCTIONS = ("AVERAGE", "MIN", "MAX")

Runner = Callable[[Sequence[str]], "subprocess.CompletedProcess"]


def _run(args: Sequence[str]) -> subprocess.CompletedProcess:
    return subprocess.run(list(args), check=False, capture_output=True, text=True)


def rra_definitions() -> List[str]:
    return [
        f"RRA:{cf}:0.2:{steps}:{rows}"
        for steps, rows in _RRA_SPANS
        for cf in _RRA_FUNCTIONS
    ]


class RrdSeriesStore(SeriesStore):
    """SeriesStore writing one RRD file per host and slot."""

    def __init__(self, definition: SeriesDefinition, data_dir: Path,
                 rrdtool: str = "rrdtool", step: int = DEFAULT_STEP,
                 runner: Optional[Runner] = None):
        self._definition = definition
        self._data_dir = Path(data_dir)
        self._rrdtool = rrdtool
        self._step = step
        self._runner = runner or _run

    @property
    def series(self) -> str:
        return self._definition.series

    def path_for(self, host: str, label: str) -> Path:
        return self._data_dir / host / self._definition.file_name(label)

    def update(self, host: str, label: str, value: str) -> None:
        path = self.path_for(host, label)
        if not path.exists():
            self._create(path)
        self._call("update", str(path), value)

    def _create(self, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"cannot create {path.parent}: {e}") from e

        log.info("Creating %s", path)
        self._call(
            "create", str(path),
            "--step", str(self._step),
            self._definition.data_source,
            *rra_definitions(),
        )

    def _call(self, command: str, *args: str) -> None:
        try:
            result = self._runner([self._rrdtool, command, *args])
        except FileNotFoundError as e:
            raise StoreError(f"{self._rrdtool} not found") from e

        if result.returncode != 0:
            detail = (result.stderr or "").strip() or f"exit status {result.returncode}"
            raise StoreError(f"rrdtool {command} failed: {detail}")
