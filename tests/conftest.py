from pathlib import Path
from typing import List, Tuple

import pytest

from pmubattery.core.sink import MetricSink


class RecordingSink(MetricSink):
    def __init__(self):
        self.submitted: List[Tuple[str, str, str]] = []

    def submit(self, series: str, label: str, value: str) -> None:
        self.submitted.append((series, label, value))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def pmu_dir(tmp_path: Path) -> Path:
    d = tmp_path / "pmu"
    d.mkdir()
    return d


@pytest.fixture
def slot_template(pmu_dir: Path) -> str:
    return str(pmu_dir / "battery_{index}")


def write_slots(pmu_dir: Path, *contents: str) -> None:
    """Write battery_0, battery_1, ... with the given status texts."""
    for index, text in enumerate(contents):
        (pmu_dir / f"battery_{index}").write_text(text)
