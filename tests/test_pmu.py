import math
from pathlib import Path

import pytest

from pmubattery.core.types import CollectorContext, Reading
from pmubattery.providers import pmu
from pmubattery.providers.pmu import PmuBatterySource

from conftest import write_slots

PMU_STATUS = """\
flags      : 00000011
charge     : 2330
max_charge : 2510
current    : -1148
voltage    : 16251
time rem.  : 7306
"""


@pytest.mark.parametrize("slots", [0, 1, 2, 5])
def test_discover_counts_contiguous_slots(pmu_dir: Path, slot_template: str, slots: int):
    write_slots(pmu_dir, *["current xx 1\n"] * slots)
    assert pmu.discover(slot_template) == slots


def test_discover_stops_at_first_gap(pmu_dir: Path, slot_template: str):
    write_slots(pmu_dir, "", "")
    (pmu_dir / "battery_3").write_text("")
    assert pmu.discover(slot_template) == 2


def test_discover_missing_directory(tmp_path: Path):
    assert pmu.discover(str(tmp_path / "nope" / "battery_{index}")) == 0


def test_slot_path_too_long_stops_enumeration(tmp_path: Path):
    template = str(tmp_path / ("x" * 600) / "battery_{index}")
    assert pmu.slot_path(template, 0) is None
    assert pmu.discover(template) == 0


def test_slot_path_bad_template():
    assert pmu.slot_path("/proc/pmu/battery_{slot}", 0) is None
    assert pmu.slot_path("/proc/pmu/battery_{index}", 3) == "/proc/pmu/battery_3"


def test_parse_current_only():
    reading = pmu.parse_status(["current xx 1500\n"])
    assert reading == Reading(current=1.5, voltage=0.0, charge=0.0)


def test_parse_pmu_status_file_format():
    reading = pmu.parse_status(PMU_STATUS.splitlines())
    assert reading.charge == pytest.approx(2.33)
    assert reading.current == pytest.approx(-1.148)
    assert reading.voltage == pytest.approx(16.251)


def test_parse_ignores_unknown_and_short_lines():
    reading = pmu.parse_status([
        "Current xx 1000",
        "temperature xx 40000",
        "voltage 12000",
        "",
        "charge",
    ])
    assert reading == Reading()


def test_parse_malformed_number_is_zero():
    reading = pmu.parse_status(["voltage xx abc", "charge xx 900"])
    assert reading.voltage == 0.0
    assert reading.charge == pytest.approx(0.9)


@pytest.mark.parametrize("token,expected", [
    ("1500", 1500.0),
    ("12abc", 12.0),
    ("-3.5mA", -3.5),
    ("1e3", 1000.0),
    (".25", 0.25),
    ("abc", 0.0),
    ("-", 0.0),
    ("0x10", 16.0),
    ("-0x1.8p1", -3.0),
    ("0x", 0.0),
    ("inf", float("inf")),
    ("-Infinity", float("-inf")),
    ("1e5000", float("inf")),
])
def test_parse_magnitude_reads_leading_number(token: str, expected: float):
    assert pmu.parse_magnitude(token) == expected


def test_parse_last_matching_line_wins():
    reading = pmu.parse_status(["current xx 1000", "current xx 2000"])
    assert reading.current == 2.0


def test_parse_extra_fields_are_ignored():
    reading = pmu.parse_status(["voltage : 12000 mV a b c d e f g"])
    assert reading.voltage == 12.0


def test_read_slot_missing_file_returns_none(slot_template: str):
    assert pmu.read_slot(slot_template, 0) is None


def test_read_slot_reads_file(pmu_dir: Path, slot_template: str):
    write_slots(pmu_dir, "current xx 2500\nvoltage xx 12600\ncharge xx 0\n")
    assert pmu.read_slot(slot_template, 0) == Reading(current=2.5, voltage=12.6, charge=0.0)


def test_read_slot_starts_fresh_each_time(pmu_dir: Path, slot_template: str):
    write_slots(pmu_dir, "current xx 2500\n")
    assert pmu.read_slot(slot_template, 0).current == 2.5

    write_slots(pmu_dir, "voltage xx 1000\n")
    assert pmu.read_slot(slot_template, 0) == Reading(voltage=1.0)


def test_source_uses_context_template(pmu_dir: Path, slot_template: str):
    write_slots(pmu_dir, "charge xx 500\n", "charge xx 700\n")
    source = PmuBatterySource(CollectorContext(slot_path=slot_template))

    assert source.name == "pmu"
    assert source.discover() == 2
    assert source.read_slot(1).charge == pytest.approx(0.7)


def test_parse_magnitude_nan():
    assert math.isnan(pmu.parse_magnitude("nan"))


def test_read_slot_closes_file_when_parsing_fails(pmu_dir: Path, slot_template: str,
                                                  monkeypatch):
    write_slots(pmu_dir, "current xx 1500\n")
    handles = []

    def failing_parse(fh):
        handles.append(fh)
        next(iter(fh))
        raise OSError("read error")

    monkeypatch.setattr(pmu, "parse_status", failing_parse)

    with pytest.raises(OSError):
        pmu.read_slot(slot_template, 0)
    assert handles[0].closed
