"""PMU battery source: reads /proc/pmu/battery_<n> status files.

Each file holds one record per line, e.g.::

    flags      : 00000011
    charge     : 2330
    max_charge : 2510
    current    : -1148
    voltage    : 16251
    time rem.  : 7306

Only ``current``, ``voltage`` and ``charge`` are used. Values are
reported in milli-units and converted to A, V and Ah.
"""

import logging
import os
import re
from typing import Optional

from pmubattery.core.provider import BatterySource
from pmubattery.core.types import CollectorContext, Reading, SeriesName

log = logging.getLogger(__name__)

DEFAULT_SLOT_PATH = "/proc/pmu/battery_{index}"

# Formatted paths at or above this length stop enumeration.
PATH_MAX_LEN = 512

# Fields beyond this count are dropped when splitting a record.
MAX_FIELDS = 8

_HEX_PREFIX = re.compile(
    r"[+-]?0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?\d+)?"
)
_SPECIAL_PREFIX = re.compile(r"[+-]?(?:inf(?:inity)?|nan)", re.IGNORECASE)
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
)


def slot_path(template: str, index: int) -> Optional[str]:
    """Format the status path for slot ``index``, or None if unusable."""
    try:
        path = template.format(index=index)
    except (KeyError, IndexError, ValueError):
        log.debug("Slot path template %r does not format", template)
        return None
    if len(path) >= PATH_MAX_LEN:
        return None
    return path


def parse_magnitude(token: str) -> float:
    """Parse the leading number of ``token`` like C atof; 0.0 if there is none.

    Accepts decimal and hexadecimal floats and inf/nan.
    """
    token = token.lstrip()
    try:
        m = _HEX_PREFIX.match(token)
        if m:
            return float.fromhex(m.group(0))
        m = _SPECIAL_PREFIX.match(token) or _FLOAT_PREFIX.match(token)
        if m:
            return float(m.group(0))
    except (ValueError, OverflowError):
        pass
    return 0.0


def parse_status(lines) -> Reading:
    """Build a Reading from the lines of a PMU status file."""
    reading = Reading()
    for line in lines:
        fields = line.split()[:MAX_FIELDS]
        if len(fields) < 3:
            continue

        name = SeriesName.from_field(fields[0])
        if name is None:
            continue

        reading.set(name, parse_magnitude(fields[2]) / 1000)
    return reading


def discover(template: str) -> int:
    """Count contiguous readable slots starting at index 0."""
    count = 0
    while True:
        path = slot_path(template, count)
        if path is None or not os.access(path, os.R_OK):
            break
        count += 1
    return count


def read_slot(template: str, index: int) -> Optional[Reading]:
    """Read one slot's status file, or None if it cannot be opened."""
    path = slot_path(template, index)
    if path is None:
        return None

    try:
        fh = open(path, "r", errors="replace")
    except OSError as e:
        log.debug("Battery slot %d unavailable (%s): %s", index, path, e)
        return None

    with fh:
        return parse_status(fh)


class PmuBatterySource(BatterySource):
    """Battery source reading the PowerMac PMU files under /proc/pmu."""

    def __init__(self, context: CollectorContext):
        self._context = context

    @property
    def name(self) -> str:
        return "pmu"

    def discover(self) -> int:
        return discover(self._context.slot_path)

    def read_slot(self, index: int) -> Optional[Reading]:
        return read_slot(self._context.slot_path, index)
