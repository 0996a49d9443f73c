"""PMU battery collector - polls /proc/pmu battery slots into metric series."""

__version__ = "0.1.0"
