"""Battery source implementations."""

from pmubattery.providers.pmu import PmuBatterySource

__all__ = ["PmuBatterySource"]
