"""Configuration management for the PMU battery collector."""

import copy
import json
import logging
import os
import socket
from pathlib import Path
from typing import Any, Optional

log = logging.getLogger(__name__)


# Default configuration values
DEFAULTS = {
    # Where the kernel exposes battery slots; {index} is the slot number
    "pmu": {
        "slot_path": "/proc/pmu/battery_{index}",
    },

    # Polling settings
    "polling": {
        "interval_seconds": 10,  # Time between poll cycles
    },

    # Series persistence
    "storage": {
        "backend": "rrd",  # "rrd" or "memory"
        "data_dir": "",  # Empty means the XDG data directory
        "rrdtool": "rrdtool",  # rrdtool executable
        "step": 10,  # RRD step in seconds
    },

    # Host name series are stored under; empty means this machine's name
    "host": "",
}


def get_config_dir() -> Path:
    """Get the configuration directory."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg_config:
        return Path(xdg_config) / "pmu-battery"
    return Path.home() / ".config" / "pmu-battery"


def get_config_path() -> Path:
    """Get the path to the configuration file."""
    return get_config_dir() / "config.json"


def get_data_dir() -> Path:
    """Default directory for RRD files."""
    xdg_data = os.environ.get("XDG_DATA_HOME", "")
    if xdg_data:
        return Path(xdg_data) / "pmu-battery"
    return Path.home() / ".local" / "share" / "pmu-battery"


def _deep_merge(base: dict, override: dict) -> dict:
    """Deep merge override into base, returning new dict."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[Path] = None) -> dict:
    """Load configuration from file, merging with defaults.

    A missing file is not an error; an unreadable one logs a warning and
    falls back to the defaults.
    """
    config_path = Path(path) if path else get_config_path()

    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                user_config = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load config from %s: %s", config_path, e)
            return _deep_merge(DEFAULTS, {})
        if not isinstance(user_config, dict):
            log.warning("Ignoring config %s: top level is not an object", config_path)
            return _deep_merge(DEFAULTS, {})
        return _deep_merge(DEFAULTS, user_config)

    return _deep_merge(DEFAULTS, {})


def save_config(config: dict, path: Optional[Path] = None) -> bool:
    """Save configuration to file."""
    config_path = Path(path) if path else get_config_path()

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w") as f:
            json.dump(config, f, indent=2)
        return True
    except OSError as e:
        log.error("Could not save config to %s: %s", config_path, e)
        return False


def get(config: dict, key: str, default: Any = None) -> Any:
    """Get a config value using dot notation (e.g., 'polling.interval_seconds')."""
    value = config
    for k in key.split("."):
        if isinstance(value, dict) and k in value:
            value = value[k]
        else:
            return default
    return value


def resolve_host(config: dict) -> str:
    return config.get("host") or socket.gethostname()


def resolve_data_dir(config: dict) -> Path:
    data_dir = get(config, "storage.data_dir")
    return Path(data_dir).expanduser() if data_dir else get_data_dir()
