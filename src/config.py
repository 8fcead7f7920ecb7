import copy
import json
import os

import yaml

from .errors import ConfigError
from .session import MEGABYTE, SessionSettings

# -------------------- Default Config --------------------
DEFAULT_CONFIG = {
    "session": {
        "duration": 0,
        "interval": 10,
        "max_size_mb": 1,
        "max_retry": 5,
    },
    "alerts": {
        "console": True,
        "on_rotation": True,
        "slack_webhook": None,
        "smtp": {
            "enabled": False,
            "server": "localhost",
            "port": 25,
            "from": "tailscan@localhost",
            "to": [],
            "username": None,
            "password": None,
            "starttls": False,
        },
    },
}


def load_config(path=None) -> dict:
    """Defaults merged with a JSON or YAML config file, section by section."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if not path:
        return config
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.lower().endswith((".yml", ".yaml")):
                user = yaml.safe_load(f) or {}
            else:
                user = json.load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if not isinstance(user, dict):
        raise ConfigError(f"Config {path} must contain a mapping, got {type(user).__name__}")

    for k, v in user.items():
        if k in config and isinstance(config[k], dict):
            if not isinstance(v, dict):
                raise ConfigError(f"Config section '{k}' must be a mapping")
            config[k].update(v)
        else:
            config[k] = v
    return config


def settings_from_config(config: dict) -> SessionSettings:
    s = config.get("session", {})
    try:
        return SessionSettings(
            duration=float(s.get("duration", 0)),
            interval=float(s.get("interval", 10)),
            size_ceiling=int(float(s.get("max_size_mb", 1)) * MEGABYTE),
            stale_ceiling=int(s.get("max_retry", 5)),
        )
    except (TypeError, ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid session settings: {e}") from e
