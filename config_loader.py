from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

import yaml

DEFAULT_CONFIG_PATH = "config.yml"


class ConfigError(Exception):
    """Raised when the configuration file is missing or malformed."""


def load_yaml_config(path: Optional[str], *, missing_ok: bool = False) -> Dict[str, Any]:
    """Load a YAML configuration file into a dictionary.

    ``missing_ok`` lets the command line tools run on built-in defaults when
    the implicit ``config.yml`` is not present. An explicit path that does not
    exist is always an error.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
        missing_ok = True

    config_path = Path(path).expanduser()
    if not config_path.exists():
        if missing_ok:
            return {}
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration file is not valid YAML: {config_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping.")

    return data


def get_section(config: Dict[str, Any], section: str) -> Dict[str, Any]:
    """Return a configuration section, ensuring it is a mapping."""
    value = config.get(section, {})
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Section '{section}' must be a mapping.")
    return value
