import os
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[1] / "config" / "hot_topics.yaml"

SECTIONS = ("upstream", "fetch_all", "fetch_one", "aggregation", "platforms")

# Settings that must be non-negative integers when present.
NUMERIC_SETTINGS = {
    "fetch_all": ("timeout_ms", "retries", "base_delay_ms", "cycle_retries", "cycle_base_delay_ms"),
    "fetch_one": ("timeout_ms", "retries", "base_delay_ms"),
    "aggregation": ("min_platforms", "min_title_length", "limit"),
}


def load_config(path: str | os.PathLike[str] | None = None) -> Dict[str, Any]:
    """Read the hot topics YAML file, the shipped one unless ``path`` is given.

    Missing sections and keys are fine, the services fall back to their
    built-in values. Present ones must have the right shape.
    """
    config_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Hot topics config not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("Hot topics config must be a mapping")

    validate_config(data)
    return data


def validate_config(data: Dict[str, Any]) -> None:
    for section in SECTIONS:
        value = data.get(section)
        if value is not None and not isinstance(value, dict):
            raise ValueError(f"Config section '{section}' must be a mapping")

    for section, keys in NUMERIC_SETTINGS.items():
        values = data.get(section) or {}
        for key in keys:
            if key not in values:
                continue
            value = values[key]
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Config value {section}.{key} must be a non-negative integer, got {value!r}")
