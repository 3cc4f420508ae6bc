"""Configuration loading and validation."""

from pathlib import Path
from typing import Any, Dict, Union
import copy
import yaml

REQUIRED_SECTIONS = ("grid",)


def load_config(path: Union[str, Path]) -> dict:
    """Load simulation configuration from YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file isn't a mapping or lacks a required section
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, 'r') as f:
        config = yaml.safe_load(f)

    if not isinstance(config, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    for section in REQUIRED_SECTIONS:
        if section not in config:
            raise ValueError(f"Config file {path} is missing the '{section}' section")
    return config


def save_config(config: dict, path: Union[str, Path]) -> None:
    """Save configuration to YAML file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        yaml.dump(config, f, default_flow_style=False, sort_keys=False)


def merge_overrides(config: dict, overrides: Dict[str, Any]) -> dict:
    """Return a copy of config with dotted-key overrides applied.

    >>> merge_overrides({"time": {"dt_max": 0.5}}, {"time.dt_max": 0.1})
    {'time': {'dt_max': 0.1}}
    """
    merged = copy.deepcopy(config)
    for dotted_key, value in overrides.items():
        *parents, leaf = dotted_key.split(".")
        section = merged
        for key in parents:
            section = section.setdefault(key, {})
        section[leaf] = value
    return merged
