"""
Configuration loading utilities.
"""
import os
import yaml
from dataclasses import fields
from typing import Dict, Any, List
from plate_planner.errors import InvalidInputError
from .settings import PlannerSettings


def load_yaml_config(path: str) -> Dict[str, Any]:
    """Load configuration from a YAML file."""
    if not os.path.exists(path):
        return {}

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_settings_from_yaml(path: str) -> PlannerSettings:
    """Load PlannerSettings from a YAML file; unknown keys are ignored."""
    data = load_yaml_config(path)
    valid_keys = {f.name for f in fields(PlannerSettings)}
    filtered_data = {k: v for k, v in data.items() if k in valid_keys}
    return PlannerSettings(**filtered_data)


def _label_list(data: Dict[str, Any], key: str, path: str) -> List[str]:
    value = data[key]
    if not isinstance(value, list):
        raise InvalidInputError(f"Design file {path}: {key} must be a list, got {value!r}")
    return [str(v) for v in value]


def _design_int(data: Dict[str, Any], key: str, default: int, path: str) -> int:
    value = data.get(key, default)
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidInputError(f"Design file {path}: {key} must be an integer, got {value!r}")
    return value


def load_design(path: str, defaults: PlannerSettings = None) -> Dict[str, Any]:
    """
    Load a layout design file.

    Expected keys: groups, timepoints (lists), bio_replicates, tech_replicates
    and optionally plate_format, include_controls, include_blanks. The result
    can be passed straight to ``allocate(**design)``.

    Raises:
        FileNotFoundError: No file at ``path``
        InvalidInputError: Unreadable YAML, missing keys, or wrong value types
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Design file not found: {path}")
    try:
        data = load_yaml_config(path)
    except yaml.YAMLError as e:
        raise InvalidInputError(f"Design file {path} is not valid YAML: {e}") from e
    if not isinstance(data, dict):
        raise InvalidInputError(f"Design file {path} must be a mapping")
    missing = [k for k in ("groups", "timepoints") if k not in data]
    if missing:
        raise InvalidInputError(f"Design file {path} missing keys: {missing}")

    plate_default = defaults.default_plate_format if defaults else 96
    return {
        "groups": _label_list(data, "groups", path),
        "timepoints": _label_list(data, "timepoints", path),
        "bio_replicates": _design_int(data, "bio_replicates", 3, path),
        "tech_replicates": _design_int(data, "tech_replicates", 3, path),
        "plate_format": data.get("plate_format", plate_default),
        "include_controls": bool(data.get("include_controls", False)),
        "include_blanks": bool(data.get("include_blanks", False)),
    }
