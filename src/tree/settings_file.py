"""YAML settings file loading.

A settings file maps dotted names to values. Nested mappings are
flattened, so ``kernel: {hostname: box}`` equals ``kernel.hostname: box``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, cast

import yaml

from core.constants import NAME_SEPARATOR
from core.errors import SysctlConfigError
from core.types import SettingAssignment


def load_settings(settings_path: str) -> tuple[SettingAssignment, ...]:
    """Load ordered assignments from a YAML settings file.

    Args:
        settings_path: Path to the YAML file.

    Returns:
        Assignments in document order.

    Raises:
        SysctlConfigError: If the file is missing, unreadable, or malformed.
    """
    payload = _load_yaml_payload(settings_path)
    if not isinstance(payload, Mapping):
        raise SysctlConfigError(
            f"Settings file {settings_path} must contain a mapping of names to values."
        )
    return tuple(_flatten(cast(Mapping[object, object], payload), prefix=""))


def _load_yaml_payload(settings_path: str) -> object:
    settings_file = Path(settings_path).expanduser().resolve()
    if not settings_file.exists():
        raise SysctlConfigError(
            f"Settings file does not exist at {settings_file}. Provide a valid YAML file path."
        )
    try:
        payload = cast(object, yaml.safe_load(settings_file.read_text(encoding="utf-8")))
    except OSError as error:
        raise SysctlConfigError(
            f"Failed to read settings at {settings_file}: {error}. Check file permissions and retry."
        ) from error
    except yaml.YAMLError as error:
        raise SysctlConfigError(
            f"Failed to parse YAML settings at {settings_file}: {error}. Fix YAML syntax and retry."
        ) from error
    if payload is None:
        return {}
    return payload


def _flatten(mapping: Mapping[object, object], prefix: str) -> list[SettingAssignment]:
    """Flatten nested mappings into dotted assignments.

    Args:
        mapping: Parsed YAML mapping.
        prefix: Dotted prefix of the enclosing mapping.

    Returns:
        Assignments in document order.

    Raises:
        SysctlConfigError: If a key or value has an unsupported type.
    """
    assignments: list[SettingAssignment] = []
    for key, value in mapping.items():
        if not isinstance(key, str) or not key:
            raise SysctlConfigError(f"Invalid settings key {key!r}: expected a non-empty name.")
        name = f"{prefix}{NAME_SEPARATOR}{key}" if prefix else key
        if isinstance(value, Mapping):
            assignments.extend(_flatten(cast(Mapping[object, object], value), name))
            continue
        assignments.append(SettingAssignment(name=name, value=_format_value(name, value)))
    return assignments


def _format_value(name: str, value: object) -> str:
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, list) and all(
        isinstance(item, int) and not isinstance(item, bool) for item in value
    ):
        return " ".join(str(item) for item in value)
    raise SysctlConfigError(
        f"Invalid value for '{name}': expected text, an integer, or a list of integers."
    )
