"""Runtime configuration model for the sysctl tree.

This module owns all environment variable parsing and validation.
Other modules consume a typed config object instead of raw env reads.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path

from core.constants import (
    DEFAULT_MIB_NAME,
    DEFAULT_NAME_ENV_VAR,
    DEFAULT_STORE_ROOT,
    ROOT_ENV_VAR,
)
from core.errors import SysctlConfigError


@dataclass(frozen=True)
class SysctlConfig:
    """Validated runtime configuration.

    Attributes:
        root: Canonical absolute path of the store root prefix.
        default_name: Dotted name addressed by the default Mib.
    """

    root: Path
    default_name: str

    @classmethod
    def from_env(cls, root_override: str | None = None) -> "SysctlConfig":
        """Build config from process environment variables.

        Args:
            root_override: Optional store root taking precedence over the environment.

        Returns:
            A validated config object.

        Raises:
            SysctlConfigError: If environment values are invalid.
        """
        root_value = root_override or os.getenv(ROOT_ENV_VAR, str(DEFAULT_STORE_ROOT))
        default_name = os.getenv(DEFAULT_NAME_ENV_VAR, DEFAULT_MIB_NAME)
        return cls(
            root=resolve_store_root(root_value),
            default_name=_parse_default_name(default_name),
        )


def resolve_store_root(raw_value: str) -> Path:
    """Resolve and validate a store root directory.

    Args:
        raw_value: Raw path string from environment or CLI.

    Returns:
        Canonical absolute root path.

    Raises:
        SysctlConfigError: If the path is not an existing directory.
    """
    root = Path(raw_value).expanduser().resolve()
    if not root.is_dir():
        raise SysctlConfigError(
            f"Invalid {ROOT_ENV_VAR} value: '{raw_value}' is not an existing directory. "
            f"Point {ROOT_ENV_VAR} at a sysctl tree such as {DEFAULT_STORE_ROOT}."
        )
    return root


def _parse_default_name(raw_value: str) -> str:
    """Validate the default Mib name.

    Args:
        raw_value: Raw string from environment.

    Returns:
        Stripped dotted name.

    Raises:
        SysctlConfigError: If value is empty.
    """
    name = raw_value.strip()
    if not name:
        raise SysctlConfigError(
            f"Invalid {DEFAULT_NAME_ENV_VAR} value: expected a dotted name, got an empty string. "
            f"Unset {DEFAULT_NAME_ENV_VAR} or set it to a name such as '{DEFAULT_MIB_NAME}'."
        )
    return name
