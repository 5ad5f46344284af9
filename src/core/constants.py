"""Core constants used across sysctl tree modules.

This module centralizes store layout and naming constants.
Keeping values here avoids magic literals in traversal logic.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_STORE_ROOT = Path("/proc/sys")
DEFAULT_MIB_NAME = "kernel"
NAME_SEPARATOR = "."
PATH_SEPARATOR = "/"
TEXT_ENCODING = "utf-8"
ROOT_ENV_VAR = "SYSCTL_ROOT"
DEFAULT_NAME_ENV_VAR = "SYSCTL_DEFAULT_NAME"
