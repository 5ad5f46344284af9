"""Sysctl tree exception hierarchy.

This module defines traceable domain errors with clear boundaries.
Each store-facing failure maps onto one specific error type.
"""

from __future__ import annotations


class SysctlError(Exception):
    """Base exception for all sysctl tree failures."""


class SysctlConfigError(SysctlError):
    """Raised for invalid runtime configuration or settings files."""


class SysctlNotFoundError(SysctlError):
    """Raised when a name or path does not resolve inside the store."""


class SysctlEncodingError(SysctlError):
    """Raised when a path or payload cannot be represented as text."""


class SysctlInvalidOperationError(SysctlError):
    """Raised when a container is used where a leaf is required."""


class SysctlPermissionError(SysctlError):
    """Raised when the underlying store refuses access."""


class SysctlUnsupportedError(SysctlError):
    """Raised for symlinks and other unhandled entry types."""


class SysctlStoreError(SysctlError):
    """Raised for any other underlying store failure."""


class SysctlValueError(SysctlError):
    """Raised when a value cannot be decoded or encoded for its kind."""
