"""Public SDK surface for the sysctl tree.

This module provides a stable import path for library users.
It re-exports the tree client, handle types, and typed models.
"""

from __future__ import annotations

from core.config import SysctlConfig
from core.errors import (
    SysctlConfigError,
    SysctlEncodingError,
    SysctlError,
    SysctlInvalidOperationError,
    SysctlNotFoundError,
    SysctlPermissionError,
    SysctlStoreError,
    SysctlUnsupportedError,
    SysctlValueError,
)
from core.types import EntryType, Kind, MibMetadata, SettingAssignment, StoreEntry
from tree.kind_registry import lookup_kind
from tree.mib import Mib, MibContext
from tree.mib_iter import MibIter
from tree.proc_store import HierarchicalStore, ProcStore
from tree.sysctl_tree import SysctlTree

__all__ = [
    "EntryType",
    "HierarchicalStore",
    "Kind",
    "Mib",
    "MibContext",
    "MibIter",
    "MibMetadata",
    "ProcStore",
    "SettingAssignment",
    "StoreEntry",
    "SysctlConfig",
    "SysctlConfigError",
    "SysctlEncodingError",
    "SysctlError",
    "SysctlInvalidOperationError",
    "SysctlNotFoundError",
    "SysctlPermissionError",
    "SysctlStoreError",
    "SysctlTree",
    "SysctlUnsupportedError",
    "SysctlValueError",
    "lookup_kind",
]
