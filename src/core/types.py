"""Shared typed models.

This module defines immutable data models used by the store, name mapper,
kind registry, walker, and CLI layers to keep interfaces explicit and stable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class EntryType(Enum):
    """Classification of one store position."""

    CONTAINER = "container"
    LEAF = "leaf"
    UNSUPPORTED = "unsupported"


class Kind(Enum):
    """Value kind tag attached to known sysctl names."""

    NODE = "node"
    STRING = "string"
    STRUCT = "struct"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class StoreEntry:
    """One item of a container listing.

    Attributes:
        path: Absolute path of the child position.
        entry_type: Classification of the child.
    """

    path: Path
    entry_type: EntryType


@dataclass(frozen=True)
class MibMetadata:
    """Kind metadata for one dotted name.

    Attributes:
        kind: Value kind tag.
        indication: Short format hint for the kind, e.g. ``"I"`` or ``"A"``.
    """

    kind: Kind
    indication: str


@dataclass(frozen=True)
class SettingAssignment:
    """One name/value pair from a settings file.

    Attributes:
        name: Dotted sysctl name.
        value: Text value to write.
    """

    name: str
    value: str
