"""Static kind metadata table.

This module maps known dotted names to value kinds. The table is built
once at import time and exposed read-only, so it is safe to share.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Mapping

from core.types import Kind, MibMetadata

KindLookup = Callable[[str], Kind]

_KNOWN_KINDS: tuple[tuple[str, Kind], ...] = (
    ("kernel", Kind.NODE),
    ("kernel.ostype", Kind.STRING),
    ("kernel.osrelease", Kind.STRING),
    ("kernel.version", Kind.STRING),
    ("kernel.hostname", Kind.STRING),
    ("kernel.domainname", Kind.STRING),
    ("kernel.core_pattern", Kind.STRING),
    ("kernel.pid_max", Kind.I32),
    ("kernel.threads-max", Kind.I32),
    ("kernel.panic", Kind.I32),
    ("kernel.randomize_va_space", Kind.I32),
    ("kernel.printk", Kind.I32),
    ("kernel.shmmax", Kind.U64),
    ("kernel.shmall", Kind.U64),
    ("vm", Kind.NODE),
    ("vm.swappiness", Kind.I32),
    ("vm.overcommit_memory", Kind.I32),
    ("vm.max_map_count", Kind.I32),
    ("vm.dirty_ratio", Kind.I32),
    ("vm.dirty_background_ratio", Kind.I32),
    ("fs", Kind.NODE),
    ("fs.file-max", Kind.U64),
    ("fs.nr_open", Kind.U32),
    ("fs.inotify.max_user_watches", Kind.I32),
    ("net", Kind.NODE),
    ("net.core", Kind.NODE),
    ("net.core.somaxconn", Kind.I32),
    ("net.ipv4", Kind.NODE),
    ("net.ipv4.ip_forward", Kind.I32),
    ("net.ipv4.tcp_syncookies", Kind.I32),
    ("net.ipv4.tcp_rmem", Kind.I32),
    ("net.ipv4.tcp_wmem", Kind.I32),
    ("net.ipv4.ip_local_port_range", Kind.I32),
)

KIND_TABLE: Mapping[str, Kind] = MappingProxyType(dict(_KNOWN_KINDS))

_INDICATIONS: Mapping[Kind, str] = MappingProxyType(
    {
        Kind.NODE: "N",
        Kind.STRING: "A",
        Kind.STRUCT: "S",
        Kind.I8: "S8",
        Kind.I16: "S16",
        Kind.I32: "I",
        Kind.I64: "Q",
        Kind.U8: "U8",
        Kind.U16: "U16",
        Kind.U32: "IU",
        Kind.U64: "QU",
        Kind.UNKNOWN: "",
    }
)


def lookup_kind(name: str) -> Kind:
    """Return the kind for an exact dotted name, or ``Kind.UNKNOWN``."""
    return KIND_TABLE.get(name, Kind.UNKNOWN)


def indication_for(kind: Kind) -> str:
    """Return the short format hint for a kind."""
    return _INDICATIONS[kind]


def metadata_for(name: str, kind_lookup: KindLookup = lookup_kind) -> MibMetadata:
    """Build kind metadata for a dotted name.

    Args:
        name: Dotted sysctl name.
        kind_lookup: Injected kind lookup, defaults to the static table.

    Returns:
        Kind and indication for the name.
    """
    kind = kind_lookup(name)
    return MibMetadata(kind=kind, indication=indication_for(kind))
