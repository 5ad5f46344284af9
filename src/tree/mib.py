"""Immutable handles to store positions.

A ``Mib`` addresses one container or leaf by canonical path. It holds
no lock on the store: if the store changes underneath, later operations
fail with ``SysctlNotFoundError`` instead of being prevented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from core.errors import SysctlInvalidOperationError, SysctlUnsupportedError
from core.logging_config import get_logger
from core.types import EntryType, Kind, MibMetadata
from tree.kind_registry import KindLookup, metadata_for
from tree.name_mapper import NameMapper
from tree.proc_store import HierarchicalStore
from tree.value_codec import SysctlValue, decode_value

if TYPE_CHECKING:
    from tree.mib_iter import MibIter

_LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class MibContext:
    """Collaborators shared by every handle of one tree.

    Attributes:
        store: Hierarchical store capability.
        mapper: Name mapper bound to the same store.
        kind_lookup: Injected kind metadata lookup.
        default_name: Dotted name addressed by ``Mib.default``.
    """

    store: HierarchicalStore
    mapper: NameMapper
    kind_lookup: KindLookup
    default_name: str


@dataclass(frozen=True)
class Mib:
    """Handle to one resolved store position.

    Attributes:
        path: Canonical absolute path, existing at construction time.
        context: Shared collaborators; excluded from equality.
    """

    path: Path
    context: MibContext = field(compare=False, repr=False)

    @classmethod
    def from_name(cls, name: str, context: MibContext) -> "Mib":
        """Resolve a dotted name into a handle.

        Args:
            name: Dotted name or absolute path under the store root.
            context: Tree collaborators.

        Returns:
            Handle for the resolved position.

        Raises:
            SysctlNotFoundError: If the name does not resolve.
        """
        return cls(path=context.mapper.to_path(name), context=context)

    @classmethod
    def default(cls, context: MibContext) -> "Mib":
        """Return the handle for the configured default name."""
        return cls.from_name(context.default_name, context)

    def name(self) -> str:
        """Return the dotted name of this position."""
        return self.context.mapper.to_name(self.path)

    def kind(self) -> Kind:
        """Return the kind tag for this name, ``Kind.UNKNOWN`` when not tabled."""
        return self.context.kind_lookup(self.name())

    def metadata(self) -> MibMetadata:
        """Return kind metadata for this name."""
        return metadata_for(self.name(), self.context.kind_lookup)

    def description(self) -> str:
        """Descriptions are not available from a Linux sysctl store."""
        raise SysctlUnsupportedError(
            f"No description is available for {self.path}: the store does not provide one."
        )

    def is_container(self) -> bool:
        """Return whether this position is an interior container."""
        return self._entry_type() is EntryType.CONTAINER

    def is_leaf(self) -> bool:
        """Return whether this position is a leaf value."""
        return self._entry_type() is EntryType.LEAF

    def read(self) -> bytes:
        """Read the whole leaf payload.

        Returns:
            Payload bytes.

        Raises:
            SysctlInvalidOperationError: If this position is a container.
            SysctlNotFoundError: If the position no longer exists.
        """
        if not self.is_leaf():
            raise SysctlInvalidOperationError(
                f"Cannot read value of a container: {self.path}."
            )
        return self.context.store.read_leaf(self.path)

    def write(self, payload: bytes) -> bytes:
        """Write a full payload, then re-read the leaf.

        The write and the re-read are separate store calls; a concurrent
        writer may land between them.

        Args:
            payload: Bytes to write.

        Returns:
            Payload observed immediately after the write.

        Raises:
            SysctlInvalidOperationError: If this position is a container.
            SysctlNotFoundError: If the position no longer exists.
        """
        if not self.is_leaf():
            raise SysctlInvalidOperationError(
                f"Cannot write value of a container: {self.path}."
            )
        self.context.store.write_leaf(self.path, payload)
        _LOGGER.info("sysctl_value_written", path=str(self.path), bytes=len(payload))
        return self.read()

    def value(self) -> SysctlValue:
        """Read the leaf payload and decode it by kind."""
        return decode_value(self.read(), self.kind())

    def enumerate(self) -> "MibIter":
        """Return a walker resuming depth-first traversal at this position."""
        from tree.mib_iter import MibIter

        return MibIter.seek(self.context, self.path)

    def _entry_type(self) -> EntryType:
        entry_type = self.context.store.entry_type(self.path)
        if entry_type is EntryType.UNSUPPORTED:
            raise SysctlUnsupportedError(
                f"Entry {self.path} is neither a container nor a leaf; symlinks are not supported."
            )
        return entry_type
