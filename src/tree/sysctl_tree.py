"""Python SDK for sysctl tree operations.

This module wires config, store, name mapper, and kind lookup together
and exposes name-based read, write, walk, and bulk-apply operations.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable

from core.config import SysctlConfig, resolve_store_root
from core.logging_config import get_logger
from core.types import SettingAssignment
from tree.kind_registry import KindLookup, lookup_kind
from tree.mib import Mib, MibContext
from tree.mib_iter import MibIter
from tree.name_mapper import NameMapper
from tree.proc_store import HierarchicalStore, ProcStore
from tree.settings_file import load_settings
from tree.value_codec import SysctlValue, decode_value, encode_value

_LOGGER = get_logger(__name__)


class SysctlTree:
    """Primary SDK entry point for one sysctl store."""

    def __init__(
        self,
        config: SysctlConfig | None = None,
        store: HierarchicalStore | None = None,
        kind_lookup: KindLookup = lookup_kind,
    ) -> None:
        """Create a tree client.

        Args:
            config: Optional runtime configuration.
            store: Optional store override; defaults to a directory store at ``config.root``.
            kind_lookup: Kind metadata lookup, defaults to the static table.
        """
        self._config = config or SysctlConfig.from_env()
        store = store or ProcStore(self._config.root)
        self._context = MibContext(
            store=store,
            mapper=NameMapper(store),
            kind_lookup=kind_lookup,
            default_name=self._config.default_name,
        )

    @property
    def config(self) -> SysctlConfig:
        """Return the runtime configuration."""
        return self._config

    @property
    def context(self) -> MibContext:
        """Return the collaborators shared by handles of this tree."""
        return self._context

    def mib(self, name: str) -> Mib:
        """Resolve a dotted name into a handle.

        Args:
            name: Dotted sysctl name.

        Returns:
            Resolved handle.

        Raises:
            SysctlNotFoundError: If the name does not resolve.
        """
        return Mib.from_name(name, self._context)

    def default_mib(self) -> Mib:
        """Return the handle for the configured default name."""
        return Mib.default(self._context)

    def read(self, name: str) -> SysctlValue:
        """Read and decode a leaf value by name."""
        return self.mib(name).value()

    def write(self, name: str, value: object) -> SysctlValue:
        """Encode and write a leaf value by name.

        Args:
            name: Dotted sysctl name.
            value: Bytes, text, integer, or list of integers.

        Returns:
            Value observed after the write, decoded by kind.
        """
        mib = self.mib(name)
        observed = mib.write(encode_value(value))
        return decode_value(observed, mib.kind())

    def walk(self, name: str | None = None) -> MibIter:
        """Enumerate leaves from a name, or the whole tree when omitted.

        Args:
            name: Optional dotted name to resume after.

        Returns:
            Positioned walker.
        """
        if name is None:
            return MibIter.from_root(self._context)
        return self.mib(name).enumerate()

    def apply(self, assignments: Iterable[SettingAssignment]) -> tuple[tuple[str, SysctlValue], ...]:
        """Write assignments in order, stopping at the first failure.

        Args:
            assignments: Name/value pairs.

        Returns:
            Observed values per written name.
        """
        results = tuple(
            (assignment.name, self.write(assignment.name, assignment.value))
            for assignment in assignments
        )
        _LOGGER.info("sysctl_settings_applied", count=len(results))
        return results

    def apply_file(self, settings_path: str) -> tuple[tuple[str, SysctlValue], ...]:
        """Load a YAML settings file and apply it."""
        return self.apply(load_settings(settings_path))

    def with_root(self, root: str) -> "SysctlTree":
        """Clone the client against a different store root.

        Args:
            root: New store root directory.

        Returns:
            New tree client with the default directory store.
        """
        updated_config = replace(self._config, root=resolve_store_root(root))
        return SysctlTree(updated_config, kind_lookup=self._context.kind_lookup)
