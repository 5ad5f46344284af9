"""Hierarchical store capability and its filesystem backend.

This module defines the store contract consumed by the walker and
implements it over a local directory tree such as ``/proc/sys``.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path
from typing import Any, Iterator, Protocol

from core.errors import (
    SysctlError,
    SysctlInvalidOperationError,
    SysctlNotFoundError,
    SysctlPermissionError,
    SysctlStoreError,
)
from core.types import EntryType, StoreEntry

class Listing(Protocol):
    """Open container listing owned by one frontier slot."""

    def __iter__(self) -> Iterator[StoreEntry]: ...

    def __next__(self) -> StoreEntry: ...

    def close(self) -> None: ...


class HierarchicalStore(Protocol):
    """Store operations required by name mapping, Mib handles, and walkers."""

    @property
    def root(self) -> Path: ...

    def list_entries(self, path: Path) -> Listing: ...

    def entry_type(self, path: Path) -> EntryType: ...

    def read_leaf(self, path: Path) -> bytes: ...

    def write_leaf(self, path: Path, payload: bytes) -> None: ...

    def canonicalize(self, path: Path) -> Path: ...


class ProcStore:
    """Directory-backed store rooted at a fixed prefix.

    Containers are directories and leaves are regular files. Symlinks and
    special files are reported as unsupported and never followed.
    """

    def __init__(self, root: Path) -> None:
        """Create a store over an existing directory.

        Args:
            root: Canonical absolute root prefix.
        """
        self._root = root

    @property
    def root(self) -> Path:
        """Return the store root prefix."""
        return self._root

    def list_entries(self, path: Path) -> Listing:
        """Open a container listing in native directory order.

        The directory handle is opened eagerly so that a missing or
        unreadable container fails here rather than on first iteration.
        Closing the returned listing releases the handle.

        Args:
            path: Container path.

        Returns:
            Lazy listing of child entries.

        Raises:
            SysctlNotFoundError: If the container does not exist.
            SysctlPermissionError: If listing is refused.
            SysctlInvalidOperationError: If path is a leaf.
        """
        try:
            listing = os.scandir(path)
        except OSError as error:
            raise _translate_os_error(error, path, "list") from error
        return DirectoryListing(listing, path)

    def entry_type(self, path: Path) -> EntryType:
        """Classify a position without following symlinks.

        Args:
            path: Position to classify.

        Returns:
            Entry classification.

        Raises:
            SysctlNotFoundError: If the position does not exist.
        """
        try:
            mode = os.lstat(path).st_mode
        except OSError as error:
            raise _translate_os_error(error, path, "stat") from error
        return _classify_mode(mode)

    def read_leaf(self, path: Path) -> bytes:
        """Read a leaf payload to completion.

        Args:
            path: Leaf path.

        Returns:
            Whole payload bytes.
        """
        try:
            with open(path, "rb") as handle:
                return handle.read()
        except OSError as error:
            raise _translate_os_error(error, path, "read") from error

    def write_leaf(self, path: Path, payload: bytes) -> None:
        """Write a full payload to an existing leaf.

        Args:
            path: Leaf path. Must already exist.
            payload: Bytes to write.
        """
        try:
            descriptor = os.open(path, os.O_WRONLY | os.O_TRUNC)
            with os.fdopen(descriptor, "wb") as handle:
                handle.write(payload)
        except OSError as error:
            raise _translate_os_error(error, path, "write") from error

    def canonicalize(self, path: Path) -> Path:
        """Resolve a path to its canonical absolute form.

        Args:
            path: Path to resolve; symlinks are resolved.

        Returns:
            Canonical existing path.

        Raises:
            SysctlNotFoundError: If the path cannot be resolved.
        """
        try:
            return path.resolve(strict=True)
        except (OSError, RuntimeError) as error:
            raise SysctlNotFoundError(
                f"Failed to resolve {path}: {error}. Check the sysctl name and retry."
            ) from error


class DirectoryListing:
    """Iterator over one open directory handle.

    The handle is owned from construction, so ``close()`` releases it
    whether or not iteration ever started.
    """

    def __init__(self, handle: Any, path: Path) -> None:
        self._handle = handle
        self._path = path

    def __iter__(self) -> Iterator[StoreEntry]:
        return self

    def __next__(self) -> StoreEntry:
        try:
            entry = next(self._handle)
            entry_type = _classify_mode(entry.stat(follow_symlinks=False).st_mode)
        except OSError as error:
            self.close()
            raise _translate_os_error(error, self._path, "list") from error
        return StoreEntry(path=Path(entry.path), entry_type=entry_type)

    def close(self) -> None:
        """Release the directory handle; further iteration stops."""
        self._handle.close()


def _classify_mode(mode: int) -> EntryType:
    """Map an lstat mode onto an entry type."""
    if stat.S_ISDIR(mode):
        return EntryType.CONTAINER
    if stat.S_ISREG(mode):
        return EntryType.LEAF
    return EntryType.UNSUPPORTED


def _translate_os_error(error: OSError, path: Path, operation: str) -> SysctlError:
    """Translate an OS error into the matching domain error.

    Args:
        error: Raised OS error.
        path: Store path being accessed.
        operation: Short operation label for the message.

    Returns:
        Domain error to raise.
    """
    if isinstance(error, FileNotFoundError):
        return SysctlNotFoundError(
            f"Failed to {operation} {path}: entry does not exist. Check the sysctl name."
        )
    if isinstance(error, PermissionError):
        return SysctlPermissionError(
            f"Failed to {operation} {path}: permission denied. Retry with sufficient privileges."
        )
    if isinstance(error, IsADirectoryError):
        return SysctlInvalidOperationError(
            f"Failed to {operation} {path}: entry is a container, not a leaf."
        )
    if isinstance(error, NotADirectoryError):
        return SysctlInvalidOperationError(
            f"Failed to {operation} {path}: entry is a leaf, not a container."
        )
    return SysctlStoreError(f"Failed to {operation} {path}: {error}.")
