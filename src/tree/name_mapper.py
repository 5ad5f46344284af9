"""Dotted name to store path translation.

Names follow the sysctl(8) convention: components are joined with ``.``
and a literal ``.`` inside one component is written as ``/``, so that
``net.ipv4.conf.eth0/100.forwarding`` addresses the ``eth0.100`` directory.
"""

from __future__ import annotations

from pathlib import Path, PurePath

from core.constants import NAME_SEPARATOR, PATH_SEPARATOR, TEXT_ENCODING
from core.errors import SysctlEncodingError, SysctlNotFoundError
from tree.proc_store import HierarchicalStore


class NameMapper:
    """Bidirectional mapping between dotted names and canonical store paths."""

    def __init__(self, store: HierarchicalStore) -> None:
        self._store = store

    @property
    def root(self) -> Path:
        """Return the store root prefix."""
        return self._store.root

    def to_path(self, name: str) -> Path:
        """Resolve a dotted name, or an absolute path under the root, to a store path.

        Args:
            name: Dotted name such as ``kernel.ostype``.

        Returns:
            Canonical absolute path strictly below the root.

        Raises:
            SysctlNotFoundError: If the name is empty, unresolvable, or escapes the root.
        """
        candidate = self._candidate_path(name)
        path = self._store.canonicalize(candidate)
        root = self._store.root
        if path == root or root not in path.parents:
            raise SysctlNotFoundError(
                f"Name '{name}' does not resolve to an entry below {root}. "
                "Provide a dotted name of an existing sysctl."
            )
        return path

    def to_name(self, path: PurePath) -> str:
        """Render a store path as a dotted name.

        Args:
            path: Absolute path under the root.

        Returns:
            Dotted name.

        Raises:
            SysctlNotFoundError: If path is not under the root.
            SysctlEncodingError: If a component is not valid text.
        """
        try:
            relative = PurePath(path).relative_to(self._store.root)
        except ValueError as error:
            raise SysctlNotFoundError(
                f"Path {path} is outside the store root {self._store.root}."
            ) from error
        components = relative.parts
        for component in components:
            _require_text(component, path)
        return NAME_SEPARATOR.join(
            component.replace(NAME_SEPARATOR, PATH_SEPARATOR) for component in components
        )

    def _candidate_path(self, name: str) -> Path:
        root = self._store.root
        if name == str(root):
            raise SysctlNotFoundError(
                f"The store root {root} itself is not an addressable entry."
            )
        if name.startswith(f"{root}{PATH_SEPARATOR}"):
            return Path(name)
        components = name.split(NAME_SEPARATOR)
        if not all(components):
            raise SysctlNotFoundError(
                f"Name '{name}' has an empty component and does not address any entry."
            )
        return root.joinpath(
            *(component.replace(PATH_SEPARATOR, NAME_SEPARATOR) for component in components)
        )


def _require_text(component: str, path: PurePath) -> None:
    """Fail when a path component holds undecodable bytes.

    Args:
        component: One path component, possibly carrying surrogate escapes.
        path: Full path for the error message.

    Raises:
        SysctlEncodingError: If component is not valid UTF-8 text.
    """
    try:
        component.encode(TEXT_ENCODING)
    except UnicodeEncodeError as error:
        raise SysctlEncodingError(
            f"Path {path!r} contains a component that is not valid {TEXT_ENCODING} text."
        ) from error
