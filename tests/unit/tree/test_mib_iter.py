"""Unit tests for the seek-and-resume walker."""

from __future__ import annotations

import gc
import os
import warnings
from pathlib import Path
from typing import Callable

import pytest

from core.errors import SysctlUnsupportedError
from tree.mib import Mib
from tree.mib_iter import MibIter
from tree.sysctl_tree import SysctlTree


def _names(walker: MibIter) -> list[str]:
    return [mib.name() for mib in walker]


def _leaves_after(preorder: list[tuple[str, bool]], name: str) -> list[str]:
    position = [entry_name for entry_name, _ in preorder].index(name)
    return [entry_name for entry_name, is_leaf in preorder[position + 1 :] if is_leaf]


def test_root_walk_matches_recursive_preorder(
    sysctl_tree: SysctlTree, preorder: list[tuple[str, bool]]
) -> None:
    """Full walk should yield every leaf in recursive pre-order."""
    names = _names(sysctl_tree.walk())

    assert names == [name for name, is_leaf in preorder if is_leaf]


def test_seek_to_root_path_yields_full_walk(
    sysctl_tree: SysctlTree, store_root: Path, preorder: list[tuple[str, bool]]
) -> None:
    """Seeking the store root itself should not skip anything."""
    walker = MibIter.seek(sysctl_tree.context, store_root)

    assert _names(walker) == [name for name, is_leaf in preorder if is_leaf]


def test_seek_to_each_leaf_yields_suffix(
    sysctl_tree: SysctlTree, preorder: list[tuple[str, bool]]
) -> None:
    """A walker seeded at a leaf should continue right after that leaf."""
    for name, is_leaf in preorder:
        if not is_leaf:
            continue
        walker = sysctl_tree.mib(name).enumerate()

        assert _names(walker) == _leaves_after(preorder, name), name


def test_seek_to_each_container_yields_subtree_first(
    sysctl_tree: SysctlTree, preorder: list[tuple[str, bool]]
) -> None:
    """A walker seeded at a container should start with its first leaf."""
    for name, is_leaf in preorder:
        if is_leaf:
            continue
        names = _names(sysctl_tree.mib(name).enumerate())

        assert names == _leaves_after(preorder, name), name


def test_seek_to_nested_container_starts_inside_it(sysctl_tree: SysctlTree) -> None:
    """Seeding at a container with one leaf should yield that leaf first."""
    names = _names(sysctl_tree.walk("net.ipv4.conf"))

    assert names[0] == "net.ipv4.conf.eth0/100.forwarding"


def test_seek_to_missing_target_is_empty(sysctl_tree: SysctlTree, store_root: Path) -> None:
    """An unreachable target should produce an empty walker, not an error."""
    walker = MibIter.seek(sysctl_tree.context, store_root / "kernel" / "gone")

    assert list(walker) == [] and walker.depth == 0


def test_exhausted_walker_stays_exhausted(sysctl_tree: SysctlTree) -> None:
    """Calling next on an exhausted walker should keep stopping."""
    walker = sysctl_tree.walk()
    list(walker)

    for _ in range(3):
        with pytest.raises(StopIteration):
            next(walker)

    assert walker.depth == 0


def test_walker_yields_only_leaves(sysctl_tree: SysctlTree) -> None:
    """Containers are entered but never yielded."""
    mibs = list(sysctl_tree.walk())

    assert mibs and all(isinstance(mib, Mib) and mib.is_leaf() for mib in mibs)


def test_close_releases_frontier(sysctl_tree: SysctlTree) -> None:
    """Closing a partially consumed walker should exhaust it."""
    with sysctl_tree.walk() as walker:
        next(walker)
        assert walker.depth >= 1

    assert walker.depth == 0
    assert list(walker) == []


def test_walk_fails_on_symlink_entry(sysctl_tree: SysctlTree, store_root: Path) -> None:
    """Symlinked entries should abort the enumeration."""
    (store_root / "kernel" / "alias").symlink_to(store_root / "kernel" / "ostype")

    with pytest.raises(SysctlUnsupportedError):
        list(sysctl_tree.walk())


def test_seek_fails_on_symlink_entry(sysctl_tree: SysctlTree, store_root: Path) -> None:
    """A seek that scans past a symlink should raise instead of returning a walker."""
    os.symlink(store_root / "vm", store_root / "kernel" / "vm_alias")

    with pytest.raises(SysctlUnsupportedError):
        MibIter.seek(sysctl_tree.context, store_root / "kernel" / "missing")


def test_leaf_seek_example_scenario(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Seeding at kernel.ostype yields osrelease only when it is listed later."""
    from core.config import SysctlConfig

    kernel_dir = tmp_path / "sys" / "kernel"
    kernel_dir.mkdir(parents=True)
    (kernel_dir / "ostype").write_text("Linux\n", encoding="utf-8")
    (kernel_dir / "osrelease").write_text("5.10\n", encoding="utf-8")
    monkeypatch.setenv("SYSCTL_ROOT", str(tmp_path / "sys"))
    tree = SysctlTree(SysctlConfig.from_env())
    listing_order = os.listdir(kernel_dir)

    mib = tree.mib("kernel.ostype")
    names = _names(mib.enumerate())

    assert mib.read() == b"Linux\n"
    if listing_order.index("ostype") < listing_order.index("osrelease"):
        assert names == ["kernel.osrelease"]
    else:
        assert names == []


def _unclosed_handle_warnings(action: Callable[[], None]) -> list[str]:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", ResourceWarning)
        action()
        gc.collect()
    return [str(warning.message) for warning in caught if warning.category is ResourceWarning]


def test_close_after_container_seek_releases_handles(sysctl_tree: SysctlTree) -> None:
    """Listings opened by a container seek should be closed without being iterated."""

    def seek_and_close() -> None:
        walker = sysctl_tree.walk("kernel")
        assert walker.depth == 2
        walker.close()

    assert _unclosed_handle_warnings(seek_and_close) == []


def test_failed_seek_releases_handles(sysctl_tree: SysctlTree, store_root: Path) -> None:
    """A seek aborted by an unsupported entry should not leak listings."""
    (store_root / "kernel" / "alias").symlink_to(store_root / "kernel" / "ostype")

    def failing_seek() -> None:
        with pytest.raises(SysctlUnsupportedError):
            MibIter.seek(sysctl_tree.context, store_root / "kernel" / "missing")

    assert _unclosed_handle_warnings(failing_seek) == []
