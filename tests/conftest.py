"""Pytest configuration for repository test runs."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

import pytest

_TREE_LEAVES = {
    "kernel/ostype": "Linux\n",
    "kernel/osrelease": "5.10.0\n",
    "kernel/pid_max": "4194304\n",
    "kernel/random/boot_id": "2b1f6a8e-6f0e-4d2b-9b7f-1c2d3e4f5a6b\n",
    "vm/swappiness": "60\n",
    "net/core/somaxconn": "4096\n",
    "net/ipv4/ip_forward": "0\n",
    "net/ipv4/tcp_rmem": "4096\t131072\t6291456\n",
    "net/ipv4/conf/eth0.100/forwarding": "0\n",
}
_EMPTY_CONTAINERS = ("fs",)


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


@pytest.fixture
def store_root(tmp_path: Path) -> Path:
    """Build a small sysctl-like directory tree and return its canonical root."""
    root = tmp_path / "proc" / "sys"
    for relative_path, content in _TREE_LEAVES.items():
        leaf_path = root / relative_path
        leaf_path.parent.mkdir(parents=True, exist_ok=True)
        leaf_path.write_text(content, encoding="utf-8")
    for relative_path in _EMPTY_CONTAINERS:
        (root / relative_path).mkdir(parents=True, exist_ok=True)
    return root.resolve()


@pytest.fixture
def sysctl_tree(store_root: Path, monkeypatch: pytest.MonkeyPatch) -> Any:
    """Return a tree client bound to the fixture store."""
    from core.config import SysctlConfig
    from tree.sysctl_tree import SysctlTree

    monkeypatch.setenv("SYSCTL_ROOT", str(store_root))
    monkeypatch.delenv("SYSCTL_DEFAULT_NAME", raising=False)
    return SysctlTree(SysctlConfig.from_env())


@pytest.fixture
def preorder(store_root: Path) -> list[tuple[str, bool]]:
    """Return ``(name, is_leaf)`` pairs from an independent recursive walk."""
    return list(_recursive_preorder(store_root, store_root))


def _recursive_preorder(root: Path, directory: Path) -> Any:
    with os.scandir(directory) as entries:
        children = [(Path(entry.path), entry.is_dir(follow_symlinks=False)) for entry in entries]
    for child_path, is_dir in children:
        name = ".".join(part.replace(".", "/") for part in child_path.relative_to(root).parts)
        yield name, not is_dir
        if is_dir:
            yield from _recursive_preorder(root, child_path)
