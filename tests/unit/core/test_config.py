"""Unit tests for core config parsing."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.config import SysctlConfig
from core.errors import SysctlConfigError


def test_from_env_reads_store_root(store_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should resolve the store root from environment."""
    monkeypatch.setenv("SYSCTL_ROOT", str(store_root))
    monkeypatch.delenv("SYSCTL_DEFAULT_NAME", raising=False)

    config = SysctlConfig.from_env()

    assert config.root == store_root and config.default_name == "kernel"


def test_from_env_prefers_root_override(
    store_root: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """An explicit root should win over the environment."""
    monkeypatch.setenv("SYSCTL_ROOT", str(tmp_path / "absent"))

    config = SysctlConfig.from_env(root_override=str(store_root))

    assert config.root == store_root


def test_from_env_raises_for_missing_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Config should fail for a root that is not a directory."""
    monkeypatch.setenv("SYSCTL_ROOT", str(tmp_path / "absent"))

    with pytest.raises(SysctlConfigError):
        SysctlConfig.from_env()

    assert os.getenv("SYSCTL_ROOT") == str(tmp_path / "absent")


def test_from_env_raises_for_blank_default_name(
    store_root: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Config should fail for an empty default name."""
    monkeypatch.setenv("SYSCTL_ROOT", str(store_root))
    monkeypatch.setenv("SYSCTL_DEFAULT_NAME", "  ")

    with pytest.raises(SysctlConfigError):
        SysctlConfig.from_env()
