"""Sysctl tree CLI entry points.
This module exposes get, set, list, describe, and apply commands.
It maps argparse commands onto SDK calls.
"""

from __future__ import annotations

import argparse
from typing import Any, Sequence

from core.config import SysctlConfig
from core.errors import SysctlValueError
from core.types import SettingAssignment
from tree.sysctl_tree import SysctlTree
from tree.value_codec import SysctlValue

_ASSIGNMENT_SEPARATOR = "="


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="sysctl-tree", description="Sysctl tree CLI")
    parser.add_argument("--root", help="Override SYSCTL_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_get_command(subparsers)
    _add_set_command(subparsers)
    _add_list_command(subparsers)
    _add_describe_command(subparsers)
    _add_apply_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the sysctl tree CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    tree = SysctlTree(SysctlConfig.from_env(root_override=args.root))
    if args.command == "get":
        return _run_get_command(tree, args)
    if args.command == "set":
        return _run_set_command(tree, args)
    if args.command == "list":
        return _run_list_command(tree, args)
    if args.command == "describe":
        return _run_describe_command(tree, args)
    if args.command == "apply":
        return _run_apply_command(tree, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _run_get_command(tree: SysctlTree, args: argparse.Namespace) -> int:
    """Handle get command.

    Args:
        tree: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for name in args.names:
        mib = tree.mib(name)
        print(f"{mib.name()} = {format_value(mib.value())}")
    return 0


def _run_set_command(tree: SysctlTree, args: argparse.Namespace) -> int:
    """Handle set command.

    Args:
        tree: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    assignments = [parse_assignment(raw) for raw in args.assignments]
    for name, observed in tree.apply(assignments):
        print(f"{name} = {format_value(observed)}")
    return 0


def _run_list_command(tree: SysctlTree, args: argparse.Namespace) -> int:
    """Handle list command.

    Args:
        tree: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    with tree.walk(args.name) as walker:
        for mib in walker:
            if args.values:
                print(f"{mib.name()} = {format_value(mib.value())}")
            else:
                print(mib.name())
    return 0


def _run_describe_command(tree: SysctlTree, args: argparse.Namespace) -> int:
    """Handle describe command.

    Args:
        tree: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    mib = tree.mib(args.name)
    metadata = mib.metadata()
    print(f"name={mib.name()}")
    print(f"type={'container' if mib.is_container() else 'leaf'}")
    print(f"kind={metadata.kind.value}")
    print(f"indication={metadata.indication or '-'}")
    return 0


def _run_apply_command(tree: SysctlTree, args: argparse.Namespace) -> int:
    """Handle apply command.

    Args:
        tree: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    for name, observed in tree.apply_file(args.settings_file):
        print(f"{name} = {format_value(observed)}")
    return 0


def parse_assignment(raw: str) -> SettingAssignment:
    """Parse a ``name=value`` argument.

    Args:
        raw: Raw command-line token.

    Returns:
        Parsed assignment with surrounding whitespace stripped.

    Raises:
        SysctlValueError: If the token has no ``=`` or an empty name.
    """
    name, separator, value = raw.partition(_ASSIGNMENT_SEPARATOR)
    if not separator or not name.strip():
        raise SysctlValueError(
            f"Invalid assignment '{raw}': expected NAME=VALUE, e.g. vm.swappiness=10."
        )
    return SettingAssignment(name=name.strip(), value=value.strip())


def format_value(value: SysctlValue) -> str:
    """Render a decoded value as one output line."""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="backslashreplace").rstrip("\n")
    if isinstance(value, tuple):
        return "\t".join(str(item) for item in value)
    return str(value)


def _add_get_command(subparsers: Any) -> None:
    """Register get subcommand."""
    parser = subparsers.add_parser("get", help="Read one or more values")
    parser.add_argument("names", nargs="+", help="Dotted names, e.g. kernel.ostype")


def _add_set_command(subparsers: Any) -> None:
    """Register set subcommand."""
    parser = subparsers.add_parser("set", help="Write one or more values")
    parser.add_argument("assignments", nargs="+", help="NAME=VALUE pairs")


def _add_list_command(subparsers: Any) -> None:
    """Register list subcommand."""
    parser = subparsers.add_parser("list", help="Enumerate leaves depth-first")
    parser.add_argument(
        "name",
        nargs="?",
        help="Resume after this name; omit to walk the whole tree",
    )
    parser.add_argument("--values", action="store_true", help="Print values next to names")


def _add_describe_command(subparsers: Any) -> None:
    """Register describe subcommand."""
    parser = subparsers.add_parser("describe", help="Show entry type and kind metadata")
    parser.add_argument("name", help="Dotted name")


def _add_apply_command(subparsers: Any) -> None:
    """Register apply subcommand."""
    parser = subparsers.add_parser("apply", help="Apply a YAML settings file")
    parser.add_argument("settings_file", help="Path to YAML mapping of names to values")
