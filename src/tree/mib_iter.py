"""Seek-and-resume depth-first walker over store leaves.

The walker keeps a frontier: one open container listing per depth on
the current traversal path, from the store root down to the cursor.
Seeking replays the traversal from the root until the target is reached,
so a walker can resume anywhere without loading the tree.
"""

from __future__ import annotations

from pathlib import Path
from types import TracebackType
from typing import Iterator

from core.errors import SysctlUnsupportedError
from core.logging_config import get_logger
from core.types import EntryType, StoreEntry
from tree.mib import Mib, MibContext
from tree.proc_store import Listing

_LOGGER = get_logger(__name__)


class MibIter:
    """Lazy, finite, forward-only enumeration of leaf handles.

    Containers are entered but never yielded. Iteration order within a
    container is the store's native listing order, which is not sorted.
    Once exhausted the walker stays exhausted.
    """

    def __init__(self, context: MibContext, frontier: list[Listing]) -> None:
        """Wrap an already positioned frontier.

        Args:
            context: Tree collaborators.
            frontier: Open listings, outermost first.
        """
        self._context = context
        self._frontier = frontier

    @classmethod
    def from_root(cls, context: MibContext) -> "MibIter":
        """Return a walker over every leaf of the store."""
        return cls(context, [context.store.list_entries(context.store.root)])

    @classmethod
    def seek(cls, context: MibContext, target: Path) -> "MibIter":
        """Position a walker right after ``target`` in pre-order.

        A leaf target is consumed, so iteration continues with whatever
        follows it. A container target has its listing opened, so
        iteration continues with its first leaf. A target that is never
        reached yields an empty walker.

        Args:
            context: Tree collaborators.
            target: Canonical path to resume from.

        Returns:
            Positioned walker.

        Raises:
            SysctlUnsupportedError: If an unsupported entry is met on the way.
        """
        root = context.store.root
        if target == root:
            return cls.from_root(context)
        frontier: list[Listing] = [context.store.list_entries(root)]
        try:
            _seek_frontier(context, frontier, target)
        except BaseException:
            _close_all(frontier)
            raise
        _LOGGER.debug("mib_iter_seek_complete", target=str(target), depth=len(frontier))
        return cls(context, frontier)

    @property
    def depth(self) -> int:
        """Return the number of open listings on the frontier."""
        return len(self._frontier)

    def __iter__(self) -> Iterator[Mib]:
        return self

    def __next__(self) -> Mib:
        while self._frontier:
            entry = next(self._frontier[-1], None)
            if entry is None:
                self._frontier.pop().close()
                continue
            if entry.entry_type is EntryType.CONTAINER:
                self._frontier.append(self._context.store.list_entries(entry.path))
                continue
            if entry.entry_type is EntryType.LEAF:
                return Mib(path=entry.path, context=self._context)
            raise _unsupported(entry)
        raise StopIteration

    def close(self) -> None:
        """Release every open listing; the walker becomes exhausted."""
        _close_all(self._frontier)

    def __enter__(self) -> "MibIter":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()


def _seek_frontier(context: MibContext, frontier: list[Listing], target: Path) -> None:
    """Advance the frontier until ``target`` has just been visited.

    Containers that are not ancestors of the target are skipped without
    being listed: descending into them would consume and pop their
    listings without changing the resulting frontier.

    Args:
        context: Tree collaborators.
        frontier: Listings to advance in place.
        target: Canonical path to stop after.
    """
    while frontier:
        entry = next(frontier[-1], None)
        if entry is None:
            frontier.pop().close()
            continue
        if entry.entry_type is EntryType.CONTAINER:
            if entry.path == target or entry.path in target.parents:
                frontier.append(context.store.list_entries(entry.path))
            if entry.path == target:
                return
            continue
        if entry.entry_type is EntryType.LEAF:
            if entry.path == target:
                return
            continue
        raise _unsupported(entry)


def _close_all(frontier: list[Listing]) -> None:
    while frontier:
        frontier.pop().close()


def _unsupported(entry: StoreEntry) -> SysctlUnsupportedError:
    return SysctlUnsupportedError(
        f"Entry {entry.path} is neither a container nor a leaf; symlinks are not supported."
    )
