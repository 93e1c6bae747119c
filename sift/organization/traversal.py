"""
Source tree traversal.

Walks the source directory once in pre-order and decides, per entry,
whether to process it, descend into it, skip it or prune its subtree.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, NamedTuple, Tuple

from ..core.exceptions import TraversalError

logger = logging.getLogger(__name__)


class VisitAction(str, Enum):
    """What the walk does with a visited entry."""

    PROCESS = "process"  # File handed to the organizer
    DESCEND = "descend"  # Directory walked into
    SKIP = "skip"  # Entry ignored
    PRUNE = "prune"  # Directory and everything below it ignored


class VisitDecision(NamedTuple):
    """Decision for one visited entry."""

    action: VisitAction
    reason: str = ""


class Traverser:
    """Pre-order walk over a source directory with pruning rules."""

    def __init__(
        self,
        root: Path,
        exclusions: Iterable[str] = (),
        destination_categories: Iterable[str] = (),
        skip_paths: Iterable[Path] = (),
    ):
        """
        Initialize traverser.

        Args:
            root: Directory to walk
            exclusions: Directory names never descended into
            destination_categories: Directory names holding organized output
            skip_paths: Exact paths to ignore (the undo log)
        """
        self.root = Path(root)
        self.exclusions = frozenset(exclusions)
        self.destination_categories = frozenset(destination_categories)
        self.skip_paths = frozenset(Path(p) for p in skip_paths)

    def decide(self, path: Path, is_dir: bool) -> VisitDecision:
        """
        Classify a single entry.

        Args:
            path: Entry path
            is_dir: Whether the entry is a real directory (not a symlink)

        Returns:
            Decision for the entry
        """
        if path in self.skip_paths:
            return VisitDecision(VisitAction.SKIP, "undo log")

        if is_dir:
            if path.name in self.exclusions:
                return VisitDecision(VisitAction.PRUNE, "excluded directory")
            if path.name in self.destination_categories:
                return VisitDecision(VisitAction.PRUNE, "already organized directory")
            return VisitDecision(VisitAction.DESCEND)

        return VisitDecision(VisitAction.PROCESS)

    def walk(self) -> Iterator[Path]:
        """
        Yield every file to process, in pre-order and name order.

        The root itself is always descended, even when its own name is
        excluded or is a category name: organizing ``~/Images`` sorts its
        contents rather than doing nothing. Each directory is listed in
        full before its entries are yielded, so files moved during the walk
        do not change what is visited.

        Raises:
            TraversalError: If a directory cannot be read
        """
        yield from self._walk_dir(self.root)

    def _walk_dir(self, directory: Path) -> Iterator[Path]:
        for path, is_dir in self._list(directory):
            decision = self.decide(path, is_dir)

            if decision.action == VisitAction.PROCESS:
                yield path
            elif decision.action == VisitAction.DESCEND:
                yield from self._walk_dir(path)
            elif decision.action == VisitAction.PRUNE:
                logger.debug(f"Skipping {decision.reason}: {path}")
            else:
                logger.debug(f"Ignoring {decision.reason}: {path}")

    @staticmethod
    def _list(directory: Path) -> List[Tuple[Path, bool]]:
        try:
            with os.scandir(directory) as it:
                entries = [
                    (Path(entry.path), _is_real_dir(entry)) for entry in it
                ]
        except OSError as e:
            raise TraversalError(f"Cannot read directory {directory}: {e}") from e

        entries.sort(key=lambda item: item[0].name)
        return entries


def _is_real_dir(entry: "os.DirEntry[str]") -> bool:
    try:
        return entry.is_dir(follow_symlinks=False)
    except OSError:
        return False

