"""Collision-free destination paths."""

import os
from pathlib import Path

from .rules import split_extension


def _occupied(path: Path) -> bool:
    # lexists so a dangling symlink still counts as taken
    return os.path.lexists(path)


def resolve_collision(candidate: Path) -> Path:
    """
    Resolve a naming conflict by adding a numbered suffix.

    Returns ``candidate`` unchanged if nothing exists there. Otherwise probes
    ``"<stem> (1)<suffix>"``, ``"<stem> (2)<suffix>"``, ... and returns the
    first free path. An existing ``" (n)"`` in the stem is kept as plain text,
    so ``report (1).pdf`` resolves to ``report (1) (1).pdf``.

    Args:
        candidate: Desired destination path

    Returns:
        A path with no existing filesystem entry
    """
    candidate = Path(candidate)
    if not _occupied(candidate):
        return candidate

    stem, suffix = split_extension(candidate.name)
    parent = candidate.parent

    counter = 1
    while True:
        new_path = parent / f"{stem} ({counter}){suffix}"
        if not _occupied(new_path):
            return new_path
        counter += 1
