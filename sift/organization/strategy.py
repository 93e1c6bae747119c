"""
Organization strategies.

Defines where a file goes for each organization mode.
"""

import os
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import FrozenSet

from .rules import RuleSet, split_extension


class OrganizationMode(str, Enum):
    """How destination folders are chosen."""

    BY_TYPE = "by_type"  # Images/, Documents/, Others/
    BY_DATE = "by_date"  # 2023/06-June/


def date_directory(base_path: Path, date: datetime) -> Path:
    """
    Get the ``<YYYY>/<MM>-<MonthName>`` directory for a date.

    Args:
        base_path: Organized directory root
        date: Date to bucket by

    Returns:
        Target directory, e.g. ``base_path/2023/06-June``
    """
    return base_path / date.strftime("%Y") / date.strftime("%m-%B")


class OrganizationStrategy:
    """Computes target directories for one pass."""

    def __init__(self, mode: OrganizationMode, rules: RuleSet):
        self.mode = OrganizationMode(mode)
        self.rules = rules

    def get_target_directory(self, base_path: Path, file_path: Path) -> Path:
        """
        Get target directory for a file.

        Args:
            base_path: Organized directory root
            file_path: File being organized

        Returns:
            Directory the file should be moved into

        Raises:
            OSError: In date mode, if the modification time cannot be read
        """
        if self.mode == OrganizationMode.BY_DATE:
            mtime = os.stat(file_path, follow_symlinks=False).st_mtime
            return date_directory(base_path, datetime.fromtimestamp(mtime))

        _, extension = split_extension(file_path.name)
        return base_path / self.rules.classify(extension)

    def get_target_path(self, base_path: Path, file_path: Path) -> Path:
        """Get the candidate path before collision resolution."""
        return self.get_target_directory(base_path, file_path) / file_path.name

    def pruned_directories(self) -> FrozenSet[str]:
        """
        Directory names holding output of this mode.

        Date folders never collide with type categories, so only the
        type mode prunes its own output.
        """
        if self.mode == OrganizationMode.BY_TYPE:
            return self.rules.destination_categories()
        return frozenset()
