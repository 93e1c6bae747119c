"""
File organizer for sorting a directory tree into sub-folders.

Moves each file into a category or date folder under the source directory,
with a dry-run preview and an undo log recording every completed move.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field

from ..core.exceptions import TraversalError, UndoLogError
from .resolver import resolve_collision
from .rules import RuleSet
from .strategy import OrganizationMode, OrganizationStrategy
from .traversal import Traverser
from .undo_log import UndoLogWriter, UndoRecord, get_log_path

logger = logging.getLogger(__name__)


class OrganizationResult(BaseModel):
    """Result of an organization pass."""

    mode: OrganizationMode = OrganizationMode.BY_TYPE
    dry_run: bool = False
    files_moved: int = 0
    files_skipped: int = 0
    aborted: bool = False
    log_path: Optional[Path] = None
    errors: List[str] = Field(default_factory=list)


class FileOrganizer:
    """Organize the files of a source directory in place."""

    def __init__(
        self,
        source_dir: Path,
        rules: Optional[RuleSet] = None,
        exclusions: Iterable[str] = (),
    ):
        """
        Initialize file organizer.

        Args:
            source_dir: Directory to organize
            rules: Extension rules for type mode (defaults to built-in rules)
            exclusions: Directory names never descended into
        """
        self.source_dir = Path(source_dir).resolve()
        self.rules = rules if rules is not None else RuleSet.default()
        self.exclusions = frozenset(exclusions)
        self.log_path = get_log_path(self.source_dir)

    def organize_by_type(self, dry_run: bool = False) -> OrganizationResult:
        """Sort files into category folders by extension."""
        return self.organize(OrganizationMode.BY_TYPE, dry_run=dry_run)

    def organize_by_date(self, dry_run: bool = False) -> OrganizationResult:
        """Sort files into ``YYYY/MM-Month`` folders by modification time."""
        return self.organize(OrganizationMode.BY_DATE, dry_run=dry_run)

    def organize(
        self, mode: OrganizationMode, dry_run: bool = False
    ) -> OrganizationResult:
        """
        Run one organization pass.

        Args:
            mode: Organization mode for the whole pass
            dry_run: If True, report intended moves without touching anything

        Returns:
            Organization result with counters

        Raises:
            UndoLogError: If the undo log cannot be created
        """
        mode = OrganizationMode(mode)
        logger.info(
            f"Starting organization {mode.value} of {self.source_dir} "
            f"({'DRY RUN' if dry_run else 'LIVE'})"
        )

        strategy = OrganizationStrategy(mode, self.rules)
        traverser = Traverser(
            self.source_dir,
            exclusions=self.exclusions,
            destination_categories=strategy.pruned_directories(),
            skip_paths=[self.log_path],
        )
        result = OrganizationResult(
            mode=mode,
            dry_run=dry_run,
            log_path=None if dry_run else self.log_path,
        )

        if dry_run:
            self._run(traverser, strategy, result, None)
        else:
            with UndoLogWriter(self.log_path) as undo_log:
                self._run(traverser, strategy, result, undo_log)

        logger.info(
            f"Organization finished: {result.files_moved} moved, "
            f"{result.files_skipped} skipped"
        )
        return result

    def _run(
        self,
        traverser: Traverser,
        strategy: OrganizationStrategy,
        result: OrganizationResult,
        undo_log: Optional[UndoLogWriter],
    ) -> None:
        try:
            for file_path in traverser.walk():
                self._process_file(file_path, strategy, result, undo_log)
        except TraversalError as e:
            # Moves already made stay in place and in the log
            logger.error(f"Error during organization: {e}")
            result.aborted = True
            result.errors.append(str(e))

    def _process_file(
        self,
        file_path: Path,
        strategy: OrganizationStrategy,
        result: OrganizationResult,
        undo_log: Optional[UndoLogWriter],
    ) -> None:
        """
        Move a single file, or preview the move when ``undo_log`` is None.

        Per-file failures are counted as skipped and never stop the pass.
        """
        try:
            candidate = strategy.get_target_path(self.source_dir, file_path)
        except OSError as e:
            self._skip(result, f"Could not get file info for {file_path}: {e}")
            return

        target_dir = candidate.parent
        final_path = resolve_collision(candidate)

        if undo_log is None:
            logger.info(f"[DRY RUN] Would move {file_path} → {final_path}")
            result.files_moved += 1
            return

        try:
            target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._skip(result, f"Error creating directory {target_dir}: {e}")
            return

        try:
            file_path.rename(final_path)
        except OSError as e:
            self._skip(result, f"Error moving file {file_path}: {e}")
            return

        try:
            undo_log.append(UndoRecord(new_path=final_path, original_path=file_path))
        except UndoLogError as e:
            logger.warning(f"{e} (move of {file_path} cannot be undone)")

        logger.info(f"Moved {file_path} → {final_path}")
        result.files_moved += 1

    @staticmethod
    def _skip(result: OrganizationResult, message: str) -> None:
        logger.error(message)
        result.files_skipped += 1
        result.errors.append(message)


def organize_by_type(
    source_dir: Path,
    rules: Optional[RuleSet] = None,
    exclusions: Iterable[str] = (),
    dry_run: bool = False,
) -> OrganizationResult:
    """Organize ``source_dir`` into category folders by file extension."""
    return FileOrganizer(source_dir, rules, exclusions).organize_by_type(dry_run)


def organize_by_date(
    source_dir: Path,
    exclusions: Iterable[str] = (),
    dry_run: bool = False,
) -> OrganizationResult:
    """Organize ``source_dir`` into year/month folders by modification time."""
    return FileOrganizer(source_dir, exclusions=exclusions).organize_by_date(dry_run)
