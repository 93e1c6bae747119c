"""
Undo of a previous organization pass.

Replays the undo log in reverse order, moving each file back to where it
was, and deletes the log once every record has been reverted.
"""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

from .undo_log import UndoRecord, get_log_path, read_undo_log

logger = logging.getLogger(__name__)


class UndoResult(BaseModel):
    """Result of an undo pass."""

    total_records: int = 0
    reverted: int = 0
    malformed: int = 0
    completed: bool = False
    log_removed: bool = False
    error: Optional[str] = None


def _revert(record: UndoRecord) -> None:
    if os.path.lexists(record.original_path):
        raise FileExistsError(
            f"{record.original_path} already exists, refusing to overwrite"
        )
    os.rename(record.new_path, record.original_path)


def undo(source_dir: Path) -> UndoResult:
    """
    Revert the last organization pass of a directory.

    Records are replayed strictly last to first. Replay stops at the first
    failure and the log is left untouched so the undo can be retried.

    Args:
        source_dir: Directory that was organized

    Returns:
        Undo result with the reverted count

    Raises:
        UndoLogNotFoundError: If the directory has no undo log
        UndoLogError: If the log cannot be read
    """
    log_path = get_log_path(Path(source_dir).resolve())
    records, malformed = read_undo_log(log_path)

    result = UndoResult(total_records=len(records), malformed=malformed)
    logger.info(f"Found {len(records)} operations to undo")

    for record in reversed(records):
        logger.info(f"Reverting {record.new_path} → {record.original_path}")
        try:
            _revert(record)
        except OSError as e:
            logger.error(f"Error reverting file {record.new_path}: {e}")
            logger.error("Stopping undo operation to prevent data loss")
            result.error = str(e)
            return result
        result.reverted += 1

    result.completed = True

    try:
        log_path.unlink()
        result.log_removed = True
    except OSError as e:
        logger.warning(f"Could not remove undo log file {log_path}: {e}")

    logger.info(f"Undo complete: {result.reverted} files reverted")
    return result
