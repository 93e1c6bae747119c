"""
Undo log for organization passes.

The log is a plain text file at the root of the organized directory with
one ``<new path>::SFT::<original path>`` line per completed move.

Lines end with ``\\n`` only. Names that are not valid UTF-8 are written
with ``surrogateescape`` so they read back as the same path.
"""

import logging
from pathlib import Path
from typing import IO, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..core.exceptions import UndoLogError, UndoLogNotFoundError

logger = logging.getLogger(__name__)

LOG_FILE_NAME = ".sift_log"
LOG_SEPARATOR = "::SFT::"
LOG_ENCODING = "utf-8"
LOG_ERRORS = "surrogateescape"


def get_log_path(source_dir: Path) -> Path:
    """Location of the undo log for a source directory."""
    return Path(source_dir) / LOG_FILE_NAME


class UndoRecord(BaseModel):
    """A completed move that can be reverted."""

    new_path: Path = Field(description="Where the file was moved to")
    original_path: Path = Field(description="Where the file was before the move")

    model_config = ConfigDict(frozen=True)

    def to_line(self) -> str:
        """Serialize to a log line without trailing newline."""
        return f"{self.new_path}{LOG_SEPARATOR}{self.original_path}"

    @classmethod
    def from_line(cls, line: str) -> Optional["UndoRecord"]:
        """
        Parse a log line.

        Returns:
            The record, or None unless the line has exactly two absolute paths
        """
        parts = line.split(LOG_SEPARATOR)
        if len(parts) != 2 or not parts[0] or not parts[1]:
            return None
        new_path, original_path = Path(parts[0]), Path(parts[1])
        # Relative paths would resolve against the working directory
        if not (new_path.is_absolute() and original_path.is_absolute()):
            return None
        return cls(new_path=new_path, original_path=original_path)


class UndoLogWriter:
    """Append-only writer for one organization pass.

    Opening truncates any previous log. Each record is flushed as soon as it
    is written, so an interrupted pass leaves an undoable prefix.
    """

    def __init__(self, log_path: Path):
        self.log_path = Path(log_path)
        self._file: Optional[IO[str]] = None

    def open(self) -> "UndoLogWriter":
        try:
            self._file = open(
                self.log_path,
                "w",
                encoding=LOG_ENCODING,
                errors=LOG_ERRORS,
                newline="\n",
            )
        except OSError as e:
            raise UndoLogError(
                f"Could not create undo log {self.log_path}: {e}"
            ) from e
        logger.debug(f"Opened undo log {self.log_path}")
        return self

    def append(self, record: UndoRecord) -> None:
        """
        Write a record and flush it to disk.

        Raises:
            UndoLogError: If the log is closed or the write fails
        """
        if self._file is None:
            raise UndoLogError(f"Undo log {self.log_path} is not open")
        try:
            self._file.write(record.to_line() + "\n")
            self._file.flush()
        except (OSError, UnicodeError) as e:
            raise UndoLogError(f"Failed to write to undo log: {e}") from e

    def close(self) -> None:
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> "UndoLogWriter":
        return self.open()

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def read_undo_log(log_path: Path) -> Tuple[List[UndoRecord], int]:
    """
    Read every record from an undo log in append order.

    Malformed lines are skipped with a warning.

    Args:
        log_path: Path to the log file

    Returns:
        Tuple of (records, number of malformed lines)

    Raises:
        UndoLogNotFoundError: If the log does not exist
        UndoLogError: If the log cannot be read
    """
    log_path = Path(log_path)
    if not log_path.is_file():
        raise UndoLogNotFoundError(
            f"No undo log file found in {log_path.parent}. Cannot perform undo."
        )

    try:
        with open(
            log_path, "r", encoding=LOG_ENCODING, errors=LOG_ERRORS, newline="\n"
        ) as f:
            lines = [line.rstrip("\n") for line in f]
    except OSError as e:
        raise UndoLogError(f"Error reading undo log file {log_path}: {e}") from e

    records: List[UndoRecord] = []
    malformed = 0
    for line in lines:
        record = UndoRecord.from_line(line)
        if record is None:
            logger.warning(f"Skipping malformed log entry: {line!r}")
            malformed += 1
            continue
        records.append(record)

    return records, malformed
