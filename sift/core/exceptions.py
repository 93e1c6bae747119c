"""Exception hierarchy for sift."""


class SiftError(Exception):
    """Base class for all sift errors."""


class ConfigError(SiftError):
    """Rule configuration could not be read or validated."""


class TraversalError(SiftError):
    """A directory could not be read while walking the source tree."""


class UndoLogError(SiftError):
    """The undo log could not be created, written or read."""


class UndoLogNotFoundError(UndoLogError):
    """No undo log exists in the requested directory."""
