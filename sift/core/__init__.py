"""Core configuration and error types."""

from .config import RuleConfig, Settings, load_config, parse_exclude_list
from .exceptions import (
    ConfigError,
    SiftError,
    TraversalError,
    UndoLogError,
    UndoLogNotFoundError,
)

__all__ = [
    "RuleConfig",
    "Settings",
    "load_config",
    "parse_exclude_list",
    "ConfigError",
    "SiftError",
    "TraversalError",
    "UndoLogError",
    "UndoLogNotFoundError",
]
