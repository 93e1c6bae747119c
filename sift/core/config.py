"""
Configuration for sift.

Rule configuration is read from a YAML file and validated into a
``RuleConfig``. Process-level defaults come from ``SIFT_*`` environment
variables (or a ``.env`` file) through ``Settings``.
"""

import logging
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..organization.rules import RuleSet
from .exceptions import ConfigError

logger = logging.getLogger(__name__)


class RuleConfig(BaseModel):
    """Parsed rule configuration file."""

    rules: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Category name mapped to the extensions it collects",
    )
    exclude_folders: List[str] = Field(
        default_factory=list,
        description="Directory names never descended into",
    )

    def to_rule_set(self) -> RuleSet:
        """Build the extension lookup table for these rules."""
        return RuleSet.from_categories(self.rules)

    def exclusion_set(self) -> FrozenSet[str]:
        """Return the excluded directory names."""
        return frozenset(name for name in self.exclude_folders if name)


def load_config(config_path: Path) -> RuleConfig:
    """
    Load a rule configuration file.

    Args:
        config_path: Path to a YAML file with ``rules`` and ``exclude_folders``

    Returns:
        Validated rule configuration

    Raises:
        ConfigError: If the file cannot be read, parsed or validated
    """
    config_path = Path(config_path)

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        config = RuleConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {config_path}: {e}") from e

    logger.debug(
        f"Loaded {len(config.rules)} categories and "
        f"{len(config.exclude_folders)} exclusions from {config_path}"
    )
    return config


def parse_exclude_list(value: Optional[str]) -> FrozenSet[str]:
    """Split a comma-separated list of folder names, trimming whitespace."""
    if not value:
        return frozenset()
    return frozenset(part.strip() for part in value.split(",") if part.strip())


class Settings(BaseSettings):
    """Defaults loaded from environment variables."""

    config_file: Optional[Path] = None
    exclude: Optional[str] = None  # Comma-separated folder names

    model_config = SettingsConfigDict(
        env_prefix="SIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
