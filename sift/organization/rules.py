"""
Extension rules for organizing files by type.

Maps normalized file extensions to destination category folders.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

FALLBACK_CATEGORY = "Others"

DEFAULT_CATEGORIES: Mapping[str, tuple] = MappingProxyType(
    {
        "Images": (".jpg", ".jpeg", ".png", ".gif", ".webp", ".bmp", ".svg"),
        "Documents": (
            ".pdf",
            ".docx",
            ".doc",
            ".txt",
            ".ppt",
            ".pptx",
            ".xls",
            ".xlsx",
            ".md",
        ),
        "Audio": (".mp3", ".wav", ".m4a", ".flac"),
        "Videos": (".mp4", ".mov", ".avi", ".mkv", ".webm"),
        "Archives": (".zip", ".rar", ".7z", ".tar", ".gz"),
    }
)


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split a file name at its last dot.

    Unlike ``Path.suffix``, a leading dot counts: ``.bashrc`` has the
    extension ``.bashrc`` and an empty stem.

    Returns:
        Tuple of (stem, extension), extension empty when there is no dot
    """
    index = name.rfind(".")
    if index < 0:
        return name, ""
    return name[:index], name[index:]


def normalize_extension(extension: str) -> str:
    """
    Normalize an extension to lowercase with a leading dot.

    An empty extension stays empty.
    """
    ext = extension.strip().lower()
    if ext and not ext.startswith("."):
        ext = "." + ext
    return ext


class RuleSet(BaseModel):
    """Immutable extension to category lookup table."""

    rules: Dict[str, str] = Field(
        default_factory=dict,
        description="Normalized extension mapped to category name",
    )
    fallback_category: str = Field(
        default=FALLBACK_CATEGORY,
        description="Category for extensions with no rule",
    )

    model_config = ConfigDict(frozen=True)

    @field_validator("rules")
    @classmethod
    def normalize_keys(cls, value: Dict[str, str]) -> Dict[str, str]:
        normalized = {}
        for ext, category in value.items():
            key = normalize_extension(ext)
            if key:
                normalized[key] = category
        return normalized

    @classmethod
    def from_categories(
        cls,
        categories: Mapping[str, Iterable[str]],
        fallback_category: str = FALLBACK_CATEGORY,
    ) -> "RuleSet":
        """
        Build a rule set from a category to extensions mapping.

        Args:
            categories: Category name mapped to its extensions
            fallback_category: Category for unmatched extensions

        Returns:
            Rule set keyed by normalized extension
        """
        rules = {}
        for category, extensions in categories.items():
            for ext in extensions:
                rules[ext] = category
        return cls(rules=rules, fallback_category=fallback_category)

    @classmethod
    def default(cls) -> "RuleSet":
        """Rule set for the built-in categories."""
        return cls.from_categories(DEFAULT_CATEGORIES)

    def classify(self, extension: str) -> str:
        """
        Get the destination category for an extension.

        Args:
            extension: File extension, with or without leading dot, any case

        Returns:
            Mapped category, or the fallback category when unmapped
        """
        return self.rules.get(normalize_extension(extension), self.fallback_category)

    def destination_categories(self) -> FrozenSet[str]:
        """All category folder names this rule set can produce."""
        return frozenset(self.rules.values()) | {self.fallback_category}
