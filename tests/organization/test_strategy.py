"""Tests for organization strategy."""

import os
from datetime import datetime
from pathlib import Path

import pytest

from sift.organization.rules import RuleSet
from sift.organization.strategy import (
    OrganizationMode,
    OrganizationStrategy,
    date_directory,
)


class TestDateDirectory:
    """Test year/month directory names."""

    def test_month_is_zero_padded_with_name(self):
        """Test YYYY/MM-Month layout."""
        target = date_directory(Path("/out"), datetime(2023, 6, 15, 14, 30))

        assert target == Path("/out/2023/06-June")

    def test_january_and_december(self):
        """Test month boundaries."""
        assert date_directory(Path("/out"), datetime(2021, 1, 1)) == Path(
            "/out/2021/01-January"
        )
        assert date_directory(Path("/out"), datetime(1999, 12, 31)) == Path(
            "/out/1999/12-December"
        )


class TestOrganizationStrategy:
    """Test target directory selection."""

    def test_by_type_uses_rules(self):
        """Test type mode classifies by extension."""
        strategy = OrganizationStrategy(OrganizationMode.BY_TYPE, RuleSet.default())

        target = strategy.get_target_directory(Path("/src"), Path("/src/a/IMG.JPG"))

        assert target == Path("/src/Images")

    def test_by_type_unknown_extension(self):
        """Test unknown extensions go to the fallback folder."""
        strategy = OrganizationStrategy(OrganizationMode.BY_TYPE, RuleSet.default())

        target = strategy.get_target_path(Path("/src"), Path("/src/notes.xyz"))

        assert target == Path("/src/Others/notes.xyz")

    def test_by_type_dotfile_rule(self):
        """Test a rule for a dotfile name matches the whole name."""
        rules = RuleSet.from_categories({"Config": ["bashrc"]})
        strategy = OrganizationStrategy(OrganizationMode.BY_TYPE, rules)

        target = strategy.get_target_path(Path("/src"), Path("/src/home/.bashrc"))

        assert target == Path("/src/Config/.bashrc")

    def test_by_date_uses_mtime(self, tmp_path):
        """Test date mode reads the modification time."""
        file_path = tmp_path / "old.txt"
        file_path.write_text("x")
        ts = datetime(2022, 3, 9, 8, 0).timestamp()
        os.utime(file_path, (ts, ts))

        strategy = OrganizationStrategy(OrganizationMode.BY_DATE, RuleSet.default())

        target = strategy.get_target_path(tmp_path, file_path)

        assert target == tmp_path / "2022" / "03-March" / "old.txt"

    def test_by_date_missing_file_raises(self, tmp_path):
        """Test date mode surfaces stat errors."""
        strategy = OrganizationStrategy(OrganizationMode.BY_DATE, RuleSet.default())

        with pytest.raises(OSError):
            strategy.get_target_directory(tmp_path, tmp_path / "gone.txt")

    def test_pruned_directories_by_type(self):
        """Test type mode prunes its category folders."""
        rules = RuleSet(rules={".jpg": "Pictures"})
        strategy = OrganizationStrategy(OrganizationMode.BY_TYPE, rules)

        assert strategy.pruned_directories() == {"Pictures", "Others"}

    def test_pruned_directories_by_date(self):
        """Test date mode prunes nothing."""
        strategy = OrganizationStrategy(OrganizationMode.BY_DATE, RuleSet.default())

        assert strategy.pruned_directories() == frozenset()

    def test_mode_from_string(self):
        """Test mode accepts its string value."""
        strategy = OrganizationStrategy("by_date", RuleSet.default())

        assert strategy.mode == OrganizationMode.BY_DATE
