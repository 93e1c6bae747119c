"""Tests for collision resolution."""

import os

import pytest

from sift.organization.resolver import resolve_collision


class TestResolveCollision:
    """Test numbered suffix probing."""

    def test_free_path_unchanged(self, tmp_path):
        """Test a free path is returned as-is."""
        candidate = tmp_path / "photo.jpg"

        assert resolve_collision(candidate) == candidate

    def test_first_collision(self, tmp_path):
        """Test the first conflict gets (1)."""
        (tmp_path / "photo.jpg").write_text("a")

        assert resolve_collision(tmp_path / "photo.jpg") == tmp_path / "photo (1).jpg"

    def test_lowest_free_suffix(self, tmp_path):
        """Test probing returns the lowest unused number."""
        for name in ["photo.jpg", "photo (1).jpg", "photo (2).jpg", "photo (4).jpg"]:
            (tmp_path / name).write_text("a")

        assert resolve_collision(tmp_path / "photo.jpg") == tmp_path / "photo (3).jpg"

    def test_existing_suffix_is_plain_text(self, tmp_path):
        """Test a numbered name gets a new suffix appended."""
        (tmp_path / "report (1).pdf").write_text("a")

        result = resolve_collision(tmp_path / "report (1).pdf")

        assert result == tmp_path / "report (1) (1).pdf"

    def test_no_extension(self, tmp_path):
        """Test names without extension."""
        (tmp_path / "Makefile").write_text("a")

        assert resolve_collision(tmp_path / "Makefile") == tmp_path / "Makefile (1)"

    def test_multiple_dots_keep_last_suffix(self, tmp_path):
        """Test only the final extension is split off."""
        (tmp_path / "backup.tar.gz").write_text("a")

        result = resolve_collision(tmp_path / "backup.tar.gz")

        assert result == tmp_path / "backup.tar (1).gz"

    def test_dotfile_name_is_the_extension(self, tmp_path):
        """Test a leading-dot name keeps its dot part after the number."""
        (tmp_path / ".bashrc").write_text("a")

        assert resolve_collision(tmp_path / ".bashrc") == tmp_path / " (1).bashrc"

    def test_directory_counts_as_taken(self, tmp_path):
        """Test an existing directory also blocks the name."""
        (tmp_path / "notes").mkdir()

        assert resolve_collision(tmp_path / "notes") == tmp_path / "notes (1)"

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="needs symlinks")
    def test_dangling_symlink_counts_as_taken(self, tmp_path):
        """Test a broken symlink is never overwritten."""
        os.symlink(tmp_path / "missing", tmp_path / "link.txt")

        assert resolve_collision(tmp_path / "link.txt") == tmp_path / "link (1).txt"

    def test_never_returns_existing_path(self, tmp_path):
        """Test the result never exists at call time."""
        (tmp_path / "a.txt").write_text("a")
        for i in range(1, 20):
            (tmp_path / f"a ({i}).txt").write_text("a")

        result = resolve_collision(tmp_path / "a.txt")

        assert not result.exists()
        assert result.name == "a (20).txt"
