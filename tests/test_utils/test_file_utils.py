"""
Tests for file utility functions.

Tests name sanitizing, stored name generation, size calculation and
directory creation. All tests use temporary files/directories for safety.
"""

import re
from pathlib import Path

from pdfsearch.utils.file_utils import (
    sanitize_filename,
    generate_stored_name,
    get_file_size_mb,
    ensure_directory
)


class TestSanitizeFilename:
    """Tests for sanitize_filename function."""

    def test_plain_name_unchanged(self):
        assert sanitize_filename("report-2024_v1.pdf") == "report-2024_v1.pdf"

    def test_directory_components_dropped(self):
        """Path traversal attempts keep only the basename."""
        assert sanitize_filename("../../etc/passwd.pdf") == "passwd.pdf"
        assert sanitize_filename("C:\\Users\\me\\doc.pdf") == "doc.pdf"

    def test_unsafe_runs_become_underscore(self):
        assert sanitize_filename("my  report (final).pdf") == "my_report_final_.pdf"

    def test_accented_letters_kept(self):
        assert sanitize_filename("résumé.pdf") == "résumé.pdf"

    def test_empty_name_uses_default(self):
        assert sanitize_filename("") == "document.pdf"
        assert sanitize_filename(None) == "document.pdf"
        assert sanitize_filename("...") == "document.pdf"


class TestGenerateStoredName:
    """Tests for generate_stored_name function."""

    def test_format(self):
        """Names are <epoch ms>-<12 hex>-<sanitized name>."""
        name = generate_stored_name("My File.pdf")

        assert re.fullmatch(r"\d{13}-[0-9a-f]{12}-My_File\.pdf", name)

    def test_same_name_twice_differs(self):
        """Repeated uploads of one file name get distinct stored names."""
        assert generate_stored_name("a.pdf") != generate_stored_name("a.pdf")


class TestGetFileSizeMb:
    """Tests for get_file_size_mb function."""

    def test_small_file_size(self, temp_dir: Path):
        """Test size calculation for small file."""
        test_file = temp_dir / "small.txt"
        test_file.write_bytes(b"x" * 1024)

        assert get_file_size_mb(test_file) == 0.0

    def test_larger_file_size(self, temp_dir: Path):
        """Test size calculation for larger file."""
        test_file = temp_dir / "larger.txt"
        test_file.write_bytes(b"x" * (1024 * 1024))

        assert get_file_size_mb(test_file) == 1.0


class TestEnsureDirectory:
    """Tests for ensure_directory function."""

    def test_creates_nested_directories(self, temp_dir: Path):
        """Test creating nested directory structure."""
        nested_dir = temp_dir / "level1" / "level2" / "level3"

        result = ensure_directory(nested_dir)

        assert nested_dir.is_dir()
        assert result == nested_dir

    def test_existing_directory_no_error(self, temp_dir: Path):
        """Test that existing directory doesn't raise error."""
        existing_dir = temp_dir / "existing"
        existing_dir.mkdir()

        assert ensure_directory(existing_dir) == existing_dir

    def test_with_string_path(self, temp_dir: Path):
        """Test that function works with string paths."""
        new_dir = temp_dir / "string_dir"

        result = ensure_directory(str(new_dir))

        assert isinstance(result, Path)
        assert new_dir.exists()
