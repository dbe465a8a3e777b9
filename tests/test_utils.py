# =============================================================================
# tests/test_utils.py - Shared Utility Tests
# =============================================================================
# File name helpers decide the storage key "{user_id}/{file_name}", so
# anything a client sends must come out as a bare file name.
# =============================================================================

from uuid import UUID

import pytest

from lib.utils import file_extension, normalize_uuid, safe_file_name


class TestSafeFileName:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("notes.md", "notes.md"),
            ("../victim/notes.md", "notes.md"),
            ("/etc/notes.md", "notes.md"),
            ("a\\b.md", "b.md"),
            ("C:\\Users\\me\\notes.md", "notes.md"),
            ("  spaced.md  ", "spaced.md"),
        ],
    )
    def test_keeps_only_the_base_name(self, raw, expected):
        assert safe_file_name(raw) == expected

    def test_parent_reference_is_empty(self):
        """The upload route turns an empty name into FILE_READ_ERROR."""
        assert safe_file_name("..") == ""
        assert safe_file_name("") == ""

    def test_trailing_slash(self):
        assert safe_file_name("folder/") == "folder"


class TestFileExtension:

    def test_lower_cased_with_dot(self):
        assert file_extension("Notes.MD") == ".md"
        assert file_extension("archive.tar.markdown") == ".markdown"

    def test_no_extension(self):
        assert file_extension("README") == ""

    def test_only_last_part_counts(self):
        assert file_extension("notes.md.exe") == ".exe"


def test_normalize_uuid():
    value = UUID("550e8400-e29b-41d4-a716-446655440000")

    assert normalize_uuid(value) == "550e8400-e29b-41d4-a716-446655440000"
    assert normalize_uuid("abc") == "abc"
