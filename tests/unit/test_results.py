"""
Unit tests for result data models.

Tests entry classification, diagnostics, and the complete query result.
"""

import os
import stat
import tempfile
from pathlib import Path
import pytest
from pydantic import ValidationError

from sizecmp.models.results import (
    Diagnostic,
    DiagnosticKind,
    EntryKind,
    FileEntry,
    SizeCmpResult
)
from sizecmp.models.size_query import SizeQuery


class TestEntryKind:
    """Test cases for EntryKind."""

    @pytest.mark.parametrize("mode,expected", [
        (stat.S_IFREG | 0o644, EntryKind.REGULAR),
        (stat.S_IFDIR | 0o755, EntryKind.DIRECTORY),
        (stat.S_IFLNK | 0o777, EntryKind.SYMLINK),
        (stat.S_IFCHR | 0o600, EntryKind.CHAR_DEVICE),
        (stat.S_IFBLK | 0o600, EntryKind.BLOCK_DEVICE),
        (stat.S_IFIFO | 0o600, EntryKind.FIFO),
        (stat.S_IFSOCK | 0o600, EntryKind.SOCKET),
        (0, EntryKind.OTHER),
    ])
    def test_from_mode(self, mode, expected):
        """Test classification from mode bits."""
        assert EntryKind.from_mode(mode) == expected

    def test_is_irregular(self):
        """Test which kinds count as irregular."""
        assert not EntryKind.REGULAR.is_irregular()
        assert not EntryKind.DIRECTORY.is_irregular()
        for kind in (EntryKind.SYMLINK, EntryKind.CHAR_DEVICE, EntryKind.BLOCK_DEVICE,
                     EntryKind.FIFO, EntryKind.SOCKET, EntryKind.OTHER):
            assert kind.is_irregular()


class TestFileEntry:
    """Test cases for FileEntry."""

    def test_from_stat(self):
        """Test building an entry from a real lstat result."""
        with tempfile.TemporaryDirectory() as temp_dir:
            path = Path(temp_dir) / "data.bin"
            path.write_bytes(b"x" * 42)

            entry = FileEntry.from_stat(str(path), os.lstat(path))

            assert entry.name == "data.bin"
            assert entry.path == str(path)
            assert entry.size == 42
            assert entry.kind == EntryKind.REGULAR
            assert entry.mode.startswith("-")
            assert not entry.is_irregular()

    def test_negative_size_rejected(self):
        """Test that sizes must be non-negative."""
        with pytest.raises(ValidationError):
            FileEntry(name="a", path="/a", size=-1, kind=EntryKind.REGULAR)


class TestDiagnostic:
    """Test cases for Diagnostic."""

    def test_is_fatal(self):
        """Test which diagnostics end a query."""
        assert Diagnostic(kind=DiagnosticKind.INVALID_ROOT, message="m").is_fatal()
        assert Diagnostic(kind=DiagnosticKind.INVALID_SIZE, message="m").is_fatal()
        assert Diagnostic(kind=DiagnosticKind.INVALID_OPERATOR, message="m").is_fatal()
        assert not Diagnostic(kind=DiagnosticKind.IRREGULAR_ENTRY, message="m").is_fatal()
        assert not Diagnostic(kind=DiagnosticKind.TRAVERSAL_ENTRY_ERROR, message="m").is_fatal()

    def test_str(self):
        """Test that a diagnostic renders as its message."""
        assert str(Diagnostic(kind=DiagnosticKind.INVALID_SIZE, message="size_cmp(a,b,c): bad")) == \
            "size_cmp(a,b,c): bad"


class TestSizeCmpResult:
    """Test cases for SizeCmpResult."""

    def setup_method(self):
        self.entries = [
            FileEntry(name="a.log", path="/var/log/a.log", size=10, kind=EntryKind.REGULAR, mode="-rw-r--r--"),
            FileEntry(name="b", path="/var/log/sub/b", size=7, kind=EntryKind.SYMLINK, mode="lrwxrwxrwx"),
        ]

    def test_empty_result(self):
        """Test a result for a rejected query."""
        result = SizeCmpResult()

        assert not result.succeeded
        assert result.matches is None
        assert result.get_full_paths() == []

    def test_successful_result(self):
        """Test accessors on a successful result."""
        result = SizeCmpResult(
            query=SizeQuery(path="/var/log", size="10B", operator="eq", threshold=10),
            matches=["a.log", "b"],
            entries=self.entries,
            diagnostics=[Diagnostic(kind=DiagnosticKind.IRREGULAR_ENTRY, message="b is symlink", path="/var/log/sub/b")]
        )

        assert result.succeeded
        assert result.get_full_paths() == ["/var/log/a.log", "/var/log/sub/b"]
        assert len(result.get_diagnostics(DiagnosticKind.IRREGULAR_ENTRY)) == 1
        assert result.get_diagnostics(DiagnosticKind.INVALID_ROOT) == []

    def test_empty_match_list_still_succeeds(self):
        """Test that no matches is different from no result."""
        result = SizeCmpResult(matches=[], entries=[])
        assert result.succeeded

    def test_to_dict(self):
        """Test dictionary conversion."""
        result = SizeCmpResult(
            query=SizeQuery(path="/var/log", size="10B", operator="eq", threshold=10),
            matches=["a.log", "b"],
            entries=self.entries,
            stats={'files_scanned': 2}
        )
        data = result.to_dict()

        assert data['query']['operator'] == "eq"
        assert data['matches'] == ["a.log", "b"]
        assert data['entries'][1]['kind'] == "symlink"
        assert data['diagnostics'] == []
        assert data['stats'] == {'files_scanned': 2}
