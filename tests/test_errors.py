"""Tests for safe_merge.errors module."""

import stat

from safe_merge.errors import (
    ContentMismatchError,
    InvalidActionError,
    NonRegularFileError,
    SafeMergeError,
)


class TestContentMismatchError:
    """Tests for ContentMismatchError."""

    def test_attributes(self):
        error = ContentMismatchError("/src/b.txt", "/dst/b.txt", "abc123", "def456")

        assert isinstance(error, SafeMergeError)
        assert error.source == "/src/b.txt"
        assert error.destination == "/dst/b.txt"
        assert error.source_hash == "abc123"
        assert error.destination_hash == "def456"
        assert error.details["destination_hash"] == "def456"

    def test_message_names_both_files(self):
        message = str(ContentMismatchError("/src/b.txt", "/dst/b.txt", "abc123", "def456"))

        assert "/src/b.txt" in message
        assert "/dst/b.txt" in message


class TestNonRegularFileError:
    """Tests for NonRegularFileError."""

    def test_attributes(self):
        mode = stat.S_IFDIR | 0o755
        error = NonRegularFileError("/src/dir", "source", mode)

        assert isinstance(error, SafeMergeError)
        assert error.path == "/src/dir"
        assert error.role == "source"
        assert error.mode == mode
        assert str(error) == "non-regular source file /src/dir (mode 40755)"


class TestInvalidActionError:
    """Tests for InvalidActionError."""

    def test_attributes(self):
        error = InvalidActionError("bogus")

        assert isinstance(error, SafeMergeError)
        assert error.action == "bogus"
        assert "bogus" in str(error)

    def test_default_details(self):
        assert SafeMergeError("boom").details == {}
