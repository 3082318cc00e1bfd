"""
Test cases for notification message formatting.
"""

import pytest

from monitor.formatting import format_version_message, truncate_message
from monitor.models import VersionEntry


class TestFormatVersionMessage:
    """Test cases for format_version_message."""

    def test_format_message(self):
        """Test header, blank line, then body."""
        entry = VersionEntry(version="2.1.0", content="- Fixed things")

        assert format_version_message(entry) == "📦 Claude Code v2.1.0\n\n- Fixed things"

    def test_format_custom_product(self):
        """Test a custom product name in the header."""
        entry = VersionEntry(version="0.9", content="")

        assert format_version_message(entry, "Widget") == "📦 Widget v0.9\n\n"


class TestTruncateMessage:
    """Test cases for truncate_message."""

    def test_short_message_unchanged(self):
        """Test that messages within the limit are returned as is."""
        assert truncate_message("hello", 10) == "hello"
        assert truncate_message("hello", 5) == "hello"

    def test_long_message_gets_ellipsis(self):
        """Test truncation appends an ellipsis line."""
        result = truncate_message("abcdefghij", 8)

        assert result == "abcd\n..."
        assert len(result) == 8

    @pytest.mark.parametrize("length", [0, 1, 3, 4, 5, 100, 2000, 4096])
    def test_result_never_exceeds_limit(self, length):
        """Test the length bound for a range of limits."""
        message = "x" * 5000

        assert len(truncate_message(message, length)) <= length

    def test_tiny_limit(self):
        """Test limits smaller than the ellipsis suffix."""
        assert truncate_message("abcdef", 3) == "abc"
        assert truncate_message("abcdef", 0) == ""
