"""Unit tests for the error hierarchy."""

from pathlib import Path

import pytest

from diffhighlight.errors import (
    HighlightError,
    HighlightErrorType,
    InputReadError,
    InvalidStyleError,
    MalformedEscapingError,
    OutputWriteError,
)


class TestMalformedEscapingError:
    def test_message_includes_line_and_reason(self):
        error = MalformedEscapingError("abc\\", "dangling backslash at 3")

        assert "abc" in str(error)
        assert "dangling backslash" in str(error)
        assert error.error_type == HighlightErrorType.MALFORMED_ESCAPING

    def test_is_highlight_error(self):
        with pytest.raises(HighlightError):
            raise MalformedEscapingError("x", "y")


class TestOutputWriteError:
    def test_broken_pipe_defaults_false(self):
        error = OutputWriteError("disk full")
        assert error.broken_pipe is False
        assert error.details == {"broken_pipe": False}

    def test_broken_pipe_flag(self):
        assert OutputWriteError("closed", broken_pipe=True).broken_pipe is True


class TestOtherErrors:
    def test_input_read_error_type(self):
        assert InputReadError("boom").error_type == "input_read"

    def test_invalid_style_error_names_file(self):
        error = InvalidStyleError(Path("/etc/style.yaml"), ValueError("bad field"))

        assert "style.yaml" in str(error)
        assert "bad field" in str(error)
        assert error.details["path"] == "/etc/style.yaml"
