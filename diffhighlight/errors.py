from enum import StrEnum
from pathlib import Path


class HighlightErrorType(StrEnum):
    MALFORMED_ESCAPING = "malformed_escaping"
    INPUT_READ = "input_read"
    OUTPUT_WRITE = "output_write"
    INVALID_STYLE = "invalid_style"


class HighlightError(Exception):
    def __init__(
        self,
        error_type: HighlightErrorType,
        message: str,
        details: dict | None = None
    ):
        super().__init__(message)
        self.error_type = error_type
        self.details = details or {}


class MalformedEscapingError(HighlightError):
    """A token line that cannot be turned back into the original text."""
    def __init__(
        self,
        line: str,
        reason: str,
    ):
        super().__init__(
            HighlightErrorType.MALFORMED_ESCAPING,
            f"Cannot unescape line {line!r}: {reason}",
            details = {
                "line": line,
                "reason": reason,
            }
        )
        self.line = line
        self.reason = reason


class InputReadError(HighlightError):
    """The line source failed mid-stream."""
    def __init__(
        self,
        message: str,
    ):
        super().__init__(
            HighlightErrorType.INPUT_READ,
            message,
        )


class OutputWriteError(HighlightError):
    """The output sink rejected a write. A broken pipe is a normal way to stop."""
    def __init__(
        self,
        message: str,
        broken_pipe: bool = False
    ):
        super().__init__(
            HighlightErrorType.OUTPUT_WRITE,
            message,
            details = {
                "broken_pipe": broken_pipe
            }
        )
        self.broken_pipe = broken_pipe


class InvalidStyleError(HighlightError):
    def __init__(self, path: Path, original_error: Exception):
        super().__init__(
            HighlightErrorType.INVALID_STYLE,
            f"Invalid style file {path}: {original_error}",
            details = {
                "path": str(path),
            }
        )
        self.path = path
        self.original_error = original_error
