import errno
import io

import pytest

from diffhighlight.errors import InputReadError, OutputWriteError
from diffhighlight.util.lines import read_lines, write_lines


class _FailingReader(io.BytesIO):
    def readline(self, size=-1):
        line = super().readline(size)
        if not line:
            raise OSError(errno.EIO, "I/O error")
        return line


class _ClosedPipe(io.BytesIO):
    def write(self, data):
        raise BrokenPipeError(errno.EPIPE, "Broken pipe")


class _FullDisk(io.BytesIO):
    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")


def test_read_lines_strips_terminators() -> None:
    stream = io.BytesIO(b"one\ntwo\r\nthree")

    assert list(read_lines(stream)) == ["one", "two", "three"]


def test_read_lines_keeps_blank_lines() -> None:
    assert list(read_lines(io.BytesIO(b"a\n\nb\n"))) == ["a", "", "b"]


def test_invalid_utf8_round_trips() -> None:
    data = b"caf\xe9 \x1b[31m-x\x1b[m\n"
    out = io.BytesIO()

    write_lines(read_lines(io.BytesIO(data)), out)

    assert out.getvalue() == data


def test_read_error_is_wrapped() -> None:
    lines = read_lines(_FailingReader(b"ok\n"))

    assert next(lines) == "ok"
    with pytest.raises(InputReadError):
        next(lines)


def test_write_lines_counts_lines() -> None:
    out = io.BytesIO()

    assert write_lines(["a", "b"], out) == 2
    assert out.getvalue() == b"a\nb\n"


def test_broken_pipe_is_flagged() -> None:
    with pytest.raises(OutputWriteError) as exc_info:
        write_lines(["a"], _ClosedPipe())

    assert exc_info.value.broken_pipe is True


def test_other_write_errors_are_not_broken_pipe() -> None:
    with pytest.raises(OutputWriteError) as exc_info:
        write_lines(["a"], _FullDisk())

    assert exc_info.value.broken_pipe is False
    assert exc_info.value.error_type == "output_write"
