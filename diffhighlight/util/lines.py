import errno
import logging
from collections.abc import Iterable, Iterator
from typing import BinaryIO

from diffhighlight.errors import InputReadError, OutputWriteError

logger = logging.getLogger(__name__)


def read_lines(stream: BinaryIO, encoding: str = "utf-8") -> Iterator[str]:
    """
    Yield each line of a byte stream without its line terminator.

    Bytes that are not valid in `encoding` survive as surrogates, so
    `write_lines` reproduces them exactly.
    """
    while True:
        try:
            raw = stream.readline()
        except OSError as e:
            raise InputReadError(f"Failed to read input: {e}") from e

        if not raw:
            return

        if raw.endswith(b"\n"):
            raw = raw[:-1]
            if raw.endswith(b"\r"):
                raw = raw[:-1]
        yield raw.decode(encoding, errors="surrogateescape")


def write_lines(
    lines: Iterable[str],
    stream: BinaryIO,
    encoding: str = "utf-8",
) -> int:
    """
    Write each line followed by a newline, flushing as it goes.

    Returns:
        Number of lines written.
    """
    written = 0
    for line in lines:
        try:
            stream.write(line.encode(encoding, errors="surrogateescape") + b"\n")
            stream.flush()
        except BrokenPipeError as e:
            raise OutputWriteError("Output closed", broken_pipe=True) from e
        except OSError as e:
            broken = e.errno == errno.EPIPE
            raise OutputWriteError(f"Failed to write output: {e}", broken_pipe=broken) from e
        written += 1

    logger.debug("Wrote %d lines", written)
    return written
