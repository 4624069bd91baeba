import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from diffhighlight.highlight.classify import (
    is_added_line,
    is_hunk_continuation,
    is_hunk_header,
    is_removed_line,
)
from diffhighlight.highlight.escape import denormalize, normalize
from diffhighlight.highlight.pairing import flush_hunk
from diffhighlight.highlight.style import HighlightStyle

logger = logging.getLogger(__name__)


@dataclass
class HunkBuffer:
    in_hunk: bool = False
    added: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.added and not self.removed

    def clear(self) -> None:
        self.added = []
        self.removed = []


class HunkStateMachine:
    """
    Buffers the removed/added lines of the current hunk and flushes them
    through the pairwise highlighter at every hunk boundary.

    Works on token lines (see `diffhighlight.highlight.escape.normalize`).
    """

    def __init__(self, style: HighlightStyle | None = None):
        self.style = style or HighlightStyle.reverse()
        self.buffer = HunkBuffer()
        self.flushes = 0

    @property
    def in_hunk(self) -> bool:
        return self.buffer.in_hunk

    def feed(self, token_line: str) -> list[str]:
        """Consume one line and return the token lines to emit now, in order."""
        buf = self.buffer
        if not buf.in_hunk:
            buf.in_hunk = is_hunk_header(token_line)
            return [token_line]

        if is_removed_line(token_line):
            buf.removed.append(token_line)
            return []

        if is_added_line(token_line):
            buf.added.append(token_line)
            return []

        out = self._flush()
        out.append(token_line)
        buf.in_hunk = is_hunk_continuation(token_line)
        return out

    def finish(self) -> list[str]:
        """End of input: flush whatever the last hunk still holds."""
        out = self._flush() if not self.buffer.is_empty() else []
        self.buffer.in_hunk = False
        return out

    def _flush(self) -> list[str]:
        buf = self.buffer
        out = flush_hunk(buf.added, buf.removed, self.style)
        if not buf.is_empty():
            self.flushes += 1
        buf.clear()
        return out


def highlight_lines(
    lines: Iterable[str],
    style: HighlightStyle | None = None,
) -> Iterator[str]:
    """
    Highlight a stream of raw diff lines, yielding output lines lazily.

    An exception raised by `lines` propagates as is, and the buffered hunk
    is not flushed in that case.
    """
    machine = HunkStateMachine(style)
    count = 0
    for raw_line in lines:
        count += 1
        for token_line in machine.feed(normalize(raw_line)):
            yield denormalize(token_line)

    for token_line in machine.finish():
        yield denormalize(token_line)

    logger.info("Processed %d lines, %d hunks flushed", count, machine.flushes)
