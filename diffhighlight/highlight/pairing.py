import logging
from dataclasses import dataclass

from diffhighlight.highlight.escape import (
    escape_length_at,
    escape_length_before,
    token_width_at,
)
from diffhighlight.highlight.style import HighlightStyle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightSpan:
    """Inclusive range [prefix, suffix] of a token line that differs."""

    prefix: int
    suffix: int

    @property
    def is_empty(self) -> bool:
        return self.suffix < self.prefix


def _common_prefix(added: str, removed: str) -> tuple[int, int]:
    added_pos, removed_pos = 0, 0
    seen_sign = False
    while added_pos < len(added) and removed_pos < len(removed):
        added_skip = escape_length_at(added, added_pos)
        removed_skip = escape_length_at(removed, removed_pos)
        if added_skip:
            added_pos += added_skip
        elif removed_skip:
            removed_pos += removed_skip
        elif added[added_pos] == removed[removed_pos]:
            added_pos += 1
            removed_pos += 1
        elif not seen_sign and removed[removed_pos] == "-" and added[added_pos] == "+":
            seen_sign = True
            added_pos += 1
            removed_pos += 1
        else:
            break
    return added_pos, removed_pos


def _common_suffix(
    added: str,
    removed: str,
    added_floor: int,
    removed_floor: int,
) -> tuple[int, int]:
    # Cursors point at the last character still considered; they never move
    # below the prefix boundary.
    added_pos, removed_pos = len(added) - 1, len(removed) - 1
    while added_pos >= added_floor and removed_pos >= removed_floor:
        added_skip = escape_length_before(added, added_pos + 1, added_floor)
        removed_skip = escape_length_before(removed, removed_pos + 1, removed_floor)
        if added_skip:
            added_pos -= added_skip
        elif removed_skip:
            removed_pos -= removed_skip
        elif added[added_pos] == removed[removed_pos]:
            added_pos -= 1
            removed_pos -= 1
        else:
            break
    return added_pos, removed_pos


def _snap_to_tokens(line: str, span: HighlightSpan) -> HighlightSpan:
    # Widen the span so it never splits a backslash escape of the codec.
    if span.is_empty:
        return span
    prefix, suffix = span.prefix, span.suffix
    pos = 0
    while pos <= span.suffix:
        width = token_width_at(line, pos)
        if pos <= span.prefix < pos + width:
            prefix = pos
        if pos <= span.suffix < pos + width:
            suffix = min(pos + width, len(line)) - 1
        pos += width
    return HighlightSpan(prefix, suffix)


def find_span(added: str, removed: str) -> tuple[HighlightSpan, HighlightSpan]:
    """
    Locate the differing region of an added/removed token line pair.

    Color escapes are transparent to the comparison, and the leading `-`/`+`
    signs compare equal once.

    Returns:
        (added_span, removed_span)
    """
    added_prefix, removed_prefix = _common_prefix(added, removed)
    added_suffix, removed_suffix = _common_suffix(
        added, removed, added_prefix, removed_prefix
    )
    return (
        _snap_to_tokens(added, HighlightSpan(added_prefix, added_suffix)),
        _snap_to_tokens(removed, HighlightSpan(removed_prefix, removed_suffix)),
    )


def apply_span(line: str, span: HighlightSpan, start: str, end: str) -> str:
    if span.is_empty:
        return line
    return "".join(
        [
            line[:span.prefix],
            start,
            line[span.prefix:span.suffix + 1],
            end,
            line[span.suffix + 1:],
        ]
    )


def highlight_pair(added: str, removed: str, style: HighlightStyle) -> tuple[str, str]:
    added_span, removed_span = find_span(added, removed)
    return (
        apply_span(added, added_span, *style.added_markers()),
        apply_span(removed, removed_span, *style.removed_markers()),
    )


def flush_hunk(
    added: list[str],
    removed: list[str],
    style: HighlightStyle,
) -> list[str]:
    """
    Emit one hunk's buffered lines: every removed line, then every added line.

    Lines are only highlighted when the counts match, pairing by index.
    """
    if not added or not removed:
        return [*removed, *added]

    if len(added) != len(removed):
        logger.debug(
            "Skipping highlight for hunk with %d removed / %d added lines",
            len(removed),
            len(added),
        )
        return [*removed, *added]

    highlighted_added: list[str] = []
    highlighted_removed: list[str] = []
    for added_line, removed_line in zip(added, removed):
        a, r = highlight_pair(added_line, removed_line, style)
        highlighted_added.append(a)
        highlighted_removed.append(r)

    logger.debug("Highlighted %d line pairs", len(added))
    return highlighted_removed + highlighted_added
