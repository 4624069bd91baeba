"""Line classification for colored unified diffs.

Every check looks at the first character after the leading run of color
escapes, so all of them agree on what "leading" means.
"""

from diffhighlight.highlight.escape import skip_leading_escapes

HUNK_MARKER = "@@"
REMOVED_MARKER = "-"
ADDED_MARKER = "+"
CONTINUATION_MARKERS = frozenset("@ ")


def _content(token_line: str) -> str:
    return token_line[skip_leading_escapes(token_line):]


def is_hunk_header(token_line: str) -> bool:
    return _content(token_line).startswith(HUNK_MARKER)


def is_removed_line(token_line: str) -> bool:
    return _content(token_line).startswith(REMOVED_MARKER)


def is_added_line(token_line: str) -> bool:
    return _content(token_line).startswith(ADDED_MARKER)


def is_hunk_continuation(token_line: str) -> bool:
    """A line after which the hunk is still open: a header or a context line."""
    return _content(token_line)[:1] in CONTINUATION_MARKERS
