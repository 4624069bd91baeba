"""
Reversible escaping of terminal lines.

A raw line from `git diff --color` carries real ESC characters. `normalize`
renders those (and every other non-printable character) in their visible
backslash form, so a color sequence reads as the literal text ``\\x1b[32m``
and can be matched and sliced like any other text. `denormalize` is the
exact inverse.
"""

import re

from diffhighlight.errors import MalformedEscapingError

COLOR_ESCAPE = r"\\x1b\[[0-9;]*m"
COLOR_ESCAPE_INTRO = "\\x1b["

COLOR_ESCAPE_RE = re.compile(COLOR_ESCAPE)
LEADING_ESCAPES_RE = re.compile(f"(?:{COLOR_ESCAPE})*")
_ESCAPE_PARAMS = frozenset("0123456789;")

_NAMED_ESCAPES = {
    "\\": "\\\\",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_NAMED_UNESCAPES = {value[1]: key for key, value in _NAMED_ESCAPES.items()}

_HEX_WIDTHS = {"x": 2, "u": 4, "U": 8}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def _escape_char(ch: str) -> str:
    named = _NAMED_ESCAPES.get(ch)
    if named is not None:
        return named
    if ch.isprintable():
        return ch
    code = ord(ch)
    if code < 0x100:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def normalize(raw_line: str) -> str:
    """Render backslashes and non-printable characters in escaped form."""
    return "".join(_escape_char(ch) for ch in raw_line)


def denormalize(token_line: str) -> str:
    """
    Invert `normalize`.

    Raises:
        MalformedEscapingError: the line holds a dangling backslash, an
            unknown escape, or a truncated hex escape.
    """
    if "\\" not in token_line:
        return token_line

    out: list[str] = []
    i = 0
    n = len(token_line)
    while i < n:
        ch = token_line[i]
        if ch != "\\":
            out.append(ch)
            i += 1
            continue

        if i + 1 >= n:
            raise MalformedEscapingError(token_line, f"dangling backslash at {i}")

        kind = token_line[i + 1]
        named = _NAMED_UNESCAPES.get(kind)
        if named is not None:
            out.append(named)
            i += 2
            continue

        width = _HEX_WIDTHS.get(kind)
        if width is None:
            raise MalformedEscapingError(token_line, f"unknown escape \\{kind} at {i}")

        digits = token_line[i + 2:i + 2 + width]
        if len(digits) != width or not _HEX_DIGITS.issuperset(digits):
            raise MalformedEscapingError(token_line, f"truncated \\{kind} escape at {i}")

        code = int(digits, 16)
        if code > 0x10FFFF:
            raise MalformedEscapingError(token_line, f"code point out of range at {i}")
        out.append(chr(code))
        i += 2 + width

    return "".join(out)


def token_width_at(token_line: str, pos: int) -> int:
    """Width of the codec token (plain character or backslash escape) at `pos`."""
    if token_line[pos] != "\\" or pos + 1 >= len(token_line):
        return 1
    return 2 + _HEX_WIDTHS.get(token_line[pos + 1], 0)


def is_token_start(token_line: str, pos: int) -> bool:
    """True when `pos` begins a codec token, i.e. it is not inside a backslash escape."""
    backslashes = 0
    while pos - backslashes > 0 and token_line[pos - backslashes - 1] == "\\":
        backslashes += 1
    return backslashes % 2 == 0


def escape_length_at(token_line: str, pos: int) -> int:
    """Length of the color escape starting exactly at `pos`, or 0."""
    if not token_line.startswith(COLOR_ESCAPE_INTRO, pos):
        return 0
    match = COLOR_ESCAPE_RE.match(token_line, pos)
    if match is None or not is_token_start(token_line, pos):
        return 0
    return match.end() - pos


def escape_length_before(token_line: str, end: int, floor: int = 0) -> int:
    """Length of the color escape ending exactly at `end` (exclusive), or 0.

    The escape must start at or after `floor`. Only the parameters of the
    candidate escape are walked, never the rest of the line.
    """
    if end <= floor or token_line[end - 1] != "m":
        return 0
    start = end - 1
    while start > floor and token_line[start - 1] in _ESCAPE_PARAMS:
        start -= 1
    start -= len(COLOR_ESCAPE_INTRO)
    if start < floor or COLOR_ESCAPE_RE.fullmatch(token_line, start, end) is None:
        return 0
    if not is_token_start(token_line, start):
        return 0
    return end - start


def skip_leading_escapes(token_line: str) -> int:
    """Index of the first character after the leading run of color escapes."""
    return LEADING_ESCAPES_RE.match(token_line).end()
