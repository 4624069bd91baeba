from diffhighlight.highlight.escape import (
    denormalize,
    escape_length_at,
    escape_length_before,
    normalize,
    skip_leading_escapes,
)
from diffhighlight.highlight.classify import (
    is_added_line,
    is_hunk_continuation,
    is_hunk_header,
    is_removed_line,
)
from diffhighlight.highlight.machine import (
    HunkBuffer,
    HunkStateMachine,
    highlight_lines,
)
from diffhighlight.highlight.pairing import (
    HighlightSpan,
    find_span,
    flush_hunk,
    highlight_pair,
)
from diffhighlight.highlight.style import (
    STYLE_PRESETS,
    HighlightStyle,
    get_preset,
    load_style,
)

__all__ = [
    "normalize",
    "denormalize",
    "escape_length_at",
    "escape_length_before",
    "skip_leading_escapes",
    "is_hunk_header",
    "is_removed_line",
    "is_added_line",
    "is_hunk_continuation",
    "HunkBuffer",
    "HunkStateMachine",
    "highlight_lines",
    "HighlightSpan",
    "find_span",
    "flush_hunk",
    "highlight_pair",
    "STYLE_PRESETS",
    "HighlightStyle",
    "get_preset",
    "load_style",
]
