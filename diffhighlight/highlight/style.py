import logging
from collections.abc import Callable
from pathlib import Path

import yaml
from colorama import Back, Fore, Style
from pydantic import BaseModel, ConfigDict, ValidationError

from diffhighlight.errors import InvalidStyleError
from diffhighlight.highlight.escape import normalize

logger = logging.getLogger(__name__)

REVERSE_ON = "\x1b[7m"
REVERSE_OFF = "\x1b[27m"


class HighlightStyle(BaseModel):
    """Raw terminal strings wrapped around the differing span of a line."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
    )

    added_start: str = REVERSE_ON
    added_end: str = REVERSE_OFF
    removed_start: str = REVERSE_ON
    removed_end: str = REVERSE_OFF

    @classmethod
    def reverse(cls) -> "HighlightStyle":
        return cls()

    @classmethod
    def color(cls) -> "HighlightStyle":
        return cls(
            added_start=Fore.BLACK + Back.GREEN,
            added_end=Style.RESET_ALL,
            removed_start=Fore.BLACK + Back.RED,
            removed_end=Style.RESET_ALL,
        )

    def added_markers(self) -> tuple[str, str]:
        """Start/end markers for added lines, in token (escaped) form."""
        return normalize(self.added_start), normalize(self.added_end)

    def removed_markers(self) -> tuple[str, str]:
        """Start/end markers for removed lines, in token (escaped) form."""
        return normalize(self.removed_start), normalize(self.removed_end)


STYLE_PRESETS: dict[str, Callable[[], HighlightStyle]] = {
    "reverse": HighlightStyle.reverse,
    "color": HighlightStyle.color,
}


def get_preset(name: str) -> HighlightStyle:
    try:
        factory = STYLE_PRESETS[name]
    except KeyError:
        known = ", ".join(sorted(STYLE_PRESETS))
        raise ValueError(f"Unknown style preset {name!r} (expected one of: {known})")
    return factory()


def load_style(path: Path) -> HighlightStyle:
    """
    Load a highlight style from a YAML file.

    The file may name a `preset` and override any marker field, e.g.:

        preset: color
        added_start: "\\e[30;42m"

    Raises:
        InvalidStyleError: unreadable YAML, unknown preset or unknown fields.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidStyleError(path, e) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise InvalidStyleError(path, TypeError("expected a mapping at top level"))

    data = dict(data)
    preset_name = data.pop("preset", "reverse")
    try:
        base = get_preset(str(preset_name))
    except ValueError as e:
        raise InvalidStyleError(path, e) from e

    try:
        style = HighlightStyle.model_validate({**base.model_dump(), **data})
    except ValidationError as e:
        raise InvalidStyleError(path, e) from e

    logger.debug("Loaded highlight style from %s (preset=%s)", path, preset_name)
    return style
