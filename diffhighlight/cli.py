import logging
import os
import sys
from enum import StrEnum
from importlib import metadata
from pathlib import Path

import typer

from diffhighlight.errors import (
    InputReadError,
    InvalidStyleError,
    MalformedEscapingError,
    OutputWriteError,
)
from diffhighlight.highlight.machine import highlight_lines
from diffhighlight.highlight.style import HighlightStyle, get_preset, load_style
from diffhighlight.logging import get_logger, setup_logging
from diffhighlight.util.lines import read_lines, write_lines

logger = get_logger(__name__)

DIST_NAME = "diff-highlight"

app = typer.Typer(add_completion=False)


class StylePreset(StrEnum):
    REVERSE = "reverse"
    COLOR = "color"


class LogLevel(StrEnum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


def _version_callback(value: bool) -> None:
    if not value:
        return
    try:
        version = metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        version = "unknown"
    typer.echo(f"{DIST_NAME} {version}")
    raise typer.Exit()


def _resolve_style(style: StylePreset, config: Path | None) -> HighlightStyle:
    if config is None:
        return get_preset(style.value)
    try:
        return load_style(config)
    except OSError as exc:
        raise typer.BadParameter(f"Cannot read {config}: {exc}", param_hint="--config")
    except InvalidStyleError as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")


def _silence_stdout() -> None:
    # The reader went away; point stdout at devnull so the interpreter's
    # final flush does not raise again.
    try:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())
    except (OSError, ValueError) as exc:
        logger.debug("Could not redirect stdout to %s: %s", os.devnull, exc)


@app.command()
def main(
    style: StylePreset = typer.Option(
        StylePreset.REVERSE,
        "--style",
        "-s",
        envvar="DIFF_HIGHLIGHT_STYLE",
        help="Highlight decoration preset",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        envvar="DIFF_HIGHLIGHT_CONFIG",
        help="YAML style file (overrides --style)",
    ),
    log_level: LogLevel = typer.Option(
        LogLevel.WARNING,
        "--log-level",
        envvar="DIFF_HIGHLIGHT_LOG_LEVEL",
        case_sensitive=False,
        help="Log level for stderr diagnostics",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """
    Highlight changed characters in a colored unified diff read from stdin.

    Example: git diff --color | diff-highlight
    """
    setup_logging(level=getattr(logging, log_level.value))
    highlight_style = _resolve_style(style, config)

    stdin = typer.get_binary_stream("stdin")
    stdout = typer.get_binary_stream("stdout")

    try:
        write_lines(highlight_lines(read_lines(stdin), highlight_style), stdout)
    except OutputWriteError as exc:
        if exc.broken_pipe:
            logger.debug("Output closed early, stopping")
            _silence_stdout()
            return
        logger.error("%s", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
    except (MalformedEscapingError, InputReadError) as exc:
        logger.error("%s", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=1)
