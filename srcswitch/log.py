"""Prompted and bracketed log lines for command-line output."""

from __future__ import annotations

import sys
from enum import Enum
from typing import TextIO

from . import text


class Level(Enum):
    """Severity of a log line; warnings and errors go to stderr."""

    PLAIN = "plain"
    SUCCESS = "success"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

    @property
    def to_stderr(self) -> bool:
        return self in (Level.WARN, Level.ERROR)


_COLORS = {
    Level.SUCCESS: text.green,
    Level.INFO: text.blue,
    Level.WARN: text.yellow,
    Level.ERROR: text.red,
}


def _stream_for(level: Level) -> TextIO:
    return sys.stderr if level.to_stderr else sys.stdout


def log(level: Level, prompt: str, content: str) -> None:
    """Print ``prompt: content``, colouring the content by ``level``."""
    level = Level(level)
    color = _COLORS.get(level)
    body = color(content) if color else content
    print(f"{prompt}: {body}", file=_stream_for(level))


def log_bracket_to(prompt: str, content: str, stream: TextIO) -> None:
    """Write ``[prompt] content`` to ``stream`` without any styling."""
    stream.write(f"[{prompt}] {content}\n")


def log_bracket(level: Level, prompt1: str, prompt2: str, content: str) -> None:
    """Print ``[prompt1 prompt2] content``, styled by ``level``."""
    level = Level(level)
    color = _COLORS.get(level)
    if color is None:
        line = f"[{prompt1} {prompt2}] {content}"
    else:
        line = (
            f"[{color(prompt1)} {text.bold(color(prompt2))}] {color(content)}"
        )
    print(line, file=_stream_for(level))