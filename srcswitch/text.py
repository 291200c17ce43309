"""String helpers: terminal styling and small text operations."""

from __future__ import annotations

import sys
from enum import IntEnum

_WHITESPACE = "\n\r\v\t\f "


class Style(IntEnum):
    """ANSI SGR codes used to decorate terminal output."""

    BOLD = 1
    FAINT = 2
    ITALIC = 3
    UNDERLINE = 4
    BLINK = 5
    CROSS = 9
    RED = 31
    GREEN = 32
    YELLOW = 33
    BLUE = 34
    MAGENTA = 35
    CYAN = 36


class _ColorSetting:
    enabled: bool = True


_color = _ColorSetting()


def set_color_enabled(enabled: bool) -> None:
    """Turn terminal styling on or off for every styling function."""
    _color.enabled = bool(enabled)


def stylize(text: str, style: Style) -> str:
    """Wrap ``text`` in the escape sequence for ``style`` when colour is enabled."""
    if not _color.enabled:
        return text
    return f"\033[{int(Style(style))}m{text}\033[0m"


def bold(text: str) -> str:
    return stylize(text, Style.BOLD)


def faint(text: str) -> str:
    return stylize(text, Style.FAINT)


def italic(text: str) -> str:
    return stylize(text, Style.ITALIC)


def underline(text: str) -> str:
    return stylize(text, Style.UNDERLINE)


def blink(text: str) -> str:
    return stylize(text, Style.BLINK)


def cross(text: str) -> str:
    return stylize(text, Style.CROSS)


def red(text: str) -> str:
    return stylize(text, Style.RED)


def green(text: str) -> str:
    return stylize(text, Style.GREEN)


def yellow(text: str) -> str:
    return stylize(text, Style.YELLOW)


def blue(text: str) -> str:
    return stylize(text, Style.BLUE)


def magenta(text: str) -> str:
    return stylize(text, Style.MAGENTA)


def cyan(text: str) -> str:
    return stylize(text, Style.CYAN)


def gsub(text: str, pattern: str, replacement: str) -> str:
    """Replace every occurrence of ``pattern`` in ``text`` with ``replacement``."""
    if not pattern:
        raise ValueError("pattern must not be empty")
    return text.replace(pattern, replacement)


def starts_with(text: str | None, prefix: str | None) -> bool:
    """True if ``text`` begins with ``prefix``; False when either is None."""
    if text is None or prefix is None:
        return False
    return text.startswith(prefix)


def ends_with(text: str, suffix: str) -> bool:
    """True if ``text`` ends with ``suffix``; an empty suffix always matches."""
    return text.endswith(suffix)


def delete_prefix(text: str, prefix: str) -> str:
    """Return ``text`` without ``prefix`` if it starts with it, else unchanged."""
    if starts_with(text, prefix):
        return text[len(prefix):]
    return text


def delete_suffix(text: str, suffix: str) -> str:
    """Return ``text`` without ``suffix`` if it ends with it, else unchanged."""
    if suffix and ends_with(text, suffix):
        return text[: len(text) - len(suffix)]
    return text


def strip(text: str) -> str:
    """Remove leading and trailing newlines, tabs, form feeds and spaces."""
    return text.strip(_WHITESPACE)


def quiet_command(command: str) -> str:
    """Append redirections that silence both output streams of ``command``."""
    if sys.platform.startswith("win"):
        return command + " >nul 2>nul "
    return command + " 1>/dev/null 2>&1 "