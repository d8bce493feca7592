"""ANSI styling for CLI output; honours NO_COLOR, TERM=dumb and non-tty stdout."""

from __future__ import annotations

import os
import sys

_CODES = {"bold": 1, "dim": 2, "red": 31, "green": 32, "yellow": 33, "cyan": 36}

_COLOR: bool | None = None


def supports_color() -> bool:
    global _COLOR
    if _COLOR is None:
        _COLOR = not (
            os.environ.get("NO_COLOR", "") != ""
            or os.environ.get("TERM", "") == "dumb"
            or not getattr(sys.stdout, "isatty", lambda: False)()
        )
    return _COLOR


def force_color(enabled: bool | None) -> None:
    """Pin colour on or off; ``None`` goes back to detecting it."""
    global _COLOR
    _COLOR = enabled


def style(text: str, *names: str) -> str:
    if not names or not supports_color():
        return text
    seq = ";".join(str(_CODES[n]) for n in names)
    return f"\033[{seq}m{text}\033[0m"


def green(text: str) -> str:
    return style(text, "green")


def red(text: str) -> str:
    return style(text, "red")


def yellow(text: str) -> str:
    return style(text, "yellow")


def dim(text: str) -> str:
    return style(text, "dim")


def bold(text: str) -> str:
    return style(text, "bold")
