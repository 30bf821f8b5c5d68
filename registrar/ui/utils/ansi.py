#!/usr/bin/env python3
# registrar/ui/utils/ansi.py
from __future__ import annotations

import os
import re
import sys
from typing import Optional, TextIO

# Only the styles the boot lines and the log handler use.
ANSI = {
    "reset": "\x1b[0m",
    "bold": "\x1b[1m",
    "dim": "\x1b[2m",
    "red": "\x1b[31m",
    "green": "\x1b[32m",
    "yellow": "\x1b[33m",
    "magenta": "\x1b[35m",
    "cyan": "\x1b[36m",
    "bright_black": "\x1b[90m",
}

ANSI_REGEX = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")

_color_cache: dict[int, bool] = {}


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return ANSI_REGEX.sub("", text)


def supports_color(stream: Optional[TextIO] = None) -> bool:
    """
    Return True if ANSI colours should be written to `stream`.

    NO_COLOR always wins; FORCE_COLOR forces colours on. Otherwise the
    stream must be a TTY, and on Windows the terminal must advertise VT
    support (Windows Terminal, ConEmu, ANSICON or an xterm-like TERM).
    """
    stream = stream if stream is not None else sys.stdout
    key = id(stream)
    if key in _color_cache:
        return _color_cache[key]

    if os.environ.get("NO_COLOR"):
        result = False
    elif os.environ.get("FORCE_COLOR"):
        result = True
    elif not getattr(stream, "isatty", lambda: False)():
        result = False
    elif os.name == "nt":
        result = bool(
            os.environ.get("WT_SESSION")
            or os.environ.get("ANSICON")
            or os.environ.get("ConEmuANSI") == "ON"
            or os.environ.get("TERM", "").startswith(("xterm", "vt100"))
        )
    else:
        result = True

    _color_cache[key] = result
    return result


def colorize(text: str, *styles: str) -> str:
    """
    Wrap text with one or more SGR styles from ANSI (e.g. 'red', 'bold').
    Always auto-resets at the end.
    """
    seq = "".join(ANSI[s] for s in styles if s in ANSI)
    return f"{seq}{text}{ANSI['reset']}" if seq else text
