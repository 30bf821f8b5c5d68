#!/usr/bin/env python3
# registrar/ui/utils/console.py
from __future__ import annotations

import sys
import threading

from .ansi import strip_ansi, supports_color

# Single shared print mutex for boot lines and log records.
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file=None, flush: bool = False) -> None:
    """Thread-safe single-line print; drops colours on non-colour streams."""
    file = file if file is not None else sys.stdout
    if not supports_color(file):
        text = strip_ansi(text)
    with PRINT_MUTEX:
        file.write(f"{text}\n")
        if flush:
            file.flush()
