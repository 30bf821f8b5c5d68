#!/usr/bin/env python3
# registrar/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .utils import (
    ANSI,
    strip_ansi,
    supports_color,
    colorize,
    PRINT_MUTEX,
    print_line,
)
from .static import (
    init_logger,
    tagged,
    ColorizingStreamHandler,
    PlainFormatter,
    TagAdapter,
)

__all__ = [
    "ANSI",
    "strip_ansi",
    "supports_color",
    "colorize",
    "PRINT_MUTEX",
    "print_line",
    "init_logger",
    "tagged",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "TagAdapter",
]
