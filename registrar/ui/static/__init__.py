#!/usr/bin/env python3
# registrar/ui/static/__init__.py
from __future__ import annotations
from .logging import (
    init_logger,
    tagged,
    ColorizingStreamHandler,
    PlainFormatter,
    TagAdapter,
)

__all__ = [
    "init_logger",
    "tagged",
    "ColorizingStreamHandler",
    "PlainFormatter",
    "TagAdapter",
]
