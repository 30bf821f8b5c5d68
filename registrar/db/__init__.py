#!/usr/bin/env python3
# registrar/db/__init__.py
from __future__ import annotations

"""
Package for configuration and catalog persistence.

Provides:
- Configuration loader with environment variable overrides (`config`).
- Exportable command catalog with batch or debounced JSON writes (`catalog`).
- Cancellable debounce timer shared by the catalog and the registrar (`debounce`).
"""


from .config import AppConfig, DEFAULTS, load_config
from .debounce import DebouncedTask
from .catalog import BATCH, DEBOUNCED, CommandCatalog

__all__ = [
    "AppConfig",
    "DEFAULTS",
    "load_config",
    "DebouncedTask",
    "BATCH",
    "DEBOUNCED",
    "CommandCatalog",
]
