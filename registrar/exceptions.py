#!/usr/bin/env python3
# registrar/exceptions.py
from __future__ import annotations

"""
Exception types raised by the registrar.

- RegistrarError: common base.
- CommandLoadError: a single command module failed to load, build or
  validate. Always ignorable; the walk logs it and moves on.
- CatalogWriteError: the catalog file could not be written. Fatal.
- ConfigError: a configuration value failed validation.
"""

from pathlib import Path
from typing import Optional


class RegistrarError(Exception):
    """Base class for registrar errors."""


class CommandLoadError(RegistrarError):
    """A command module failed somewhere between import and registration."""

    ignorable = True

    def __init__(self, category: str, path: str, cause: Optional[BaseException] = None) -> None:
        self.category = category
        self.path = path
        self.cause = cause
        detail = f"{type(cause).__name__}: {cause}" if cause is not None else "unknown error"
        super().__init__(f"{category}/{path}: {detail}")


class CatalogWriteError(RegistrarError):
    """Persisting the command catalog failed."""

    def __init__(self, path: Path, cause: Optional[BaseException] = None) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write command catalog at {path}: {cause}")


class ConfigError(RegistrarError, ValueError):
    """Invalid configuration value."""
