#!/usr/bin/env python3
# registrar/commands/__init__.py
from __future__ import annotations

"""
Package for command capability and lookup.

Provides:
- The command capability and its base class (`BaseCommand`, `CommandHandler`).
- Permission descriptors (`Permissions`, `PermissionLevel`, `COMMAND_HANDLED`).
- The registry table (`CommandList`).

This package re-exports public APIs from:
- command_types.py
- commands.py
"""


# Re-export from submodules
from .command_types import (
    COMMAND_HANDLED,
    BaseCommand,
    CommandHandler,
    PermissionLevel,
    Permissions,
    handles_own_permission,
    level_type,
    raw_projection,
)
from .commands import CommandList

__all__ = [
    "COMMAND_HANDLED",
    "BaseCommand",
    "CommandHandler",
    "PermissionLevel",
    "Permissions",
    "handles_own_permission",
    "level_type",
    "raw_projection",
    "CommandList",
]
