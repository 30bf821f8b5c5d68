#!/usr/bin/env python3
# registrar/interface/__init__.py
from __future__ import annotations

"""
Package for command discovery, registration and inspection.

Provides:
- Directory discovery producing trees of pending command modules (`loader`).
- The recursive tree walker that fills the registry table (`walker`).
- The host-facing registrar with full and incremental registration (`registrar`).

The prompt_toolkit inspector lives in `registrar.interface.cli` and is
imported on demand.
"""


# Loader
from .loader import (
    MODULE_NAMESPACE,
    CommandTree,
    DirectoryDiscovery,
    ModuleDiscovery,
    PendingModule,
    handler_class,
    import_file,
)

# Walker
from .walker import WalkStats, walk_tree

# Registrar
from .registrar import COMMANDS_DIR, CommandRegistrar

__all__ = [
    # loader
    "MODULE_NAMESPACE",
    "CommandTree",
    "DirectoryDiscovery",
    "ModuleDiscovery",
    "PendingModule",
    "handler_class",
    "import_file",
    # walker
    "WalkStats",
    "walk_tree",
    # registrar
    "COMMANDS_DIR",
    "CommandRegistrar",
]
