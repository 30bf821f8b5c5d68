#!/usr/bin/env python3
# registrar/interface/loader.py
from __future__ import annotations

"""
Dynamic command discovery.

Features:
- Walks a directory into a nested mapping: sub-directories become nested
  mappings, ``*.py`` files become PendingModule leaves keyed by file stem.
- PendingModule is awaitable; awaiting it imports the file in a worker
  thread so a slow module suspends only the walk that awaits it.
- Every load executes the file afresh (no module cache between passes).
- Private entries ('_*', '.*') and __pycache__ are ignored.
- A module sharing its stem with a sibling directory (parent command next
  to its sub-commands) is keyed by its file name so both are kept.
"""

import asyncio
import importlib.util
import re
import sys
from pathlib import Path
from types import ModuleType
from typing import Any, Awaitable, Generator, Protocol, Union

# Parent name for dynamically imported command modules in sys.modules
MODULE_NAMESPACE = "registrar_commands"

CommandTree = dict[str, Union["CommandTree", Awaitable[ModuleType]]]


def _module_token(part: str) -> str:
    token = re.sub(r"\W", "_", part)
    return f"_{token}" if token[:1].isdigit() else token


def import_file(path: Path, module_name: str) -> ModuleType:
    """Execute `path` as a fresh module registered under `module_name`."""
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load command module from {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException:
        sys.modules.pop(module_name, None)
        raise
    return module


def handler_class(module: ModuleType) -> Any:
    """Return the command class a module exports as COMMAND."""
    obj = getattr(module, "COMMAND", None)
    if obj is None:
        raise LookupError(
            f"Module '{module.__name__}' does not export a COMMAND class")
    if not callable(obj):
        raise TypeError(
            f"COMMAND in '{module.__name__}' is not a class: {obj!r}")
    return obj


class PendingModule:
    """Awaitable reference to a command module that has not been imported yet."""

    __slots__ = ("path", "module_name")

    def __init__(self, path: Path, module_name: str) -> None:
        self.path = path
        self.module_name = module_name

    async def load(self) -> ModuleType:
        return await asyncio.to_thread(import_file, self.path, self.module_name)

    def __await__(self) -> Generator[Any, None, ModuleType]:
        return self.load().__await__()

    def __repr__(self) -> str:
        return f"PendingModule({str(self.path)!r})"


class ModuleDiscovery(Protocol):
    """Turns a directory into a tree of pending command modules."""

    def discover(self, root: Path) -> CommandTree:  # pragma: no cover - signature only
        ...


class DirectoryDiscovery:
    """
    Filesystem-backed ModuleDiscovery.

    Entries are visited in name order so the tree (and therefore the
    registration order) is the same on every platform.
    """

    def __init__(self, namespace: str = MODULE_NAMESPACE) -> None:
        self.namespace = namespace

    def discover(self, root: Path) -> CommandTree:
        root = Path(root)
        if not root.is_dir():
            raise FileNotFoundError(f"Command directory not found: {root}")
        return self._scan(root, (self.namespace, _module_token(root.name)))

    def _scan(self, directory: Path, dotted: tuple[str, ...]) -> CommandTree:
        tree: CommandTree = {}
        for entry in sorted(directory.iterdir(), key=lambda p: p.name):
            if entry.name.startswith(("_", ".")):
                continue
            if entry.is_dir():
                tree[entry.name] = self._scan(
                    entry, dotted + (_module_token(entry.name),))
            elif entry.is_file() and entry.suffix == ".py":
                # playlist.py beside playlist/: the directory keeps the key
                key = entry.name if entry.stem in tree else entry.stem
                module_name = ".".join(dotted + (_module_token(key),))
                tree[key] = PendingModule(entry, module_name)
        return tree
