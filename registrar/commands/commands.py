#!/usr/bin/env python3
# registrar/commands/commands.py
from __future__ import annotations

"""
Registry table: invocation string -> command instance.

One instance is reachable through several keys (its qualified name and each
qualified alias). The first key inserted for an instance is its primary key
and counts as one registered command; every further key for the same
instance is an alias. Inserting under an existing key replaces the previous
mapping (last writer wins).
"""

from typing import Iterator, Optional

from registrar.commands.command_types import CommandHandler


class CommandList:
    """Ordered lookup table of commands and aliases."""

    def __init__(self) -> None:
        # Key (primary or alias) -> instance
        self._commands: dict[str, CommandHandler] = {}
        # id(instance) -> (primary key, instance); holds a reference so ids stay unique
        self._primaries: dict[int, tuple[str, CommandHandler]] = {}
        # Category -> primary keys, in registration order
        self._categories: dict[str, list[str]] = {}

    # ---------------- Registration ----------------

    def set(self, key: str, instance: CommandHandler) -> None:
        """Map `key` to `instance`, recording it as primary on first sight."""
        if id(instance) not in self._primaries:
            self._primaries[id(instance)] = (key, instance)
            category = getattr(instance, "category", "general")
            self._categories.setdefault(category, []).append(key)
        self._commands[key] = instance

    __setitem__ = set

    # ---------------- Lookup ----------------

    def get(self, key: str) -> Optional[CommandHandler]:
        """Return the command for a name or alias, or None if not found."""
        return self._commands.get(key)

    def __getitem__(self, key: str) -> CommandHandler:
        return self._commands[key]

    def __contains__(self, key: object) -> bool:
        return key in self._commands

    def __len__(self) -> int:
        return len(self._commands)

    def __iter__(self) -> Iterator[str]:
        return iter(self._commands)

    def items(self) -> list[tuple[str, CommandHandler]]:
        return list(self._commands.items())

    def names(self) -> list[str]:
        """All keys, primary names and aliases, in insertion order."""
        return list(self._commands)

    def all(self) -> list[CommandHandler]:
        """Unique instances in registration order (no alias duplicates)."""
        return [instance for _, instance in self._primaries.values()]

    def is_primary(self, key: str) -> bool:
        instance = self._commands.get(key)
        if instance is None:
            return False
        return self._primaries[id(instance)][0] == key

    def primary_key(self, instance: CommandHandler) -> Optional[str]:
        entry = self._primaries.get(id(instance))
        return entry[0] if entry else None

    # ---------------- Counts ----------------

    @property
    def size(self) -> int:
        return len(self._commands)

    @property
    def registered(self) -> int:
        """Number of unique commands (first key per instance)."""
        return len(self._primaries)

    @property
    def aliases(self) -> int:
        return self.size - self.registered

    # ---------------- Categories ----------------

    def commands_in_category(self, category: str) -> list[str]:
        """Primary keys registered under `category`."""
        return list(self._categories.get(category, []))

    def categories(self) -> dict[str, list[CommandHandler]]:
        """Group unique instances by category."""
        return {
            category: [self._commands.get(key) for key in keys if key in self._commands]
            for category, keys in self._categories.items()
        }
