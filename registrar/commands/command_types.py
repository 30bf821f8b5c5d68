#!/usr/bin/env python3
# registrar/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- PermissionLevel / Permissions: declarative permission descriptors.
- CommandHandler: the capability every registered command exposes.
- BaseCommand: a ready-made CommandHandler that command modules subclass.
- COMMAND_HANDLED: level type for commands that check access themselves.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Protocol, Sequence, runtime_checkable

# A command with exactly one level of this type must define `permission`.
COMMAND_HANDLED = "COMMAND_HANDLED"


@dataclass(slots=True, frozen=True)
class PermissionLevel:
    """
    One permission requirement.

    Attributes:
        type: Kind of check, e.g. 'SERVER_ADMIN', 'ROLE' or COMMAND_HANDLED.
        name: Optional subject of the check (role name, permission flag).
    """
    type: str
    name: str | None = None


@dataclass(slots=True)
class Permissions:
    levels: list[PermissionLevel] = field(default_factory=list)

    @classmethod
    def of(cls, *types: str) -> "Permissions":
        return cls([PermissionLevel(t) for t in types])


@runtime_checkable
class CommandHandler(Protocol):
    """What the registrar reads from a command instance."""

    name: str
    aliases: Sequence[str]
    disabled: bool
    hidden: bool
    category: str


def level_type(level: Any) -> str | None:
    """Read `type` from a level given as an object or as a mapping."""
    if isinstance(level, Mapping):
        return level.get("type")
    return getattr(level, "type", None)


def permission_levels(handler: Any) -> list[Any]:
    permissions = getattr(handler, "permissions", None)
    if not permissions:
        return []
    if isinstance(permissions, Mapping):
        levels = permissions.get("levels")
    else:
        levels = getattr(permissions, "levels", None)
    return list(levels or [])


def handles_own_permission(handler: Any) -> bool:
    """True when exactly one permission level is COMMAND_HANDLED."""
    matches = [lv for lv in permission_levels(handler)
               if level_type(lv) == COMMAND_HANDLED]
    return len(matches) == 1


def raw_projection(handler: Any) -> Any:
    """The serializable catalog entry of a handler (`raw_data`, else `raw`)."""
    raw = getattr(handler, "raw_data", None)
    if raw is None:
        raw = getattr(handler, "raw", None)
    if raw is None:
        raise AttributeError(
            f"Command '{getattr(handler, 'name', '?')}' exposes no raw_data")
    return raw


class BaseCommand:
    """
    Base class for command modules.

    Subclasses set metadata as class attributes and export themselves as
    ``COMMAND = MyCommand``. Instances are built by the registrar with
    ``(category, host)``.

    To check access yourself, declare ``Permissions.of(COMMAND_HANDLED)``
    and define a ``permission(self, *args)`` method; otherwise the command
    is rejected at registration.
    """

    name: str = ""
    aliases: Sequence[str] = ()
    description: str = ""
    usage: str = ""
    disabled: bool = False
    hidden: bool = False
    permissions: Optional[Permissions] = None

    def __init__(self, category: str, host: Any) -> None:
        if not self.name:
            raise ValueError(f"{type(self).__name__} does not define a name")
        self.category = category
        self.host = host
        # per-instance copy so a command can't mutate its class defaults
        self.aliases = list(type(self).aliases)

    @property
    def raw_data(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "aliases": list(self.aliases),
            "description": self.description,
            "usage": self.usage,
            "category": self.category,
            "permissions": [level_type(lv) for lv in permission_levels(self)],
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.category}/{self.name}>"
