#!/usr/bin/env python3
# registrar/interface/walker.py
from __future__ import annotations

"""
Recursive, sequential registration of a category's command tree.

Mappings are sub-categories: their key plus a space is appended to the
prefix, so ``music/playlist/add.py`` registers as ``playlist add`` in the
``music`` category and lands in the catalog bucket ``children["playlist"]``.
Everything else is a leaf awaited as a module.

Per leaf, in order: import, build ``COMMAND(category, host)`` and check it
provides the command attributes, skip when
disabled, reject a COMMAND_HANDLED command without a ``permission``
callable, insert the qualified name, add the catalog entry (public
commands only), insert the qualified aliases. A leaf that raises is logged
and recorded as a CommandLoadError; the walk carries on with its siblings.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from registrar.commands import (
    COMMAND_HANDLED,
    CommandHandler,
    CommandList,
    handles_own_permission,
    raw_projection,
)
from registrar.db.catalog import CommandCatalog
from registrar.exceptions import CommandLoadError
from registrar.interface.loader import handler_class
from registrar.ui import tagged

Logger = Union[logging.Logger, logging.LoggerAdapter]


@dataclass(slots=True)
class WalkStats:
    """Outcome counters of one or more walks."""
    registered: int = 0
    aliases: int = 0
    disabled: int = 0
    hidden: int = 0
    rejected: int = 0
    failures: list[CommandLoadError] = field(default_factory=list)

    def merge(self, other: "WalkStats") -> "WalkStats":
        self.registered += other.registered
        self.aliases += other.aliases
        self.disabled += other.disabled
        self.hidden += other.hidden
        self.rejected += other.rejected
        self.failures.extend(other.failures)
        return self


async def walk_tree(
    category: str,
    tree: Mapping[str, Any],
    *,
    table: CommandList,
    host: Any,
    catalog: Optional[CommandCatalog] = None,
    prefix: str = "",
    stats: Optional[WalkStats] = None,
    logger: Optional[Logger] = None,
) -> WalkStats:
    """Register every command in `tree` into `table` (and `catalog`)."""
    log = logger if logger is not None else tagged(host.logger, "COMMANDS")
    stats = stats if stats is not None else WalkStats()

    for key, node in tree.items():
        if isinstance(node, Mapping):
            await walk_tree(
                category, node,
                table=table, host=host, catalog=catalog,
                prefix=f"{prefix}{key} ", stats=stats, logger=log,
            )
            continue

        try:
            await _register_leaf(
                category, node,
                table=table, host=host, catalog=catalog,
                prefix=prefix, stats=stats, log=log,
            )
        except Exception as exc:
            error = CommandLoadError(category, f"{prefix}{key}", exc)
            stats.failures.append(error)
            log.warning(
                f"The following command: {prefix}{key}\nGenerated the following error:",
                exc_info=exc,
            )

    return stats


async def _register_leaf(
    category: str,
    pending: Any,
    *,
    table: CommandList,
    host: Any,
    catalog: Optional[CommandCatalog],
    prefix: str,
    stats: WalkStats,
    log: Logger,
) -> None:
    module = await pending
    instance = handler_class(module)(category, host)
    if not isinstance(instance, CommandHandler):
        raise TypeError(
            f"{type(instance).__name__} lacks the command attributes "
            f"(name, aliases, disabled, hidden, category)")

    name = instance.name
    if not isinstance(name, str) or not name:
        raise ValueError(f"Command name must be a non-empty string, got {name!r}")
    qualified = f"{prefix}{name}"

    if instance.disabled:
        log.warning(f"Command disabled: '{qualified}'")
        stats.disabled += 1
        return

    if handles_own_permission(instance) and not callable(getattr(instance, "permission", None)):
        log.error(
            f"Command '{qualified}' has {COMMAND_HANDLED} permission set but doesn't handle these!")
        stats.rejected += 1
        return

    # Everything that can still fail happens before the first insert.
    alias_keys = [f"{prefix}{alias}" for alias in instance.aliases]
    hidden = bool(instance.hidden)
    raw = raw_projection(instance) if catalog is not None and not hidden else None

    _insert(table, qualified, instance, log)
    if raw is not None:
        catalog.append(category, prefix, raw)
    elif hidden:
        log.info(f"Command hidden: '{qualified}'")
    for alias_key in alias_keys:
        _insert(table, alias_key, instance, log)

    stats.registered += 1
    stats.aliases += len(alias_keys)
    stats.hidden += int(hidden)


def _insert(table: CommandList, key: str, instance: CommandHandler, log: Logger) -> None:
    previous = table.get(key)
    if previous is not None and previous is not instance:
        log.debug(f"'{key}' now points to {instance!r} (was {previous!r})")
    table.set(key, instance)
