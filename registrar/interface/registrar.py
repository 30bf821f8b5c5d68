#!/usr/bin/env python3
# registrar/interface/registrar.py
from __future__ import annotations

"""
Command registrar: the host-facing entry points.

- setup(): full pass over <root>/<COMMANDS_PATH>. Builds a fresh table
  off to the side and swaps it in when every category is walked, so
  lookups keep resolving against the previous table during a rebuild.
- register_external(group, location): walks <location>/commands into the
  live table (merge, no reset). A burst of calls yields one
  'fully_registered' event, READY_DEBOUNCE_MS after the last call.

Known gaps:
- Keys are not checked for conflicts; the last registration wins.
- External registrations that complete while setup() is running land in
  the table that setup() is about to replace, and are lost at the swap.
"""

from pathlib import Path
from typing import Any, Mapping, Optional, Union

from registrar.commands import CommandList
from registrar.db import BATCH, CommandCatalog, DebouncedTask
from registrar.host import Host
from registrar.interface.loader import DirectoryDiscovery, ModuleDiscovery
from registrar.interface.walker import WalkStats, walk_tree
from registrar.ui import tagged

# Directory inside a category (or external module) that holds its tree
COMMANDS_DIR = "commands"


class CommandRegistrar:
    """Builds and serves the command lookup table for a host."""

    def __init__(self, host: Host, *, discovery: Optional[ModuleDiscovery] = None) -> None:
        self.host = host
        self.config = host.config
        self.log = tagged(host.logger, "COMMANDS")
        self.discovery: ModuleDiscovery = discovery if discovery is not None else DirectoryDiscovery()

        self.commands = CommandList()
        self.catalog: Optional[CommandCatalog] = None
        self.stats: dict[str, WalkStats] = {}

        self._fully_registered = DebouncedTask(
            self.config.ready_debounce_ms / 1000,
            self._emit_fully_registered,
            name="fully_registered",
        )
        host.registrar = self

    # ---------------- Lookup ----------------

    def get(self, name: str) -> Optional[Any]:
        return self.commands.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.commands

    # ---------------- Full initialization ----------------

    async def setup(self) -> bool:
        categories = self._category_trees()

        table = CommandList()
        catalog = self._new_catalog()
        stats: dict[str, WalkStats] = {}

        for category, tree in categories.items():
            if catalog is not None:
                catalog.add_category(category)
            stats[category] = await walk_tree(
                category, tree,
                table=table, host=self.host, catalog=catalog, logger=self.log,
            )

        if self.catalog is not None:
            # a stale debounced write must not land after the new one
            self.catalog.clear()
        self.commands = table
        self.catalog = catalog
        self.stats = stats

        self.log.info(
            f"Mapping of commands done with {table.registered} unique commands registered, "
            f"{table.aliases} aliases registered.")

        if catalog is not None and catalog.mode == BATCH:
            catalog.write()
            if not self.config.retain_catalog:
                self.catalog = None

        self.host.storage.set("prefix", self.config.default_prefix)
        self.host.emit("ready")
        return True

    def _category_trees(self) -> dict[str, Mapping[str, Any]]:
        tree = self.discovery.discover(self.config.commands_path)
        categories: dict[str, Mapping[str, Any]] = {}
        for name, node in tree.items():
            if not isinstance(node, Mapping):
                self.log.warning(
                    f"Ignoring '{name}': command modules must live inside a category directory")
                continue
            nested = node.get(COMMANDS_DIR)
            if not isinstance(nested, Mapping):
                categories[name] = node
                continue
            for sibling in node:
                if sibling != COMMANDS_DIR:
                    self.log.warning(
                        f"Ignoring '{name}/{sibling}': category '{name}' keeps its "
                        f"commands in '{COMMANDS_DIR}/'")
            categories[name] = nested
        return categories

    def _new_catalog(self) -> Optional[CommandCatalog]:
        if not self.config.catalog_enabled:
            return None
        return CommandCatalog(
            self.config.catalog_path,
            mode=self.config.catalog_mode,
            delay=self.config.catalog_debounce_ms / 1000,
            logger=self.log,
        )

    # ---------------- Incremental registration ----------------

    async def register_external(self, group: str, location: Union[str, Path]) -> WalkStats:
        """Merge the commands under `location`/commands into the live table."""
        tree = self.discovery.discover(Path(location) / COMMANDS_DIR)

        if self.catalog is not None:
            self.catalog.add_category(group)
        stats = await walk_tree(
            group, tree,
            table=self.commands, host=self.host, catalog=self.catalog, logger=self.log,
        )
        self.stats.setdefault(group, WalkStats()).merge(stats)

        self.log.info(
            f"Registered {stats.registered} commands from external module '{group}' "
            f"({len(stats.failures)} failed).")

        if self.catalog is not None and self.catalog.mode == BATCH:
            self.catalog.write()

        self._fully_registered.schedule()
        return stats

    def _emit_fully_registered(self) -> None:
        self.log.info(
            f"All external commands registered, {self.commands.registered} commands available.")
        self.host.emit("fully_registered")

    # ---------------- Shutdown ----------------

    async def aclose(self) -> None:
        """Flush pending catalog writes and a pending 'fully_registered'."""
        if self.catalog is not None:
            await self.catalog.flush()
        await self._fully_registered.flush()
