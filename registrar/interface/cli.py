#!/usr/bin/env python3
# registrar/interface/cli.py
from __future__ import annotations

"""
Interactive registry inspector.

Type a command name or alias (qualified names contain spaces, e.g.
'playlist add') to see what it resolves to. Nothing is executed.

Meta commands:
    :categories   list categories with their command counts
    :reload       run a full setup() again
    :quit         leave (also Ctrl-D)
"""

from pathlib import Path
from typing import Optional

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory

from registrar.commands import level_type
from registrar.commands.command_types import permission_levels
from registrar.interface.registrar import CommandRegistrar

# History location in the user home directory
HISTORY_FILE_PATH = Path.home() / ".registrar_history"

META_COMMANDS: tuple[str, ...] = (":categories", ":reload", ":quit")


def describe(registrar: CommandRegistrar, name: str) -> str:
    """Render what `name` resolves to, or a hint when it is unknown."""
    command_obj = registrar.get(name)
    if command_obj is None:
        return f"No such command: {name}"

    table = registrar.commands
    primary = table.primary_key(command_obj) or command_obj.name
    alias_text = ", ".join(command_obj.aliases) if command_obj.aliases else "(none)"
    levels = [level_type(lv) for lv in permission_levels(command_obj)]
    lines = [
        f"Name:        {primary}",
        f"Resolved by: {'primary name' if table.is_primary(name) else 'alias'}",
        f"Aliases:     {alias_text}",
        f"Category:    {command_obj.category}",
        f"Hidden:      {'yes' if command_obj.hidden else 'no'}",
        f"Permissions: {', '.join(map(str, levels)) if levels else '(none)'}",
        f"Description: {getattr(command_obj, 'description', '') or '(none)'}",
    ]
    return "\n".join(lines)


def list_categories(registrar: CommandRegistrar) -> str:
    categories = registrar.commands.categories()
    if not categories:
        return "No commands loaded."
    lines = []
    for category_name in sorted(categories):
        count = len(categories[category_name])
        lines.append(f"{category_name:<20} {count} command{'s' if count != 1 else ''}")
    return "\n".join(lines)


class InspectorCLI:
    """prompt_toolkit front end over a CommandRegistrar."""

    def __init__(self, registrar: CommandRegistrar, *, history_path: Path = HISTORY_FILE_PATH) -> None:
        self.registrar = registrar
        self.history_path = history_path
        self.completer = WordCompleter(
            lambda: [*META_COMMANDS, *self.registrar.commands.names()],
            sentence=True,
        )
        self._session: Optional[PromptSession] = None

    async def handle_line(self, line: str) -> Optional[str]:
        """Return the text to print for `line`, or None to quit."""
        text = line.strip()
        if not text:
            return ""
        if text in (":quit", ":exit"):
            return None
        if text == ":categories":
            return list_categories(self.registrar)
        if text == ":reload":
            await self.registrar.setup()
            table = self.registrar.commands
            return f"Reloaded: {table.registered} commands, {table.aliases} aliases."
        return describe(self.registrar, text)

    async def run(self) -> None:
        if self._session is None:
            self.history_path.touch(exist_ok=True)
            self._session = PromptSession(
                history=FileHistory(str(self.history_path)),
                completer=self.completer,
                complete_while_typing=True,
            )
        prefix = self.registrar.host.storage.get("prefix", "")
        while True:
            try:
                line = await self._session.prompt_async(f"[registry {prefix}]> ")
            except KeyboardInterrupt:
                continue
            except EOFError:
                return
            output = await self.handle_line(line)
            if output is None:
                return
            if output:
                print(output)
