"""
Pytest configuration and shared fixtures for registrar tests.

This module provides reusable helpers for:
- Writing command modules into temporary directory trees
- In-memory command classes and pending modules for walker tests
- Config and host instances bound to a temporary root
"""

import logging
import types
from pathlib import Path
from typing import Any, Iterable, Optional

import pytest

from registrar.commands import BaseCommand
from registrar.db import load_config
from registrar.host import Host

REPO_ROOT = Path(__file__).resolve().parents[1]

# Outside the "registrar" logger tree so caplog sees records even after
# init_logger() has turned propagation off for "registrar".
TEST_LOGGER = "lunar.tests"


# ============================================================================
# On-disk command modules
# ============================================================================

def command_source(
    name: str,
    *,
    aliases: Iterable[str] = (),
    hidden: bool = False,
    disabled: bool = False,
    levels: Iterable[str] = (),
    permission: bool = False,
    description: str = "",
) -> str:
    """Source text of a command module exporting COMMAND."""
    lines = [
        "from registrar.commands import BaseCommand, Permissions",
        "",
        "",
        "class Command(BaseCommand):",
        f"    name = {name!r}",
        f"    aliases = {list(aliases)!r}",
        f"    hidden = {hidden!r}",
        f"    disabled = {disabled!r}",
        f"    description = {description!r}",
    ]
    levels = list(levels)
    if levels:
        lines.append(f"    permissions = Permissions.of(*{levels!r})")
    if permission:
        lines += ["", "    def permission(self, *args):", "        return True"]
    lines += ["", "", "COMMAND = Command", ""]
    return "\n".join(lines)


def write_command(path: Path, name: Optional[str] = None, **kwargs: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(command_source(name or path.stem, **kwargs), encoding="utf-8")
    return path


def write_broken(path: Path, message: str = "boom") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(f"raise RuntimeError({message!r})\n", encoding="utf-8")
    return path


# ============================================================================
# In-memory commands
# ============================================================================

def make_command(name: str, **attrs: Any) -> type:
    """Create a BaseCommand subclass with the given metadata."""
    attrs.setdefault("aliases", [])
    return type(f"Cmd_{name.replace(' ', '_')}", (BaseCommand,), {"name": name, **attrs})


class FakePending:
    """Awaitable leaf resolving to a module-like object exporting COMMAND."""

    def __init__(self, command_cls: Any = None, error: Optional[BaseException] = None) -> None:
        self.command_cls = command_cls
        self.error = error
        self.awaited = 0

    async def _load(self) -> types.SimpleNamespace:
        self.awaited += 1
        if self.error is not None:
            raise self.error
        module = types.SimpleNamespace(__name__="fake_module")
        if self.command_cls is not None:
            module.COMMAND = self.command_cls
        return module

    def __await__(self):
        return self._load().__await__()


def leaf(name: str, **attrs: Any) -> FakePending:
    return FakePending(make_command(name, **attrs))


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def test_logger() -> logging.Logger:
    return logging.getLogger(TEST_LOGGER)


@pytest.fixture
def make_config(tmp_path):
    """Build an AppConfig rooted at tmp_path, ignoring the real environment."""
    def _make(**overrides: Any):
        return load_config(tmp_path, overrides=overrides, environ={})
    return _make


@pytest.fixture
def make_host(make_config, test_logger):
    def _make(**overrides: Any) -> Host:
        return Host(config=make_config(**overrides), logger=test_logger)
    return _make


@pytest.fixture
def host(make_host) -> Host:
    return make_host()


@pytest.fixture
def plugins_dir(tmp_path) -> Path:
    path = tmp_path / "plugins"
    path.mkdir()
    return path
