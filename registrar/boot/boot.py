#!/usr/bin/env python3
# registrar/boot/boot.py
from __future__ import annotations
"""
Boot sequence for the registrar.

Goals:
- Bring up configuration, logging and the host context in a fixed order.
- Make catalog persistence failures fatal: a write error that escapes into
  the event loop stops it instead of being logged and forgotten.
- Keep clear status output for each boot step.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from registrar.db import AppConfig, load_config
from registrar.exceptions import RegistrarError
from registrar.host import Host
from registrar.interface import CommandRegistrar
from registrar.ui import colorize, init_logger, print_line


@dataclass(slots=True)
class BootState:
    root: Path
    config: AppConfig
    logger: logging.Logger
    host: Host
    registrar: CommandRegistrar
    loaded_count: int


def _step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a boot step with status output."""
    try:
        out = fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


async def _astep(label: str, fn: Callable[[], Awaitable[Any]]) -> Any:
    """Async variant of _step."""
    try:
        out = await fn()
    except Exception as exc:
        print_line(
            colorize(f"[FAILED] {label} ({type(exc).__name__}: {exc})", "red")
        )
        raise
    print_line(colorize(f"[  OK  ] {label}", "green"))
    return out


def install_fatal_handler(loop: asyncio.AbstractEventLoop, logger: Union[logging.Logger, logging.LoggerAdapter]) -> None:
    """
    Route registrar errors raised outside any awaiting caller (debounced
    catalog writes) to a critical log line and stop the loop. Anything
    else goes to the default handler.
    """

    def _handler(loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        exc = context.get("exception")
        if not isinstance(exc, RegistrarError):
            loop.default_exception_handler(context)
            return
        logger.critical(
            f"Fatal: {context.get('message', 'unhandled error')}", exc_info=exc)
        loop.stop()

    loop.set_exception_handler(_handler)


def _logfile(config: AppConfig) -> Optional[str]:
    if config.log_file_path is None:
        return None
    config.log_file_path.parent.mkdir(parents=True, exist_ok=True)
    return str(config.log_file_path)


async def boot_sequence(root: Union[str, Path, None] = None) -> BootState:
    # ---------- config ----------
    config = _step("Load configuration", lambda: load_config(root))
    mode = "development" if config.development else "production"
    _step(f"Environment: {mode}, catalog "
          f"{config.catalog_mode if config.catalog_enabled else 'disabled'}", lambda: None)

    # ---------- logging ----------
    logger = _step(
        "Initialize logger",
        lambda: init_logger("registrar", config.log_level, _logfile(config)),
    )

    # ---------- host ----------
    host = _step("Create host context", lambda: Host(config=config, logger=logger))
    _step(
        "Install fatal error handler",
        lambda: install_fatal_handler(asyncio.get_running_loop(), logger),
    )
    registrar = _step("Create command registrar", lambda: CommandRegistrar(host))

    # ---------- commands ----------
    await _astep(
        f"Map commands from '{config.commands_path}'", registrar.setup)
    table = registrar.commands
    failed = sum(len(s.failures) for s in registrar.stats.values())
    _step(
        f"Registered {table.registered} commands, {table.aliases} aliases, {failed} failed",
        lambda: None,
    )
    _step(f"Command prefix: {host.storage.get('prefix')}", lambda: None)
    _step("Boot complete", lambda: None)

    return BootState(
        root=config.root,
        config=config,
        logger=logger,
        host=host,
        registrar=registrar,
        loaded_count=table.registered,
    )
