#!/usr/bin/env python3
# registrar/host/host.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

from registrar.db import AppConfig
from registrar.host.events import EventBus
from registrar.host.storage import GlobalStorage

if TYPE_CHECKING:
    from registrar.interface.registrar import CommandRegistrar


@dataclass(slots=True)
class Host:
    """
    Context handed to every command constructor as ``(category, host)``.

    Attributes:
        config: Validated application configuration.
        logger: Application logger (records are tagged per subsystem).
        storage: Global key-value store (the registrar publishes `prefix`).
        events: Lifecycle bus (`ready`, `fully_registered`).
        registrar: Set by the CommandRegistrar bound to this host.
    """

    config: AppConfig
    logger: Union[logging.Logger, logging.LoggerAdapter] = field(
        default_factory=lambda: logging.getLogger("registrar"))
    storage: GlobalStorage = field(default_factory=GlobalStorage)
    events: EventBus = field(default_factory=EventBus)
    registrar: Optional["CommandRegistrar"] = field(default=None, repr=False)

    @property
    def root(self) -> Path:
        return self.config.root

    def emit(self, event: str, *args: Any) -> int:
        return self.events.emit(event, *args)
