#!/usr/bin/env python3
# registrar/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: Orchestrated async startup with Linux-style [  OK  ] / [FAILED] lines.
- BootState: Dataclass with config, logger, host, registrar and command count.
- install_fatal_handler: Loop exception handler that stops on registrar errors.
"""


from .boot import BootState, boot_sequence, install_fatal_handler

__all__ = ["boot_sequence", "BootState", "install_fatal_handler"]
