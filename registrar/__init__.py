#!/usr/bin/env python3
# registrar/__init__.py
from __future__ import annotations
"""
Lunar registrar: asynchronous, directory-driven command registry.

Subpackages expose their own APIs:
- registrar.commands: handler capability and the registry table.
- registrar.interface: discovery, tree walker, registrar facade, inspector.
- registrar.db: configuration loader, command catalog, debounced persistence.
- registrar.host: host context, event bus, global storage.
- registrar.boot: startup sequence.
"""

__version__ = "0.4.0"
