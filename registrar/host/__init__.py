#!/usr/bin/env python3
# registrar/host/__init__.py
from __future__ import annotations

"""
Host-side collaborators of the registrar: the context object passed to
commands, the lifecycle event bus and the global key-value storage.
"""

from .events import EventBus
from .storage import GlobalStorage
from .host import Host

__all__ = ["EventBus", "GlobalStorage", "Host"]
