#!/usr/bin/env python3
# registrar/host/storage.py
from __future__ import annotations

from typing import Any


class GlobalStorage:
    """Process-wide key-value store shared between host modules."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}

    def set(self, key: str, value: Any) -> None:
        self._values[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._values.get(key, default)

    def delete(self, key: str) -> bool:
        if key not in self._values:
            return False
        del self._values[key]
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._values
