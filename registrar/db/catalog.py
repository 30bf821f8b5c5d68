#!/usr/bin/env python3
# registrar/db/catalog.py
from __future__ import annotations

"""
Exportable snapshot of the public commands, grouped by category.

Shape (nested variant):

    {
        "<category>": {
            "commands": [raw, ...],
            "children": {"<sub path>": [raw, ...]}
        }
    }

"children" only appears once a nested command lands in the category.

Persistence is always serialize-then-replace-whole-file. In "batch" mode
the owner calls write() once; in "debounced" mode every append re-arms a
DebouncedTask so a burst of registrations produces a single write.
"""

import copy
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from registrar.db.debounce import DebouncedTask
from registrar.exceptions import CatalogWriteError
from registrar.ui import tagged

BATCH = "batch"
DEBOUNCED = "debounced"


class CommandCatalog:
    """Accumulates raw command projections and writes them as JSON."""

    def __init__(
        self,
        path: Union[str, Path],
        *,
        mode: str = BATCH,
        delay: float = 0.5,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ) -> None:
        if mode not in (BATCH, DEBOUNCED):
            raise ValueError(f"Unknown catalog mode: {mode!r}")
        self.path = Path(path)
        self.mode = mode
        self.write_count = 0
        self.log = logger if logger is not None else tagged(
            logging.getLogger("registrar"), "COMMANDS")
        self._data: dict[str, dict[str, Any]] = {}
        self._debounce: Optional[DebouncedTask] = (
            DebouncedTask(delay, self.write, name="catalog")
            if mode == DEBOUNCED else None
        )

    # ---------------- Accumulation ----------------

    def add_category(self, category: str) -> None:
        self._data.setdefault(category, {"commands": []})

    def bucket(self, category: str, prefix: str = "") -> list[Any]:
        """Return (creating lazily) the list a command under `prefix` goes to."""
        self.add_category(category)
        entry = self._data[category]
        path = prefix.strip()
        if not path:
            return entry["commands"]
        return entry.setdefault("children", {}).setdefault(path, [])

    def append(self, category: str, prefix: str, raw: Any) -> None:
        self.bucket(category, prefix).append(raw)
        if self._debounce is not None:
            self._debounce.schedule()

    def __len__(self) -> int:
        total = 0
        for entry in self._data.values():
            total += len(entry["commands"])
            for items in entry.get("children", {}).values():
                total += len(items)
        return total

    def to_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self._data)

    def dumps(self) -> str:
        return json.dumps(self._data, indent=4, ensure_ascii=False)

    def clear(self) -> None:
        """Drop the in-memory snapshot and any pending write."""
        if self._debounce is not None:
            self._debounce.cancel()
        self._data = {}

    # ---------------- Persistence ----------------

    @property
    def pending(self) -> bool:
        return self._debounce is not None and self._debounce.pending

    def write(self) -> Path:
        """Serialize once and atomically replace the catalog file."""
        try:
            payload = self.dumps()
        except (TypeError, ValueError) as exc:
            raise CatalogWriteError(self.path, exc) from exc

        tmp_name: Optional[str] = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=self.path.parent,
                prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
            ) as handle:
                tmp_name = handle.name
                handle.write(payload)
            os.replace(tmp_name, self.path)
        except OSError as exc:
            if tmp_name is not None and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise CatalogWriteError(self.path, exc) from exc

        self.write_count += 1
        self.log.info(
            f'Generated new "{self.path.name}" with the mapped commands.')
        return self.path

    async def flush(self) -> None:
        """Run a pending debounced write now; write failures propagate."""
        if self._debounce is not None:
            await self._debounce.flush()
