#!/usr/bin/env python3
# registrar/__main__.py
from __future__ import annotations

"""
python -m registrar [ROOT]

Boots the registrar for ROOT (default: current directory) and, when
attached to a terminal, opens the registry inspector.
"""

import asyncio
import sys

from registrar.boot import boot_sequence


async def _main(root: str | None) -> int:
    state = await boot_sequence(root)
    try:
        if sys.stdin.isatty():
            from registrar.interface.cli import InspectorCLI
            await InspectorCLI(state.registrar).run()
    finally:
        await state.registrar.aclose()
    return 0


def main() -> int:
    root = sys.argv[1] if len(sys.argv) > 1 else None
    try:
        return asyncio.run(_main(root))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
