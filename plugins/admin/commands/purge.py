# plugins/admin/commands/purge.py
from __future__ import annotations

from registrar.commands import COMMAND_HANDLED, BaseCommand, Permissions


class Purge(BaseCommand):
    # Declares COMMAND_HANDLED without a permission() method, so the
    # registrar refuses it until one is written.
    name = "purge"
    description = "Bulk delete recent messages."
    permissions = Permissions.of(COMMAND_HANDLED)


COMMAND = Purge
