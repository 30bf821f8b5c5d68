# plugins/admin/commands/prefix.py
from __future__ import annotations

from registrar.commands import COMMAND_HANDLED, BaseCommand, Permissions


class Prefix(BaseCommand):
    """Only server owners may change the prefix; the check lives here."""

    name = "prefix"
    description = "Show or change the command prefix for this server."
    usage = "prefix [new prefix]"
    permissions = Permissions.of(COMMAND_HANDLED)

    def permission(self, member, guild) -> bool:
        return getattr(guild, "owner_id", None) == getattr(member, "id", None)


COMMAND = Prefix
