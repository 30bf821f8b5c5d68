# plugins/general/help.py
from __future__ import annotations

from registrar.commands import BaseCommand


class Help(BaseCommand):
    name = "help"
    aliases = ["h", "commands"]
    description = "List commands or show details for one command."
    usage = "help [command]"


COMMAND = Help
