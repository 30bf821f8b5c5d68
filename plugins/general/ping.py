# plugins/general/ping.py
from __future__ import annotations

from registrar.commands import BaseCommand


class Ping(BaseCommand):
    name = "ping"
    aliases = ["latency"]
    description = "Check that the bot is responsive."
    usage = "ping"


COMMAND = Ping
