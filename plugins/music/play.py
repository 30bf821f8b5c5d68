# plugins/music/play.py
from __future__ import annotations

from registrar.commands import BaseCommand


class Play(BaseCommand):
    name = "play"
    aliases = ["p"]
    description = "Queue a track by search query or URL."
    usage = "play <query|url>"


COMMAND = Play
