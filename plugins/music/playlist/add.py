# plugins/music/playlist/add.py
from __future__ import annotations

from registrar.commands import BaseCommand


class PlaylistAdd(BaseCommand):
    name = "add"
    aliases = ["a"]
    description = "Add the current track to a playlist."
    usage = "playlist add <playlist>"


COMMAND = PlaylistAdd
