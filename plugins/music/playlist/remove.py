# plugins/music/playlist/remove.py
from __future__ import annotations

from registrar.commands import BaseCommand


class PlaylistRemove(BaseCommand):
    name = "remove"
    aliases = ["rm"]
    description = "Remove a track from a playlist."
    usage = "playlist remove <playlist> <position>"


COMMAND = PlaylistRemove
