# plugins/music/queue.py
from __future__ import annotations

from registrar.commands import BaseCommand


class Queue(BaseCommand):
    name = "queue"
    aliases = ["q"]
    description = "Show the upcoming tracks."


COMMAND = Queue
