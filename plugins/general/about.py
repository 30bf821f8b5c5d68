# plugins/general/about.py
from __future__ import annotations

from registrar.commands import BaseCommand


class About(BaseCommand):
    name = "about"
    description = "Build and version information."
    hidden = True


COMMAND = About
