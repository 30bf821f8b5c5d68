# plugins/admin/commands/eval.py
from __future__ import annotations

from registrar.commands import BaseCommand, Permissions


class Eval(BaseCommand):
    name = "eval"
    description = "Evaluate an expression in the bot process."
    permissions = Permissions.of("BOT_OWNER")
    # TODO: re-enable once evaluation runs in a sandboxed subprocess
    disabled = True


COMMAND = Eval
