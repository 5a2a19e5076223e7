from __future__ import annotations

import sys

from .base import Command
from .usage import CommandVariant


class CancelCommand(Command):
    VARIANT = CommandVariant.CANCEL

    def execute(self) -> None:
        if len(self._args) > 2:
            raise self.usage_error(f"wrong number of arguments: {len(self._args)}")
        if len(self._args) < 2:
            print("No backup id was specified, will use the most recent one", file=sys.stderr)

        # TODO: submit the cancellation once the admin exposes a cancel_backup call.
        with self._connect() as connection, connection.backup_admin():
            pass
