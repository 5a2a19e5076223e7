from __future__ import annotations

from .base import Command
from .usage import CommandVariant


class DeleteCommand(Command):
    VARIANT = CommandVariant.DELETE

    def execute(self) -> None:
        if len(self._args) < 2:
            raise self.usage_error("No backup id(s) was specified")

        backup_ids = list(self._args[1:])
        with self._connect() as connection, connection.backup_admin() as admin:
            deleted = admin.delete_backups(backup_ids)

        print(f"Deleted {deleted} backups. Total requested: {len(backup_ids)}")
