from __future__ import annotations

from .base import Command
from .usage import CommandVariant


class DescribeCommand(Command):
    VARIANT = CommandVariant.DESCRIBE

    def execute(self) -> None:
        if len(self._args) != 2:
            raise self.usage_error(f"wrong number of arguments: {len(self._args)}")

        backup_id = self._args[1]
        with self._connect() as connection, connection.metadata_store() as store:
            info = store.read_backup_info(backup_id)
            if info is None:
                raise self.usage_error(f"{backup_id} does not exist")
            print(info.short_description)
