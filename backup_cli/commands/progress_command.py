from __future__ import annotations

import sys

from .base import Command
from .usage import CommandVariant

NO_INFO_FOUND = "No info was found for backup id: "


class ProgressCommand(Command):
    VARIANT = CommandVariant.PROGRESS

    def execute(self) -> None:
        if len(self._args) > 2:
            raise self.usage_error(f"wrong number of arguments: {len(self._args)}")

        backup_id = self._args[1] if len(self._args) == 2 else None
        if backup_id is None:
            print(
                "No backup id was specified, will retrieve the most recent (ongoing) session",
                file=sys.stderr,
            )

        with self._connect() as connection, connection.metadata_store() as store:
            info = store.read_backup_info(backup_id)

        if info is None or info.progress < 0:
            print(f"{NO_INFO_FOUND}{backup_id}", file=sys.stderr)
            return
        print(f"{info.backup_id} progress={info.progress}%")
