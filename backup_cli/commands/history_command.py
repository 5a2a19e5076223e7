from __future__ import annotations

from pathlib import Path

from ..core.history_filters import backup_set_filter, table_filter
from ..core.models import BackupInfo
from ..core.options import ParsedOptions
from ..core.protocols import HistoryScannerProtocol
from ..core.table_name import TableNameParser, parse_root_path
from .base import Command, Connect
from .usage import CommandVariant

DEFAULT_HISTORY_LENGTH = 10


class HistoryCommand(Command):
    VARIANT = CommandVariant.HISTORY

    def __init__(
        self,
        options: ParsedOptions,
        connect: Connect,
        scanner: HistoryScannerProtocol,
    ) -> None:
        super().__init__(options, connect)
        self._scanner = scanner

    def execute(self) -> None:
        limit = self._int_option("n", DEFAULT_HISTORY_LENGTH, "history length")
        table = self._table_name()
        backup_root = self._backup_root_path()
        filters = (table_filter(table), backup_set_filter(self._options.option_value("set")))

        history: list[BackupInfo]
        if backup_root is None:
            with self._connect() as connection, connection.metadata_store() as store:
                history = store.get_backup_history(limit, *filters)
        else:
            history = self._scanner.find_history(backup_root, limit, *filters)

        for info in history[: max(limit, 0)]:
            print(info.short_description)

    def _table_name(self) -> str | None:
        value = self._options.option_value("t")
        if value is None:
            return None
        try:
            return TableNameParser.parse(value)
        except ValueError:
            raise self.usage_error(f"Illegal argument for table name: {value}") from None

    def _backup_root_path(self) -> Path | None:
        value = self._options.option_value("path")
        if value is None:
            return None
        try:
            return parse_root_path(value)
        except ValueError:
            raise self.usage_error(f"Illegal argument for backup root path: {value}") from None
