from __future__ import annotations

import logging
import sys

from ..core.errors import TransportError
from ..core.models import BackupRequest, BackupType
from ..core.protocols import MetadataStoreProtocol
from ..core.table_name import TableNameParser
from .base import Command
from .usage import CommandVariant

logger = logging.getLogger(__name__)


class CreateCommand(Command):
    VARIANT = CommandVariant.CREATE

    def execute(self) -> None:
        args = self._args
        if len(args) < 3 or len(args) > 4:
            raise self.usage_error(f"wrong number of arguments: {len(args)}")

        try:
            backup_type = BackupType.parse(args[1])
        except ValueError:
            raise self.usage_error(f"invalid backup type: {args[1]}") from None

        set_name = self._options.option_value("set")
        if set_name is not None and len(args) == 4:
            raise self.usage_error(
                f"a table list ({args[3]}) and a backup set ({set_name}) "
                "are mutually exclusive"
            )

        workers = self._int_option("w", -1, "number of workers")
        bandwidth = self._int_option("b", -1, "bandwidth")

        tables: list[str] = []
        if set_name is None and len(args) == 4 and args[3].strip():
            try:
                tables = TableNameParser.parse_list(args[3])
            except ValueError as exc:
                raise self.usage_error(str(exc)) from None

        request = BackupRequest(
            backup_type=backup_type,
            target_root_dir=args[2],
            tables=tables,
            workers=workers,
            bandwidth=bandwidth,
            backup_set_name=set_name,
        )
        try:
            with self._connect() as connection:
                if set_name is not None:
                    with connection.metadata_store() as store:
                        self._resolve_backup_set(store, set_name)
                with connection.backup_admin() as admin:
                    backup_id = admin.submit_backup(request)
        except TransportError:
            print("Backup session finished. Status: FAILURE", file=sys.stderr)
            raise

        print(f"Backup session {backup_id} finished. Status: SUCCESS")

    def _resolve_backup_set(self, store: MetadataStoreProtocol, set_name: str) -> None:
        tables = store.describe_backup_set(set_name)
        if not tables:
            raise self.usage_error(
                f"Backup set '{set_name}' is either empty or does not exist"
            )
        logger.debug("Backup set %s resolves to tables %s", set_name, ",".join(tables))
