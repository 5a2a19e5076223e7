from __future__ import annotations

from typing import ClassVar

from ..core.models import BackupSet
from ..core.table_name import TableNameParser
from .base import Command
from .usage import CommandVariant


class SetCommand(Command):
    ARITY: ClassVar[int]

    def _check_arity(self) -> None:
        if len(self._args) != self.ARITY:
            raise self.usage_error(
                f"Wrong number of args for '{self.VARIANT.value}' command: {len(self._args)}"
            )

    def _tables(self) -> list[str]:
        try:
            return TableNameParser.parse_list(self._args[3])
        except ValueError as exc:
            raise self.usage_error(str(exc)) from None


class SetAddCommand(SetCommand):
    VARIANT = CommandVariant.SET_ADD
    ARITY = 4

    def execute(self) -> None:
        self._check_arity()
        name, tables = self._args[2], self._tables()
        with self._connect() as connection, connection.backup_admin() as admin:
            admin.add_to_backup_set(name, tables)


class SetRemoveCommand(SetCommand):
    VARIANT = CommandVariant.SET_REMOVE
    ARITY = 4

    def execute(self) -> None:
        self._check_arity()
        name, tables = self._args[2], self._tables()
        with self._connect() as connection, connection.backup_admin() as admin:
            admin.remove_from_backup_set(name, tables)


class SetDeleteCommand(SetCommand):
    VARIANT = CommandVariant.SET_DELETE
    ARITY = 3

    def execute(self) -> None:
        self._check_arity()
        name = self._args[2]
        with self._connect() as connection, connection.backup_admin() as admin:
            deleted = admin.delete_backup_set(name)

        if deleted:
            print(f"Delete set {name} OK.")
        else:
            print(f"Set {name} does not exist")


class SetDescribeCommand(SetCommand):
    VARIANT = CommandVariant.SET_DESCRIBE
    ARITY = 3

    def execute(self) -> None:
        self._check_arity()
        name = self._args[2]
        with self._connect() as connection, connection.metadata_store() as store:
            tables = store.describe_backup_set(name)

        if tables is None:
            print(f"Set '{name}' does not exist.")
        else:
            print(BackupSet(name, tuple(tables)))


class SetListCommand(SetCommand):
    VARIANT = CommandVariant.SET_LIST
    ARITY = 2

    def execute(self) -> None:
        self._check_arity()
        with self._connect() as connection, connection.backup_admin() as admin:
            backup_sets = admin.list_backup_sets()

        for backup_set in backup_sets:
            print(backup_set)
