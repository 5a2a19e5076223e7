from __future__ import annotations

from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..commands.usage import CommandVariant


class ExitStatus(IntEnum):
    SUCCESS = 0
    FAILURE = 1
    USAGE = 2


class BackupCliError(Exception):
    exit_code: ExitStatus = ExitStatus.FAILURE


class UsageError(BackupCliError):
    """Bad arguments, an explicit help request, or an unknown backup/set.

    The usage text for ``variant`` has already been printed to stderr by the
    time this is raised.
    """

    exit_code = ExitStatus.USAGE

    def __init__(self, message: str, variant: CommandVariant | None = None) -> None:
        super().__init__(message)
        self.variant = variant


class TransportError(BackupCliError):
    exit_code = ExitStatus.FAILURE
