from __future__ import annotations

import re
import sys
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import ClassVar

from ..core.errors import ExitStatus, UsageError
from ..core.options import ParsedOptions
from ..core.protocols import ConnectionProtocol
from .usage import INCORRECT_USAGE, USAGE_TEXT, CommandVariant

Connect = Callable[[], ConnectionProtocol]

_INTEGER = re.compile(r"[+-]?\d+", re.ASCII)


def usage_error(variant: CommandVariant, message: str | None = None) -> UsageError:
    if message:
        print(f"ERROR: {message}", file=sys.stderr)
    print(USAGE_TEXT[variant], end="", file=sys.stderr)
    return UsageError(message or INCORRECT_USAGE, variant)


class Command(ABC):
    VARIANT: ClassVar[CommandVariant]

    def __init__(self, options: ParsedOptions, connect: Connect) -> None:
        self._options = options
        self._connect = connect

    def run(self) -> int:
        if self._options.help_requested:
            raise self.usage_error()
        self.execute()
        return ExitStatus.SUCCESS

    @abstractmethod
    def execute(self) -> None:
        raise NotImplementedError

    def usage(self) -> str:
        return USAGE_TEXT[self.VARIANT]

    def usage_error(self, message: str | None = None) -> UsageError:
        return usage_error(self.VARIANT, message)

    @property
    def _args(self) -> tuple[str, ...]:
        return self._options.args

    def _int_option(self, name: str, default: int, label: str) -> int:
        value = self._options.option_value(name)
        if value is None:
            return default
        if not _INTEGER.fullmatch(value):
            raise self.usage_error(f"Illegal argument for {label}: {value}")
        return int(value)
