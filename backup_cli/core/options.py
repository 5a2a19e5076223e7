from __future__ import annotations

import argparse
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType

from ..commands.usage import USAGE
from .errors import UsageError

OPTION_NAMES = ("set", "w", "b", "path", "n", "t", "conf")


@dataclass(frozen=True)
class ParsedOptions:
    args: tuple[str, ...]
    values: Mapping[str, str] = field(default_factory=dict)
    help_requested: bool = False

    @property
    def command(self) -> str | None:
        return self.args[0] if self.args else None

    def has_option(self, name: str) -> bool:
        return name in self.values

    def option_value(self, name: str) -> str | None:
        return self.values.get(name)


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise ValueError(message)


class OptionParser:
    def build_parser(self) -> argparse.ArgumentParser:
        parser = _ArgumentParser(prog="backup", add_help=False, allow_abbrev=False)
        parser.add_argument("-h", "--help", dest="help", action="store_true")
        parser.add_argument("-set", "--set", dest="set", metavar="NAME")
        parser.add_argument("-w", dest="w", metavar="WORKERS")
        parser.add_argument("-b", dest="b", metavar="BANDWIDTH")
        parser.add_argument("-path", "--path", dest="path", metavar="BACKUP_ROOT")
        parser.add_argument("-n", dest="n", metavar="N")
        parser.add_argument("-t", dest="t", metavar="TABLE")
        parser.add_argument("-conf", "--conf", dest="conf", metavar="ENV_FILE")
        parser.add_argument("args", nargs="*")
        return parser

    def parse(self, argv: Sequence[str]) -> ParsedOptions:
        try:
            namespace = self.build_parser().parse_intermixed_args(list(argv))
        except ValueError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            print(USAGE, end="", file=sys.stderr)
            raise UsageError(str(exc)) from exc

        values = {
            name: getattr(namespace, name)
            for name in OPTION_NAMES
            if getattr(namespace, name) is not None
        }
        return ParsedOptions(
            args=tuple(namespace.args),
            values=MappingProxyType(values),
            help_requested=namespace.help,
        )
