#!/usr/bin/env python3

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Sequence

from .commands.factory import CommandFactory
from .core.config_loader import VALID_LOG_LEVELS
from .core.errors import TransportError, UsageError
from .core.options import OptionParser

logger = logging.getLogger(__name__)


class CliApplication:
    def __init__(self, factory: CommandFactory | None = None) -> None:
        self._factory = factory or CommandFactory()
        self._parser = OptionParser()

    def run(self, argv: Sequence[str] | None = None) -> int:
        tokens = list(sys.argv[1:] if argv is None else argv)
        try:
            options = self._parser.parse(tokens)
            command = self._factory.create(options)
            return command.run()
        except UsageError as exc:
            logger.debug("Usage error: %s", exc)
            return exc.exit_code
        except TransportError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return exc.exit_code


def configure_logging() -> None:
    level = os.environ.get("BACKUP_LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=level if level in VALID_LOG_LEVELS else "WARNING",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> int:
    configure_logging()
    return CliApplication().run()


if __name__ == "__main__":
    raise SystemExit(main())
