from __future__ import annotations

import sys

from .base import Command
from .usage import USAGE, USAGE_TEXT, CommandVariant

HELP_TOPICS = {
    "create": CommandVariant.CREATE,
    "describe": CommandVariant.DESCRIBE,
    "history": CommandVariant.HISTORY,
    "progress": CommandVariant.PROGRESS,
    "delete": CommandVariant.DELETE,
    "cancel": CommandVariant.CANCEL,
    "set": CommandVariant.SET_LIST,
}


class HelpCommand(Command):
    VARIANT = CommandVariant.HELP

    def execute(self) -> None:
        if len(self._args) != 2:
            raise self.usage_error("Only supports help message of a single command type")

        topic = self._args[1]
        variant = HELP_TOPICS.get(topic.lower())
        if variant is None:
            print(f"Unknown command : {topic}")
            print(USAGE, end="", file=sys.stderr)
            return
        print(USAGE_TEXT[variant], end="")
