from __future__ import annotations

import logging
from collections.abc import Callable
from functools import partial

from ..core.backup_root import BackupRootScanner
from ..core.config_loader import ConfigLoader
from ..core.connection import ConnectionFactory, resolve_connection_factory
from ..core.options import ParsedOptions
from ..core.protocols import ConnectionProtocol, HistoryScannerProtocol
from .base import Command, Connect, usage_error
from .cancel_command import CancelCommand
from .create_command import CreateCommand
from .delete_command import DeleteCommand
from .describe_command import DescribeCommand
from .help_command import HelpCommand
from .history_command import HistoryCommand
from .progress_command import ProgressCommand
from .set_commands import (
    SetAddCommand,
    SetCommand,
    SetDeleteCommand,
    SetDescribeCommand,
    SetListCommand,
    SetRemoveCommand,
)
from .usage import CommandVariant

logger = logging.getLogger(__name__)

SET_COMMANDS: dict[str, type[SetCommand]] = {
    "add": SetAddCommand,
    "remove": SetRemoveCommand,
    "delete": SetDeleteCommand,
    "describe": SetDescribeCommand,
    "list": SetListCommand,
}


class CommandFactory:
    def __init__(
        self,
        *,
        config_loader: ConfigLoader | None = None,
        scanner: HistoryScannerProtocol | None = None,
        connection_factory: ConnectionFactory | None = None,
    ) -> None:
        self._config_loader = config_loader or ConfigLoader()
        self._scanner = scanner or BackupRootScanner()
        self._connection_factory = connection_factory
        self._commands: dict[str, Callable[[ParsedOptions, Connect], Command]] = {
            "create": CreateCommand,
            "describe": DescribeCommand,
            "progress": ProgressCommand,
            "delete": DeleteCommand,
            "cancel": CancelCommand,
            "history": partial(HistoryCommand, scanner=self._scanner),
            "help": HelpCommand,
        }

    def create(self, options: ParsedOptions) -> Command:
        connect: Connect = partial(self._connect, options.option_value("conf"))
        keyword = (options.command or "").lower()

        if keyword == "set":
            return self._create_set_command(options, connect)
        build = self._commands.get(keyword)
        if build is None:
            message = f"Unknown command: {options.command}" if options.command else None
            raise usage_error(CommandVariant.HELP, message)
        return build(options, connect)

    def _create_set_command(self, options: ParsedOptions, connect: Connect) -> Command:
        if options.help_requested:
            raise usage_error(CommandVariant.SET_LIST)
        if len(options.args) < 2:
            raise usage_error(CommandVariant.SET_LIST, "Command line format")

        subcommand = options.args[1]
        command_class = SET_COMMANDS.get(subcommand.lower())
        if command_class is None:
            raise usage_error(CommandVariant.SET_LIST, f"Unknown command for 'set' : {subcommand}")
        return command_class(options, connect)

    def _connect(self, env_file: str | None) -> ConnectionProtocol:
        config = self._config_loader.load(env_file)
        logging.getLogger("backup_cli").setLevel(config.log_level)
        factory = self._connection_factory or resolve_connection_factory(
            config.connection_factory
        )
        logger.debug("Connecting to backup catalog %s", config.catalog_dir)
        return factory(config)
