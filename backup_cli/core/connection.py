from __future__ import annotations

import importlib
from collections.abc import Callable

from .backup_config import BackupConfig
from .catalog import CatalogConnection
from .clock import Clock
from .protocols import ConnectionProtocol

ConnectionFactory = Callable[[BackupConfig], ConnectionProtocol]


def create_connection(config: BackupConfig) -> ConnectionProtocol:
    return CatalogConnection(config, Clock())


def resolve_connection_factory(target: str | None) -> ConnectionFactory:
    if not target:
        return create_connection

    module_name, _, attribute = target.partition(":")
    if not module_name or not attribute:
        raise SystemExit(
            f"Invalid BACKUP_CONNECTION_FACTORY: {target} (expected module:callable)"
        )
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise SystemExit(f"Cannot import connection factory module {module_name}: {exc}") from exc

    factory = getattr(module, attribute, None)
    if not callable(factory):
        raise SystemExit(f"Connection factory {target} is not callable")
    return factory
