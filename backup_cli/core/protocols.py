from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from types import TracebackType
from typing import Protocol

from .models import BackupInfo, BackupRequest, BackupSet, HistoryFilter


class _Closeable(Protocol):
    def close(self) -> None:
        ...

    def __enter__(self) -> _Closeable:
        ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        ...


class BackupAdminProtocol(_Closeable, Protocol):
    def __enter__(self) -> BackupAdminProtocol:
        ...

    def submit_backup(self, request: BackupRequest) -> str:
        ...

    def delete_backups(self, backup_ids: list[str]) -> int:
        ...

    def list_backup_sets(self) -> list[BackupSet]:
        ...

    def delete_backup_set(self, name: str) -> bool:
        ...

    def add_to_backup_set(self, name: str, tables: Iterable[str]) -> None:
        ...

    def remove_from_backup_set(self, name: str, tables: Iterable[str]) -> None:
        ...


class MetadataStoreProtocol(_Closeable, Protocol):
    def __enter__(self) -> MetadataStoreProtocol:
        ...

    def read_backup_info(self, backup_id: str | None) -> BackupInfo | None:
        ...

    def describe_backup_set(self, name: str) -> list[str] | None:
        ...

    def get_backup_history(self, limit: int, *filters: HistoryFilter) -> list[BackupInfo]:
        ...


class ConnectionProtocol(_Closeable, Protocol):
    def __enter__(self) -> ConnectionProtocol:
        ...

    def backup_admin(self) -> BackupAdminProtocol:
        ...

    def metadata_store(self) -> MetadataStoreProtocol:
        ...


class HistoryScannerProtocol(Protocol):
    def find_history(
        self,
        root: Path,
        limit: int,
        *filters: HistoryFilter,
    ) -> list[BackupInfo]:
        ...


class ClockProtocol(Protocol):
    def now_millis(self) -> int:
        ...
