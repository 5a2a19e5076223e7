from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from types import TracebackType

import pytest

from backup_cli.core.backup_config import BackupConfig
from backup_cli.core.history_filters import apply_filters
from backup_cli.core.models import (
    BackupInfo,
    BackupRequest,
    BackupSet,
    BackupState,
    BackupType,
    HistoryFilter,
)
from backup_cli.core.options import ParsedOptions


class FixedClock:
    def __init__(self, millis: int = 1_771_203_723_000) -> None:
        self._millis = millis

    def now_millis(self) -> int:
        return self._millis


def make_options(*args: str, help_requested: bool = False, **values: str) -> ParsedOptions:
    return ParsedOptions(args=args, values=values, help_requested=help_requested)


def make_info(
    backup_id: str,
    tables: Iterable[str] = ("t1",),
    *,
    progress: int = 100,
    start_ts: int = 1_000,
    state: BackupState = BackupState.COMPLETE,
    root: str = "/backups",
) -> BackupInfo:
    return BackupInfo(
        backup_id=backup_id,
        backup_type=BackupType.FULL,
        tables=tuple(tables),
        target_root_dir=root,
        state=state,
        progress=progress,
        start_ts=start_ts,
        end_ts=start_ts + 10 if state is not BackupState.RUNNING else 0,
    )


class _StubHandle:
    def __init__(self, backend: StubBackend) -> None:
        self._backend = backend
        self.closed = False
        backend.handles.append(self)

    def close(self) -> None:
        self.closed = True

    def __enter__(self):  # type: ignore[no-untyped-def]
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class StubBackupAdmin(_StubHandle):
    def submit_backup(self, request: BackupRequest) -> str:
        self._backend.submitted.append(request)
        if self._backend.submit_error is not None:
            raise self._backend.submit_error
        return self._backend.next_backup_id

    def delete_backups(self, backup_ids: list[str]) -> int:
        self._backend.delete_calls.append(list(backup_ids))
        deleted = [backup_id for backup_id in backup_ids if backup_id in self._backend.infos]
        for backup_id in deleted:
            del self._backend.infos[backup_id]
        return len(deleted)

    def list_backup_sets(self) -> list[BackupSet]:
        return [
            BackupSet(name, tuple(tables))
            for name, tables in sorted(self._backend.sets.items())
        ]

    def delete_backup_set(self, name: str) -> bool:
        return self._backend.sets.pop(name, None) is not None

    def add_to_backup_set(self, name: str, tables: Iterable[str]) -> None:
        members = self._backend.sets.setdefault(name, [])
        members.extend(table for table in tables if table not in members)

    def remove_from_backup_set(self, name: str, tables: Iterable[str]) -> None:
        removed = set(tables)
        if name in self._backend.sets:
            self._backend.sets[name] = [
                table for table in self._backend.sets[name] if table not in removed
            ]


class StubMetadataStore(_StubHandle):
    def read_backup_info(self, backup_id: str | None) -> BackupInfo | None:
        self._backend.info_lookups.append(backup_id)
        if backup_id is None:
            return self._backend.latest
        return self._backend.infos.get(backup_id)

    def describe_backup_set(self, name: str) -> list[str] | None:
        tables = self._backend.sets.get(name)
        return list(tables) if tables is not None else None

    def get_backup_history(self, limit: int, *filters: HistoryFilter) -> list[BackupInfo]:
        self._backend.history_calls.append((limit, filters))
        ordered = sorted(self._backend.infos.values(), key=lambda info: info.start_ts, reverse=True)
        return apply_filters(ordered, filters)[:limit]


class StubConnection(_StubHandle):
    def backup_admin(self) -> StubBackupAdmin:
        return StubBackupAdmin(self._backend)

    def metadata_store(self) -> StubMetadataStore:
        return StubMetadataStore(self._backend)


class StubBackend:
    def __init__(self) -> None:
        self.infos: dict[str, BackupInfo] = {}
        self.sets: dict[str, list[str]] = {}
        self.latest: BackupInfo | None = None
        self.next_backup_id = "backup_1771203723000"
        self.submit_error: Exception | None = None
        self.submitted: list[BackupRequest] = []
        self.delete_calls: list[list[str]] = []
        self.info_lookups: list[str | None] = []
        self.history_calls: list[tuple[int, tuple[HistoryFilter, ...]]] = []
        self.handles: list[_StubHandle] = []
        self.connect_calls = 0

    def connect(self) -> StubConnection:
        self.connect_calls += 1
        return StubConnection(self)

    def add_info(self, info: BackupInfo) -> BackupInfo:
        self.infos[info.backup_id] = info
        return info

    @property
    def all_closed(self) -> bool:
        return all(handle.closed for handle in self.handles)


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def backend() -> StubBackend:
    return StubBackend()


@pytest.fixture
def sample_config(tmp_path: Path) -> BackupConfig:
    return BackupConfig(
        env_file=tmp_path / "backup.env",
        catalog_dir=tmp_path / "catalog",
        connection_factory=None,
        log_level="WARNING",
    )
