"""File-backed backup catalog.

Records backup sessions and backup sets as JSON documents in a local
directory. It only tracks metadata; copying table data is the job of the
backup engine that picks up the recorded sessions.
"""

from __future__ import annotations

import json
import logging
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path
from types import TracebackType
from typing import Any

from .backup_config import BackupConfig
from .errors import TransportError
from .history_filters import apply_filters
from .models import BackupInfo, BackupRequest, BackupSet, BackupState, HistoryFilter
from .protocols import ClockProtocol

logger = logging.getLogger(__name__)

MANIFEST_NAME = ".backup.manifest"
SESSIONS_FILE = "sessions.json"
SETS_FILE = "sets.json"


class CatalogFiles:
    def __init__(self, catalog_dir: Path) -> None:
        self._catalog_dir = catalog_dir

    def ensure_exists(self) -> None:
        try:
            self._catalog_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise TransportError(f"Cannot open backup catalog {self._catalog_dir}: {exc}") from exc

    def read_sessions(self) -> list[BackupInfo]:
        payload = self._read_json(self._catalog_dir / SESSIONS_FILE, [])
        if not isinstance(payload, list):
            raise TransportError(f"Unexpected payload format in {SESSIONS_FILE}")
        try:
            return [BackupInfo.from_dict(item) for item in payload]
        except (KeyError, ValueError, TypeError) as exc:
            raise TransportError(f"Malformed session record in {SESSIONS_FILE}: {exc!r}") from exc

    def write_sessions(self, sessions: list[BackupInfo]) -> None:
        write_json_atomic(self._catalog_dir / SESSIONS_FILE, [info.to_dict() for info in sessions])

    def read_sets(self) -> dict[str, list[str]]:
        payload = self._read_json(self._catalog_dir / SETS_FILE, {})
        if not isinstance(payload, dict) or not all(
            isinstance(tables, list) for tables in payload.values()
        ):
            raise TransportError(f"Unexpected payload format in {SETS_FILE}")
        return {str(name): [str(t) for t in tables] for name, tables in payload.items()}

    def write_sets(self, sets: dict[str, list[str]]) -> None:
        write_json_atomic(self._catalog_dir / SETS_FILE, sets)

    def _read_json(self, path: Path, default: Any) -> Any:
        if not path.is_file():
            return default
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except OSError as exc:
            raise TransportError(f"Cannot read {path}: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise TransportError(f"Could not parse catalog file {path}: {exc}") from exc


def write_json_atomic(path: Path, payload: Any) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
        Path(temp_name).replace(path)
    except OSError as exc:
        raise TransportError(f"Cannot write {path}: {exc}") from exc


class _CatalogHandle:
    def __init__(self, connection: CatalogConnection) -> None:
        self._connection = connection
        self._closed = False

    def close(self) -> None:
        if not self._closed:
            logger.debug("Released %s", type(self).__name__)
        self._closed = True

    def __enter__(self) -> Any:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    @property
    def _files(self) -> CatalogFiles:
        if self._closed:
            raise TransportError(f"{type(self).__name__} is closed")
        return self._connection.files


class CatalogBackupAdmin(_CatalogHandle):
    def submit_backup(self, request: BackupRequest) -> str:
        files = self._files
        sessions = files.read_sessions()
        known_ids = {info.backup_id for info in sessions}

        prefix = request.backup_set_name or "backup"
        millis = self._connection.clock.now_millis()
        backup_id = f"{prefix}_{millis}"
        while backup_id in known_ids:
            millis += 1
            backup_id = f"{prefix}_{millis}"

        tables = request.tables
        if request.backup_set_name:
            tables = files.read_sets().get(request.backup_set_name, [])
            if not tables:
                raise TransportError(
                    f"Backup set '{request.backup_set_name}' is either empty or does not exist"
                )

        info = BackupInfo(
            backup_id=backup_id,
            backup_type=request.backup_type,
            tables=tuple(tables),
            target_root_dir=request.target_root_dir,
            state=BackupState.RUNNING,
            progress=0,
            start_ts=millis,
        )
        write_json_atomic(
            Path(request.target_root_dir).expanduser() / backup_id / MANIFEST_NAME,
            {
                **info.to_dict(),
                "workers": request.workers,
                "bandwidth": request.bandwidth,
            },
        )
        sessions.append(info)
        files.write_sessions(sessions)
        logger.info("Recorded %s backup session %s", request.backup_type.value, backup_id)
        return backup_id

    def delete_backups(self, backup_ids: list[str]) -> int:
        files = self._files
        requested = set(backup_ids)
        kept: list[BackupInfo] = []
        deleted: list[BackupInfo] = []
        for info in files.read_sessions():
            (deleted if info.backup_id in requested else kept).append(info)

        if deleted:
            files.write_sessions(kept)

        for info in deleted:
            logger.info("Deleted backup session %s", info.backup_id)
            image_dir = Path(info.target_root_dir).expanduser() / info.backup_id
            if not image_dir.exists():
                continue
            try:
                shutil.rmtree(image_dir)
            except OSError as exc:
                logger.warning("Could not remove backup image %s: %s", image_dir, exc)
        return len(deleted)

    def list_backup_sets(self) -> list[BackupSet]:
        sets = self._files.read_sets()
        return [BackupSet(name, tuple(tables)) for name, tables in sorted(sets.items())]

    def delete_backup_set(self, name: str) -> bool:
        files = self._files
        sets = files.read_sets()
        if name not in sets:
            return False
        del sets[name]
        files.write_sets(sets)
        return True

    def add_to_backup_set(self, name: str, tables: Iterable[str]) -> None:
        files = self._files
        sets = files.read_sets()
        members = sets.setdefault(name, [])
        for table in tables:
            if table not in members:
                members.append(table)
        files.write_sets(sets)

    def remove_from_backup_set(self, name: str, tables: Iterable[str]) -> None:
        files = self._files
        sets = files.read_sets()
        if name not in sets:
            logger.debug("Backup set %s does not exist, nothing to remove", name)
            return
        removed = set(tables)
        remaining = [table for table in sets[name] if table not in removed]
        if remaining:
            sets[name] = remaining
        else:
            del sets[name]
        files.write_sets(sets)


class CatalogMetadataStore(_CatalogHandle):
    def read_backup_info(self, backup_id: str | None) -> BackupInfo | None:
        sessions = self._files.read_sessions()
        if backup_id is not None:
            return next((info for info in sessions if info.backup_id == backup_id), None)

        running = [info for info in sessions if info.state is BackupState.RUNNING]
        candidates = running or sessions
        if not candidates:
            return None
        return max(candidates, key=lambda info: info.start_ts)

    def describe_backup_set(self, name: str) -> list[str] | None:
        return self._files.read_sets().get(name)

    def get_backup_history(self, limit: int, *filters: HistoryFilter) -> list[BackupInfo]:
        sessions = sorted(self._files.read_sessions(), key=lambda info: info.start_ts, reverse=True)
        return apply_filters(sessions, filters)[: max(limit, 0)]


class CatalogConnection:
    def __init__(self, config: BackupConfig, clock: ClockProtocol) -> None:
        self.clock = clock
        self._files = CatalogFiles(config.catalog_dir)
        self._files.ensure_exists()
        self._closed = False
        logger.debug("Opened backup catalog at %s", config.catalog_dir)

    @property
    def files(self) -> CatalogFiles:
        if self._closed:
            raise TransportError("Connection is closed")
        return self._files

    def backup_admin(self) -> CatalogBackupAdmin:
        return CatalogBackupAdmin(self)

    def metadata_store(self) -> CatalogMetadataStore:
        return CatalogMetadataStore(self)

    def close(self) -> None:
        if not self._closed:
            logger.debug("Closed backup catalog connection")
        self._closed = True

    def __enter__(self) -> CatalogConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
