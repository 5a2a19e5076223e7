from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class BackupType(Enum):
    FULL = "full"
    INCREMENTAL = "incremental"

    @classmethod
    def parse(cls, token: str) -> BackupType:
        for member in cls:
            if member.value == token.strip().lower():
                return member
        raise ValueError(f"invalid backup type: {token}")


class BackupState(Enum):
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass
class BackupRequest:
    backup_type: BackupType
    target_root_dir: str
    tables: list[str] = field(default_factory=list)
    workers: int = -1
    bandwidth: int = -1
    backup_set_name: str | None = None

    def __post_init__(self) -> None:
        if self.tables and self.backup_set_name:
            raise ValueError(
                "A backup request takes either a table list or a backup set name, not both"
            )


@dataclass(frozen=True)
class BackupInfo:
    backup_id: str
    backup_type: BackupType
    tables: tuple[str, ...]
    target_root_dir: str
    state: BackupState = BackupState.RUNNING
    progress: int = 0
    start_ts: int = 0
    end_ts: int = 0

    @property
    def short_description(self) -> str:
        lines = [
            f"ID             : {self.backup_id}",
            f"Type           : {self.backup_type.name}",
            f"Tables         : {','.join(self.tables) or '(all)'}",
            f"State          : {self.state.value}",
            f"Start time     : {_format_ts(self.start_ts)}",
        ]
        if self.state is BackupState.RUNNING:
            lines.append(f"Progress       : {self.progress}%")
        else:
            lines.append(f"End time       : {_format_ts(self.end_ts)}")
        lines.append(f"Root dir       : {self.target_root_dir}")
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "backup_id": self.backup_id,
            "backup_type": self.backup_type.value,
            "tables": list(self.tables),
            "target_root_dir": self.target_root_dir,
            "state": self.state.value,
            "progress": self.progress,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> BackupInfo:
        return cls(
            backup_id=str(payload["backup_id"]),
            backup_type=BackupType(payload["backup_type"]),
            tables=tuple(str(name) for name in payload.get("tables", [])),
            target_root_dir=str(payload.get("target_root_dir", "")),
            state=BackupState(payload.get("state", BackupState.RUNNING.value)),
            progress=int(payload.get("progress", 0)),
            start_ts=int(payload.get("start_ts", 0)),
            end_ts=int(payload.get("end_ts", 0)),
        )


@dataclass(frozen=True)
class BackupSet:
    name: str
    tables: tuple[str, ...]

    def __str__(self) -> str:
        return f"{self.name}={{{','.join(self.tables)}}}"


HistoryFilter = Callable[[BackupInfo], bool]


def _format_ts(millis: int) -> str:
    if millis <= 0:
        return "-"
    moment = datetime.fromtimestamp(millis / 1000, tz=timezone.utc).astimezone()
    return moment.isoformat(timespec="seconds")
