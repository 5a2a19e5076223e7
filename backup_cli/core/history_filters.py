from __future__ import annotations

from .models import BackupInfo, HistoryFilter


def table_filter(table: str | None) -> HistoryFilter:
    def accept(info: BackupInfo) -> bool:
        if table is None:
            return True
        return table in info.tables

    return accept


def backup_set_filter(set_name: str | None) -> HistoryFilter:
    # Sessions started from a backup set carry the set name as id prefix.
    def accept(info: BackupInfo) -> bool:
        if set_name is None:
            return True
        return info.backup_id.startswith(set_name)

    return accept


def apply_filters(infos: list[BackupInfo], filters: tuple[HistoryFilter, ...]) -> list[BackupInfo]:
    return [info for info in infos if all(accept(info) for accept in filters)]
