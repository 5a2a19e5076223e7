from __future__ import annotations

import json
import logging
from pathlib import Path

from .catalog import MANIFEST_NAME
from .errors import TransportError
from .history_filters import apply_filters
from .models import BackupInfo, HistoryFilter

logger = logging.getLogger(__name__)


class BackupRootScanner:
    def find_history(
        self,
        root: Path,
        limit: int,
        *filters: HistoryFilter,
    ) -> list[BackupInfo]:
        if not root.is_dir():
            raise TransportError(f"Backup root does not exist: {root}")

        results: list[BackupInfo] = []
        for manifest in sorted(root.glob(f"*/{MANIFEST_NAME}")):
            info = self._read_manifest(manifest)
            if info is not None:
                results.append(info)
        results.sort(key=lambda item: item.start_ts, reverse=True)
        return apply_filters(results, filters)[: max(limit, 0)]

    def _read_manifest(self, manifest: Path) -> BackupInfo | None:
        try:
            payload = json.loads(manifest.read_text(encoding="utf-8"))
            return BackupInfo.from_dict(payload)
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Skipping unreadable backup manifest %s: %s", manifest, exc)
            return None
