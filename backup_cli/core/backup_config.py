from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class BackupConfig:
    env_file: Path
    catalog_dir: Path
    connection_factory: str | None
    log_level: str
