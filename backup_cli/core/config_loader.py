from __future__ import annotations

import os
from pathlib import Path

from .backup_config import BackupConfig

ENV_FILE_VARIABLE = "BACKUP_ENV_FILE"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigLoader:
    def __init__(self, config_home: Path | None = None) -> None:
        self._config_home = config_home or Path.home() / ".config" / "backup-cli"

    @property
    def default_env_file(self) -> Path:
        override = os.environ.get(ENV_FILE_VARIABLE)
        if override:
            return Path(override).expanduser()
        return self._config_home / "backup.env"

    def load(self, env_path: str | None = None) -> BackupConfig:
        env_file = Path(env_path).expanduser() if env_path else self.default_env_file
        if not env_file.is_file():
            raise SystemExit(
                f"Missing env file: {env_file}\n"
                "Create it from: config/backup.env.example"
            )

        env_values = self._parse_env_file(env_file)
        self._validate_required(env_values)

        log_level = env_values.get("LOG_LEVEL", "WARNING").upper()
        if log_level not in VALID_LOG_LEVELS:
            raise SystemExit(f"Invalid LOG_LEVEL: {log_level}")

        return BackupConfig(
            env_file=env_file,
            catalog_dir=self._resolve_path(env_values["BACKUP_CATALOG_DIR"], env_file),
            connection_factory=env_values.get("BACKUP_CONNECTION_FACTORY") or None,
            log_level=log_level,
        )

    def _parse_env_file(self, env_file: Path) -> dict[str, str]:
        values: dict[str, str] = {}
        for raw_line in env_file.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            cleaned = value.strip().strip('"').strip("'")
            values[key.strip()] = os.path.expandvars(cleaned)
        return values

    def _validate_required(self, env_values: dict[str, str]) -> None:
        required = ["BACKUP_CATALOG_DIR"]
        missing = [name for name in required if not env_values.get(name)]
        if missing:
            missing_str = ", ".join(missing)
            raise SystemExit(f"Missing required config values: {missing_str}")

    def _resolve_path(self, value: str, env_file: Path) -> Path:
        resolved = Path(value).expanduser()
        if not resolved.is_absolute():
            resolved = env_file.parent / resolved
        return resolved
