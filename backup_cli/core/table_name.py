from __future__ import annotations

import re
from pathlib import Path


class TableNameParser:
    _pattern = re.compile(r"^(?:[A-Za-z0-9_]+:)?[A-Za-z0-9_][A-Za-z0-9_.\-]*$")

    @classmethod
    def parse(cls, value: str) -> str:
        name = value.strip()
        if not cls._pattern.match(name):
            raise ValueError(f"Illegal table name: {value!r}")
        return name

    @classmethod
    def parse_list(cls, value: str) -> list[str]:
        names = [cls.parse(item) for item in value.split(",") if item.strip()]
        if not names:
            raise ValueError(f"No table names in: {value!r}")
        return names


def parse_root_path(value: str) -> Path:
    if not value.strip() or "\x00" in value:
        raise ValueError(f"Illegal backup root path: {value!r}")
    return Path(value).expanduser()
