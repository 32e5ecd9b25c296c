"""JSON persistence for harvested profile and merged records."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterator, Mapping

from hattrick_harvester.models import PLAYER_ID_KEY, ProfileRecord


logger = logging.getLogger(__name__)

DATA_DIR_ENV = "HATTRICK_HARVEST_DIR"


class RecordStoreError(OSError):
    """Raised when a record file cannot be read or written."""


class RecordStore:
    """Directory of ``<key>.json`` files, one record per file."""

    def __init__(self, root: Path | str | None = None):
        if root is None:
            env_root = os.getenv(DATA_DIR_ENV)
            root = Path(env_root) if env_root else Path.cwd()
        self.root = Path(root)

    def path_for(self, key: str) -> Path:
        if not key:
            raise ValueError("record key cannot be empty")
        return self.root / f"{key}.json"

    def save(self, payload: Mapping[str, Any], key: str) -> Path:
        path = self.path_for(key)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(dict(payload), indent=4, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            raise RecordStoreError(f"Failed to write to file {str(path)!r}: {exc}") from exc
        logger.info("Saved record to %s", path)
        return path

    def save_profile(self, record: ProfileRecord) -> Path:
        if record.player_id is None:
            raise ValueError(f"profile has no {PLAYER_ID_KEY}; refusing to store it")
        return self.save(record.to_payload(), str(record.player_id))

    def load(self, path: Path | str) -> Dict[str, Any]:
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise RecordStoreError(f"Failed to load JSON file {str(path)!r}: {exc}") from exc
        if not isinstance(data, dict):
            raise RecordStoreError(f"JSON file {str(path)!r} does not hold an object")
        return data

    def iter_paths(self) -> Iterator[Path]:
        if not self.root.is_dir():
            return iter(())
        return iter(sorted(self.root.glob("*.json")))


__all__ = ["DATA_DIR_ENV", "RecordStore", "RecordStoreError"]
