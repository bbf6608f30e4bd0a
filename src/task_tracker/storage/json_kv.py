# src/task_tracker/storage/json_kv.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

from ..tasks.errors import PersistenceUnavailableError

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore:
    """
    Key-value store backed by a single JSON object file: {"key": "text", ...}.

    Writes go to a temp file first and are moved into place with os.replace,
    so a crash never leaves a half-written file behind.
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFileKeyValueStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            raw = self._path.read_text("utf-8")
        except OSError as e:
            raise PersistenceUnavailableError(f"Failed to read {self._path}: {e}") from e
        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Corrupt key-value file %s; treating as empty.", self._path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def read(self, key: str) -> str | None:
        return self._read_all().get(key)

    def write(self, key: str, text: str) -> None:
        data = self._read_all()
        data[key] = text
        tmp = self._path.with_suffix(".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise PersistenceUnavailableError(f"Failed to write {self._path}: {e}") from e
        logger.debug("kv write key=%s path=%s", key, self._path)
