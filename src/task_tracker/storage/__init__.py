"""
Persistence backends for the task snapshot.

- sqlite_kv.py: SQLite table with one row per key (default)
- json_kv.py: single JSON file, closest to browser localStorage
"""

from __future__ import annotations

from pathlib import Path

from ..core.ports import KeyValueStore
from .json_kv import JsonFileKeyValueStore
from .sqlite_kv import SqliteKeyValueStore

BACKENDS = ("sqlite", "json")


def open_kv_store(settings) -> KeyValueStore:
    backend = str(getattr(settings, "storage_backend", "sqlite")).lower()
    if backend == "json":
        return JsonFileKeyValueStore(Path(settings.json_path))
    if backend == "sqlite":
        return SqliteKeyValueStore(Path(settings.db_path))
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {', '.join(BACKENDS)})")


__all__ = ["BACKENDS", "JsonFileKeyValueStore", "SqliteKeyValueStore", "open_kv_store"]
