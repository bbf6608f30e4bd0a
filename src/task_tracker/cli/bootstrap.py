# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the configured key-value backend into TaskStore and loads the snapshot.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage import open_kv_store
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.json_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = open_kv_store(settings)
    store = TaskStore(
        kv,
        key=getattr(settings, "storage_key", "tasks"),
        validate=bool(getattr(settings, "validate_input", True)),
    )
    store.load()

    logger.info(
        "State ready backend=%s tasks=%d",
        getattr(settings, "storage_backend", "sqlite"),
        len(store),
    )
    return AppState(settings=settings, task_store=store)
