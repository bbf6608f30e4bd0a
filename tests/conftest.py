# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_tracker.core.state import AppState
from task_tracker.storage import SqliteKeyValueStore
from task_tracker.tasks.task_models import Task, TaskState
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any .env file.
    """
    return SimpleNamespace(
        app_name="tracker-test",
        log_level="DEBUG",
        console_enabled=False,
        storage_backend="sqlite",
        storage_key="tasks",
        validate_input=True,
        data_dir=tmp_path,
        db_path=tmp_path / "tasks.sqlite3",
        json_path=tmp_path / "tasks.json",
    )


@pytest.fixture()
def kv() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture()
def store(kv: FakeKeyValueStore) -> TaskStore:
    s = TaskStore(kv)
    s.load()
    return s


@pytest.fixture()
def sample_tasks() -> list[Task]:
    return [
        Task(title="Write report", summary="Q2 numbers", state=TaskState.NOT_DONE, deadline="2024-05-01"),
        Task(title="Call plumber", state=TaskState.DONE, deadline="2024-01-10"),
        Task(title="Refactor parser", summary="split tokenizer", state=TaskState.DOING, deadline="2024-03-15"),
    ]


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired with a real SQLite key-value store in tmp_path.
    """
    task_store = TaskStore(SqliteKeyValueStore(settings.db_path))
    task_store.load()
    return AppState(settings=settings, task_store=task_store)
