# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from ..core.ports import KeyValueStore
from .errors import IndexOutOfRangeError, PersistenceUnavailableError, TaskValidationError
from .task_models import Task, decode_tasks, encode_tasks, parse_deadline

logger = logging.getLogger(__name__)

DEFAULT_KEY = "tasks"


def validate_task(task: Task) -> None:
    """Raise TaskValidationError for a blank title or a deadline that is not a YYYY-MM-DD date."""
    if not task.title or not task.title.strip():
        raise TaskValidationError("title is required")
    if task.deadline and parse_deadline(task.deadline) is None:
        raise TaskValidationError(f"deadline must be a YYYY-MM-DD date, got {task.deadline!r}")


class TaskStore:
    """
    Ordered, write-through task collection.

    Position is the address of a task for update/delete. Every mutation builds the
    new sequence aside, writes the full snapshot under one key, and only then swaps
    it into memory. If the write fails the in-memory sequence is left untouched,
    so memory and snapshot never diverge.
    """

    def __init__(self, kv: KeyValueStore, *, key: str = DEFAULT_KEY, validate: bool = True) -> None:
        self._kv = kv
        self._key = key
        self._validate = validate
        self._tasks: list[Task] = []

    # ---- read helpers ----

    @property
    def tasks(self) -> list[Task]:
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise KeyError(task_id)

    # ---- low-level helpers ----

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._tasks):
            raise IndexOutOfRangeError(index, len(self._tasks))

    def _check_task(self, task: Task) -> None:
        if self._validate:
            validate_task(task)

    def _commit(self, new_tasks: list[Task]) -> None:
        self._kv.write(self._key, encode_tasks(new_tasks))
        self._tasks = new_tasks

    # ---- public API ----

    def load(self) -> list[Task]:
        """
        Replace the in-memory sequence with the persisted snapshot.

        Missing, malformed or unreadable data yields an empty sequence; nothing is raised.
        """
        try:
            raw = self._kv.read(self._key)
        except PersistenceUnavailableError:
            logger.warning("Task snapshot unreadable (key=%s); starting empty.", self._key, exc_info=True)
            raw = None
        self._tasks = decode_tasks(raw)
        logger.info("TaskStore loaded key=%s total=%d", self._key, len(self._tasks))
        return self.tasks

    def create(self, task: Task) -> int:
        """Append task and persist. Returns its position."""
        self._check_task(task)
        self._commit([*self._tasks, task])
        logger.debug("Task created pos=%d id=%s state=%s", len(self._tasks) - 1, task.id, task.state)
        return len(self._tasks) - 1

    def update(self, index: int, task: Task) -> None:
        self._check_index(index)
        self._check_task(task)
        new_tasks = list(self._tasks)
        new_tasks[index] = task
        self._commit(new_tasks)
        logger.debug("Task updated pos=%d id=%s state=%s", index, task.id, task.state)

    def delete(self, index: int) -> Task:
        """Remove the task at index, shifting later tasks left. Returns the removed task."""
        self._check_index(index)
        new_tasks = list(self._tasks)
        removed = new_tasks.pop(index)
        self._commit(new_tasks)
        logger.debug("Task deleted pos=%d id=%s", index, removed.id)
        return removed

    def replace_all(self, tasks: Iterable[Task]) -> None:
        new_tasks = list(tasks)
        for t in new_tasks:
            self._check_task(t)
        self._commit(new_tasks)
        logger.debug("Tasks replaced total=%d", len(new_tasks))
