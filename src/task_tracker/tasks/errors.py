# src/task_tracker/tasks/errors.py

from __future__ import annotations


class TaskStoreError(Exception):
    """Base class for task store failures."""


class IndexOutOfRangeError(TaskStoreError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Task position {index} is out of range (have {size} tasks)")
        self.index = index
        self.size = size


class TaskValidationError(TaskStoreError, ValueError):
    """A task failed boundary validation (blank title, bad deadline)."""


class PersistenceUnavailableError(TaskStoreError, RuntimeError):
    """The key-value store could not be read or written."""
