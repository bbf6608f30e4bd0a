# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete backends,
so SQLite/JSON storage stays swappable and tests can use in-memory fakes.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """
    Synchronous key-value persistence.

    read() returns None when the key was never written.
    Both methods raise PersistenceUnavailableError when the backend fails.
    """

    def read(self, key: str) -> str | None: ...
    def write(self, key: str, text: str) -> None: ...
