# src/task_tracker/tasks/task_models.py

from __future__ import annotations

import json
import logging
import re
import uuid
from dataclasses import dataclass, field
from datetime import date
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TaskState(StrEnum):
    """
    Task state as shown to the user.

    Values are the exact labels persisted in the snapshot. Any state may be set
    to any other state by an edit; there are no enforced transitions.
    """

    DONE = "Done"
    NOT_DONE = "Not done"
    DOING = "Doing right now"

    @classmethod
    def from_raw(cls, raw: str | None) -> TaskState:
        if not raw:
            return cls.NOT_DONE
        try:
            return cls(raw)
        except ValueError:
            return cls.NOT_DONE


DEADLINE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def new_task_id() -> str:
    return uuid.uuid4().hex


def parse_deadline(raw: str | None) -> date | None:
    """Parse a YYYY-MM-DD deadline. Returns None when absent or not a real date."""
    if not raw:
        return None
    raw = raw.strip()
    if not DEADLINE_RE.match(raw):
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Task:
    title: str
    summary: str = ""
    state: TaskState = TaskState.NOT_DONE
    deadline: str | None = None

    id: str = field(default_factory=new_task_id)

    def __post_init__(self) -> None:
        # Raw form values are normalized here so that encode -> decode is exact.
        object.__setattr__(self, "title", self.title or "")
        object.__setattr__(self, "state", TaskState(self.state))
        object.__setattr__(self, "summary", self.summary or "")
        object.__setattr__(self, "deadline", self.deadline or None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "summary": self.summary,
            "state": self.state.value,
            "deadline": self.deadline,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        """
        Build a Task from a snapshot record.

        Lenient with older snapshots:
        - missing id -> a fresh one
        - unknown state -> "Not done"
        - empty deadline -> None
        """
        tid = raw.get("id")
        deadline = raw.get("deadline")
        return cls(
            title=str(raw.get("title") or ""),
            summary=str(raw.get("summary") or ""),
            state=TaskState.from_raw(raw.get("state")),
            deadline=str(deadline) if deadline else None,
            id=str(tid) if tid else new_task_id(),
        )


def encode_tasks(tasks: list[Task]) -> str:
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(text: str | None) -> list[Task]:
    """
    Decode a snapshot. Malformed input is treated as "no data" and yields [].

    Entries that are not objects are skipped. A blank title is kept: the store
    holds one when validation is off, and it must survive a reload.
    """
    if not text:
        return []
    try:
        data = json.loads(text)
    except ValueError:
        logger.warning("Task snapshot is not valid JSON; treating as empty.")
        return []

    if not isinstance(data, list):
        logger.warning("Task snapshot is not a list (got %s); treating as empty.", type(data).__name__)
        return []

    out: list[Task] = []
    for raw in data:
        if not isinstance(raw, dict):
            logger.debug("Skipping malformed task record: %r", raw)
            continue
        out.append(Task.from_dict(raw))
    return out
