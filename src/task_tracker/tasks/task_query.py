# src/task_tracker/tasks/task_query.py

"""
Derived (filtered / sorted) views over the task sequence.

Views are computed fresh on every call and never mutate the input list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date

from .task_models import Task, TaskState, parse_deadline

DEADLINE = "deadline"

SortKey = TaskState | str

_STATE_ALIASES: dict[str, TaskState] = {
    "done": TaskState.DONE,
    "not done": TaskState.NOT_DONE,
    "not-done": TaskState.NOT_DONE,
    "todo": TaskState.NOT_DONE,
    "doing": TaskState.DOING,
    "doing right now": TaskState.DOING,
}


@dataclass(frozen=True, slots=True)
class ViewOptions:
    filter_state: TaskState | None = None
    sort_key: SortKey | None = None


def parse_state(raw: str) -> TaskState:
    """Case-insensitive state lookup; accepts the labels and short aliases (done/todo/doing)."""
    key = " ".join(raw.strip().lower().split())
    try:
        return _STATE_ALIASES[key]
    except KeyError:
        raise ValueError(f"Unknown state: {raw!r}") from None


def parse_sort_key(raw: str) -> SortKey:
    if raw.strip().lower() == DEADLINE:
        return DEADLINE
    return parse_state(raw)


def _deadline_key(task: Task) -> tuple[bool, date]:
    # Tasks without a valid deadline go last.
    d = parse_deadline(task.deadline)
    return (d is None, d or date.max)


def view(
    tasks: Sequence[Task],
    filter_state: TaskState | None = None,
    sort_key: SortKey | None = None,
) -> list[Task]:
    """
    Filter first, then sort.

    - filter_state: keep only tasks in that state
    - sort_key == "deadline": ascending deadline, missing/invalid deadlines last
    - sort_key == a state: stable partition, tasks in that state first
    """
    out = list(tasks)

    if filter_state is not None:
        out = [t for t in out if t.state == filter_state]

    if sort_key is None or not out:
        return out

    if sort_key == DEADLINE:
        return sorted(out, key=_deadline_key)

    try:
        target = TaskState(sort_key)
    except ValueError:
        raise ValueError(f"Unknown sort key: {sort_key!r}") from None
    return sorted(out, key=lambda t: t.state != target)


def view_with(tasks: Sequence[Task], options: ViewOptions) -> list[Task]:
    return view(tasks, filter_state=options.filter_state, sort_key=options.sort_key)
