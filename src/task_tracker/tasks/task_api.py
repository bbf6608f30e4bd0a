# src/task_tracker/tasks/task_api.py

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import replace

from .task_models import Task, TaskState
from .task_query import parse_state
from .task_store import TaskStore

logger = logging.getLogger(__name__)

FORM_FIELDS = ("title", "summary", "state", "deadline")


def build_task(
    title: str | None,
    summary: str | None = None,
    state: str | TaskState | None = None,
    deadline: str | None = None,
    *,
    task_id: str | None = None,
) -> Task:
    """
    Turn raw form values into a Task.

    Blank summary/deadline become absent; blank state means "Not done".
    Unknown state text raises ValueError. Title is passed through as-is;
    the store decides whether a blank title is acceptable.
    """
    if isinstance(state, TaskState):
        st = state
    elif state and state.strip():
        st = parse_state(state)
    else:
        st = TaskState.NOT_DONE

    task = Task(
        title=(title or "").strip(),
        summary=(summary or "").strip(),
        state=st,
        deadline=(deadline or "").strip() or None,
    )
    if task_id:
        task = replace(task, id=task_id)
    return task


def create_or_edit_task(
    store: TaskStore,
    fields: Mapping[str, str | None],
    edit_index: int | None = None,
) -> int:
    """
    Save a task from form fields: append when edit_index is None,
    otherwise replace the task at that position (keeping its id).

    Returns the position of the saved task.
    """
    if edit_index is None:
        task = build_task(
            fields.get("title"),
            fields.get("summary"),
            fields.get("state"),
            fields.get("deadline"),
        )
        pos = store.create(task)
        logger.info("Task created pos=%d title=%r", pos, task.title)
        return pos

    current = store.get(edit_index)
    # Fields missing from the form keep their current values.
    task = build_task(
        fields["title"] if "title" in fields else current.title,
        fields["summary"] if "summary" in fields else current.summary,
        fields["state"] if "state" in fields else current.state,
        fields["deadline"] if "deadline" in fields else current.deadline,
        task_id=current.id,
    )
    store.update(edit_index, task)
    logger.info("Task edited pos=%d title=%r", edit_index, task.title)
    return edit_index
