# src/task_tracker/cli/render.py

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Task
from ..tasks.task_query import ViewOptions

NO_SUMMARY = "No summary provided."
NO_DEADLINE = "No deadline set."
NO_TASKS = "You have no tasks"


def format_task_card(number: int, task: Task) -> str:
    return "\n".join(
        [
            f"{number}. {task.title}",
            f"   {task.summary or NO_SUMMARY}",
            f"   State: {task.state}",
            f"   Deadline: {task.deadline or NO_DEADLINE}",
        ]
    )


def format_task_list(tasks: Sequence[Task]) -> str:
    if not tasks:
        return NO_TASKS
    return "\n\n".join(format_task_card(i, t) for i, t in enumerate(tasks, start=1))


def describe_view(options: ViewOptions) -> str:
    flt = options.filter_state or "all"
    srt = options.sort_key or "stored order"
    if options.sort_key and options.sort_key != "deadline":
        srt = f'"{options.sort_key}" first'
    return f"filter: {flt}; sort: {srt}"
