# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.task_models import Task
from ..tasks.task_query import ViewOptions, view_with
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in command handlers.
    settings: object

    task_store: TaskStore

    # Current filter/sort selection, passed explicitly into every view.
    view_options: ViewOptions = field(default_factory=ViewOptions)

    # Ids of the tasks in the last rendered view, in display order.
    # "/edit 2" means the second entry here.
    last_view_ids: list[str] = field(default_factory=list)

    def current_view(self) -> list[Task]:
        tasks = view_with(self.task_store.tasks, self.view_options)
        self.last_view_ids = [t.id for t in tasks]
        return tasks

    def store_index_for(self, view_number: int) -> int:
        """
        Map a 1-based number from the last displayed view to a store position.

        Raises IndexError when the number is not in the last view,
        KeyError when the task was removed since it was displayed.
        """
        if not 1 <= view_number <= len(self.last_view_ids):
            raise IndexError(view_number)
        return self.task_store.index_of(self.last_view_ids[view_number - 1])
