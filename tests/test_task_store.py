# tests/test_task_store.py

from __future__ import annotations

import dataclasses

import pytest

from task_tracker.tasks.errors import (
    IndexOutOfRangeError,
    PersistenceUnavailableError,
    TaskValidationError,
)
from task_tracker.tasks.task_models import Task, TaskState, decode_tasks
from task_tracker.tasks.task_store import TaskStore

from .fakes import FakeKeyValueStore


def _persisted(kv: FakeKeyValueStore) -> list[Task]:
    return decode_tasks(kv.data.get("tasks"))


def test_load_empty_when_nothing_persisted(store: TaskStore) -> None:
    assert store.tasks == []
    assert len(store) == 0


def test_load_degrades_to_empty_on_malformed_snapshot(kv: FakeKeyValueStore) -> None:
    kv.data["tasks"] = "{not json"
    s = TaskStore(kv)
    assert s.load() == []


def test_load_degrades_to_empty_on_unreadable_backend(kv: FakeKeyValueStore) -> None:
    kv.data["tasks"] = "[]"
    kv.fail_reads = True
    s = TaskStore(kv)
    assert s.load() == []


def test_load_replaces_in_memory_sequence(kv: FakeKeyValueStore, sample_tasks: list[Task]) -> None:
    s = TaskStore(kv)
    s.create(Task(title="stale"))
    other = TaskStore(kv)
    other.replace_all(sample_tasks)

    s.load()
    assert s.tasks == sample_tasks


def test_create_appends_and_writes_through(
    store: TaskStore, kv: FakeKeyValueStore, sample_tasks: list[Task]
) -> None:
    for i, t in enumerate(sample_tasks):
        before = len(store)
        pos = store.create(t)
        assert pos == i
        assert len(store) == before + 1
        assert store.tasks[-1] == t
        assert _persisted(kv) == store.tasks


def test_update_replaces_at_position(
    store: TaskStore, kv: FakeKeyValueStore, sample_tasks: list[Task]
) -> None:
    store.replace_all(sample_tasks)
    edited = Task(title="Call plumber again", state=TaskState.DOING, id=sample_tasks[1].id)

    store.update(1, edited)

    assert store.get(1) == edited
    assert store.tasks[0] == sample_tasks[0]
    assert store.tasks[2] == sample_tasks[2]
    assert _persisted(kv) == store.tasks


def test_delete_removes_and_shifts(
    store: TaskStore, kv: FakeKeyValueStore, sample_tasks: list[Task]
) -> None:
    store.replace_all(sample_tasks)

    removed = store.delete(1)

    assert removed == sample_tasks[1]
    assert len(store) == 2
    assert store.tasks == [sample_tasks[0], sample_tasks[2]]
    assert _persisted(kv) == store.tasks


@pytest.mark.parametrize("index", [3, 10, -1])
def test_update_and_delete_out_of_range(
    store: TaskStore, kv: FakeKeyValueStore, sample_tasks: list[Task], index: int
) -> None:
    store.replace_all(sample_tasks)
    writes_before = len(kv.writes)

    with pytest.raises(IndexOutOfRangeError):
        store.update(index, Task(title="x"))
    with pytest.raises(IndexOutOfRangeError):
        store.delete(index)

    assert store.tasks == sample_tasks
    assert len(kv.writes) == writes_before


def test_out_of_range_is_an_index_error(store: TaskStore) -> None:
    with pytest.raises(IndexError):
        store.delete(0)


def test_failed_write_leaves_memory_unchanged(
    store: TaskStore, kv: FakeKeyValueStore, sample_tasks: list[Task]
) -> None:
    store.replace_all(sample_tasks)
    kv.fail_writes = True

    with pytest.raises(PersistenceUnavailableError):
        store.create(Task(title="lost"))
    with pytest.raises(PersistenceUnavailableError):
        store.update(0, Task(title="lost"))
    with pytest.raises(PersistenceUnavailableError):
        store.delete(0)

    assert store.tasks == sample_tasks
    assert _persisted(kv) == sample_tasks


def test_write_through_over_mixed_operations(store: TaskStore, kv: FakeKeyValueStore) -> None:
    ops = [
        lambda: store.create(Task(title="a")),
        lambda: store.create(Task(title="b", deadline="2024-02-02")),
        lambda: store.update(0, Task(title="a2", state=TaskState.DONE)),
        lambda: store.create(Task(title="c", summary="third")),
        lambda: store.delete(1),
        lambda: store.delete(0),
    ]
    for op in ops:
        op()
        assert _persisted(kv) == store.tasks

    assert [t.title for t in store.tasks] == ["c"]


def test_validation_rejects_blank_title_and_bad_deadline(store: TaskStore) -> None:
    with pytest.raises(TaskValidationError):
        store.create(Task(title="   "))
    with pytest.raises(TaskValidationError):
        store.create(Task(title="ok", deadline="2024-02-30"))
    with pytest.raises(TaskValidationError):
        store.create(Task(title="ok", deadline="tomorrow"))
    with pytest.raises(TaskValidationError):
        store.replace_all([Task(title="ok"), Task(title="")])

    assert store.tasks == []


def test_validation_can_be_disabled(kv: FakeKeyValueStore) -> None:
    s = TaskStore(kv, validate=False)
    s.create(Task(title="", deadline="soon"))
    assert len(s) == 1
    assert s.get(0).deadline == "soon"
    assert decode_tasks(kv.data["tasks"]) == s.tasks

    reloaded = TaskStore(kv, validate=False)
    assert reloaded.load() == s.tasks


def test_custom_key(kv: FakeKeyValueStore) -> None:
    s = TaskStore(kv, key="work")
    s.create(Task(title="x"))
    assert "work" in kv.data
    assert "tasks" not in kv.data


def test_index_of_and_tasks_is_a_copy(store: TaskStore, sample_tasks: list[Task]) -> None:
    store.replace_all(sample_tasks)
    assert store.index_of(sample_tasks[2].id) == 2
    with pytest.raises(KeyError):
        store.index_of("missing")

    snapshot = store.tasks
    snapshot.clear()
    assert len(store) == 3


def test_create_accepts_raw_state_string(store: TaskStore, kv: FakeKeyValueStore) -> None:
    store.create(Task(title="x", state="Doing right now"))
    assert store.get(0).state is TaskState.DOING
    assert _persisted(kv) == store.tasks


def test_returned_tasks_cannot_change_memory_behind_the_store(
    store: TaskStore, kv: FakeKeyValueStore
) -> None:
    store.create(Task(title="a"))
    with pytest.raises(dataclasses.FrozenInstanceError):
        store.tasks[0].title = "mutated"
    assert store.get(0).title == "a"
    assert _persisted(kv) == store.tasks
