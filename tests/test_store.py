"""Tests for the in-memory todo store."""

import threading

import pytest

from todo_manager.todos import (
    NotFoundError,
    Priority,
    TodoPatch,
    TodoStore,
    ValidationError,
)


class TestCreate:
    """Tests for TodoStore.create()."""

    def test_create_returns_id_and_defaults(self, store):
        todo_id = store.create("Write report")
        todo = store.get(todo_id)
        assert todo.id == todo_id
        assert todo.title == "Write report"
        assert todo.description is None
        assert todo.completed is False
        assert todo.priority == Priority.MEDIUM
        assert todo.tags == []
        assert todo.created_at == todo.updated_at

    def test_ids_are_sequential_with_prefix(self, store):
        assert store.create("One") == "todo-1"
        assert store.create("Two") == "todo-2"

    def test_custom_prefix(self):
        store = TodoStore(id_prefix="task")
        assert store.create("One") == "task-1"

    def test_n_creates_yield_n_distinct_ids(self, store):
        ids = [store.create(f"Task {i}") for i in range(25)]
        assert len(set(ids)) == 25
        assert len(store.list()) == 25

    def test_title_is_trimmed(self, store):
        todo_id = store.create("  Buy groceries  ")
        assert store.get(todo_id).title == "Buy groceries"

    @pytest.mark.parametrize("title", ["", "   ", "\n\t"])
    def test_empty_title_rejected(self, store, title):
        with pytest.raises(ValidationError, match="Title cannot be empty"):
            store.create(title)
        assert store.is_empty()

    def test_invalid_priority_rejected(self, store):
        with pytest.raises(ValidationError) as exc_info:
            store.create("Task", priority="urgent")
        assert "urgent" in exc_info.value.message
        assert exc_info.value.error_code == "VALIDATION_FAILED"
        assert store.is_empty()

    def test_priority_accepts_enum_and_string(self, store):
        high = store.create("High", priority=Priority.HIGH)
        low = store.create("Low", priority="low")
        assert store.get(high).priority == Priority.HIGH
        assert store.get(low).priority == Priority.LOW

    def test_tags_keep_order_and_duplicates(self, store):
        todo_id = store.create("Tagged", tags=["b", "a", "b"])
        assert store.list()[0].tags == ["b", "a", "b"]
        assert store.get(todo_id).tags == ["b", "a", "b"]

    def test_tags_are_copied_from_input(self, store):
        tags = ["a", "b"]
        todo_id = store.create("Tagged", tags=tags)
        tags.append("c")
        assert store.get(todo_id).tags == ["a", "b"]

    def test_non_string_tags_rejected(self, store):
        with pytest.raises(ValidationError):
            store.create("Task", tags=["ok", 3])
        with pytest.raises(ValidationError):
            store.create("Task", tags="not-a-list")


class TestGetAndList:
    """Tests for lookups and snapshots."""

    def test_get_missing_raises(self, store):
        with pytest.raises(NotFoundError) as exc_info:
            store.get("todo-99")
        assert exc_info.value.todo_id == "todo-99"
        assert exc_info.value.error_code == "NOT_FOUND"

    def test_get_returns_copy(self, store):
        todo_id = store.create("Task", tags=["a"])
        todo = store.get(todo_id)
        todo.title = "Changed"
        todo.tags.append("b")
        fresh = store.get(todo_id)
        assert fresh.title == "Task"
        assert fresh.tags == ["a"]

    def test_list_is_snapshot(self, store):
        first = store.create("First")
        snapshot = store.list()
        store.create("Second")
        store.update(first, TodoPatch(completed=True))
        assert len(snapshot) == 1
        assert snapshot[0].completed is False

    def test_list_empty(self, store):
        assert store.list() == []
        assert len(store) == 0


class TestUpdate:
    """Tests for partial updates."""

    def test_updates_only_supplied_fields(self, store):
        todo_id = store.create("Task", description="desc", priority="low", tags=["a"])
        updated = store.update(todo_id, TodoPatch(completed=True))
        assert updated.completed is True
        assert updated.title == "Task"
        assert updated.description == "desc"
        assert updated.priority == Priority.LOW
        assert updated.tags == ["a"]

    def test_updates_every_field(self, store):
        todo_id = store.create("Task")
        updated = store.update(
            todo_id,
            TodoPatch(
                title="Renamed",
                description="new",
                completed=True,
                priority="high",
                tags=["x", "y"],
            ),
        )
        assert updated.title == "Renamed"
        assert updated.description == "new"
        assert updated.completed is True
        assert updated.priority == Priority.HIGH
        assert updated.tags == ["x", "y"]

    def test_empty_patch_only_touches_updated_at(self, store):
        todo_id = store.create("Task", description="d", tags=["a"])
        before = store.get(todo_id)
        after = store.update(todo_id, TodoPatch())
        assert after.updated_at >= before.updated_at
        assert after.created_at == before.created_at
        assert (after.title, after.description, after.completed, after.priority, after.tags) == (
            before.title,
            before.description,
            before.completed,
            before.priority,
            before.tags,
        )

    def test_created_at_never_after_updated_at(self, store):
        todo_id = store.create("Task")
        for _ in range(5):
            todo = store.update(todo_id, TodoPatch(completed=True))
            assert todo.created_at <= todo.updated_at

    def test_description_none_clears(self, store):
        todo_id = store.create("Task", description="desc")
        assert store.update(todo_id, TodoPatch(description=None)).description is None

    def test_update_missing_raises_and_leaves_store_unchanged(self, store):
        store.create("Task")
        before = [t.to_dict() for t in store.list()]
        with pytest.raises(NotFoundError):
            store.update("todo-42", TodoPatch(title="x"))
        assert [t.to_dict() for t in store.list()] == before

    def test_invalid_patch_is_all_or_nothing(self, store):
        todo_id = store.create("Task", priority="low")
        before = store.get(todo_id)
        with pytest.raises(ValidationError):
            store.update(todo_id, TodoPatch(completed=True, priority="urgent"))
        after = store.get(todo_id)
        assert after.completed is False
        assert after.priority == Priority.LOW
        assert after.updated_at == before.updated_at

    def test_empty_title_rejected(self, store):
        todo_id = store.create("Task")
        with pytest.raises(ValidationError):
            store.update(todo_id, TodoPatch(title="  ", completed=True))
        assert store.get(todo_id).title == "Task"
        assert store.get(todo_id).completed is False

    def test_non_bool_completed_rejected(self, store):
        todo_id = store.create("Task")
        with pytest.raises(ValidationError):
            store.update(todo_id, TodoPatch(completed="yes"))


class TestDelete:
    """Tests for TodoStore.delete()."""

    def test_delete_returns_record(self, store):
        todo_id = store.create("Task")
        removed = store.delete(todo_id)
        assert removed.id == todo_id
        assert removed.title == "Task"
        assert todo_id not in store
        assert store.is_empty()

    def test_delete_missing_raises(self, store):
        store.create("Task")
        with pytest.raises(NotFoundError):
            store.delete("todo-7")
        assert len(store) == 1

    def test_delete_twice_raises(self, store):
        todo_id = store.create("Task")
        store.delete(todo_id)
        with pytest.raises(NotFoundError):
            store.delete(todo_id)

    def test_ids_not_reused_after_delete(self, store):
        first = store.create("First")
        store.delete(first)
        second = store.create("Second")
        assert second != first
        assert second == "todo-2"

    def test_ids_not_reused_after_clear(self, store):
        store.create("First")
        store.clear()
        assert store.is_empty()
        assert store.create("Second") == "todo-2"


class TestNonStringIds:
    """Ids that are not strings are rejected before any lookup."""

    @pytest.mark.parametrize("bad_id", [["todo-1"], {"id": "todo-1"}, 1, None])
    def test_get_update_delete_reject_non_string(self, store, bad_id):
        store.create("Task")
        with pytest.raises(ValidationError) as exc_info:
            store.get(bad_id)
        assert exc_info.value.details == {"field": "id"}
        with pytest.raises(ValidationError):
            store.update(bad_id, TodoPatch(completed=True))
        with pytest.raises(ValidationError):
            store.delete(bad_id)
        assert store.get("todo-1").completed is False
        assert len(store) == 1

    def test_contains_non_string(self, store):
        store.create("Task")
        assert ["todo-1"] not in store


class TestConcurrency:
    """Concurrent access must not lose records or expose partial writes."""

    def test_concurrent_creates(self, store):
        def worker(n: int) -> None:
            for i in range(50):
                store.create(f"Task {n}-{i}")

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        todos = store.list()
        assert len(todos) == 400
        assert len({t.id for t in todos}) == 400

    def test_readers_never_see_partial_update(self, store):
        old = ("Alpha", ["a", "a2"])
        new = ("Beta", ["b", "b2"])
        todo_id = store.create(old[0], tags=old[1])
        done = threading.Event()
        seen: list[tuple[str, list[str]]] = []

        def writer() -> None:
            for i in range(500):
                title, tags = new if i % 2 == 0 else old
                store.update(todo_id, TodoPatch(title=title, tags=tags))
            done.set()

        def reader() -> None:
            while True:
                finished = done.is_set()
                for todo in store.list():
                    seen.append((todo.title, todo.tags))
                if finished:
                    break

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert seen
        assert all(snapshot in (old, new) for snapshot in seen)
