"""In-memory todo store.

The store owns the authoritative collection of todos and mints their
ids. Records handed out are copies, so callers can filter, sort and
serialize them without racing later mutations.

Thread-safety:
- create/update/delete run under a single re-entrant lock
- get/list copy records under the same lock
"""

import itertools
import threading
from datetime import datetime, timezone

from todo_manager.logging import Loggers
from todo_manager.todos.errors import NotFoundError, ValidationError
from todo_manager.todos.models import (
    Priority,
    TodoItem,
    TodoPatch,
    normalize_description,
    normalize_tags,
    normalize_title,
)

logger = Loggers.store()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _check_id(todo_id: object) -> str:
    if not isinstance(todo_id, str):
        raise ValidationError("ID must be a string", {"field": "id"})
    return todo_id


class TodoStore:
    """In-memory todo store.

    Ids are ``<prefix>-<n>`` with n counting up from 1. The counter is
    never rewound, so an id is not reused after its todo is deleted.

    Example:
        >>> store = TodoStore()
        >>> todo_id = store.create("Buy groceries", priority="low", tags=["personal"])
        >>> store.update(todo_id, TodoPatch(completed=True)).completed
        True
    """

    def __init__(self, id_prefix: str = "todo") -> None:
        self._id_prefix = id_prefix
        self._items: dict[str, TodoItem] = {}
        self._counter = itertools.count(1)
        self._lock = threading.RLock()

    def _next_id(self) -> str:
        return f"{self._id_prefix}-{next(self._counter)}"

    def create(
        self,
        title: str,
        description: str | None = None,
        priority: Priority | str = Priority.MEDIUM,
        tags: list[str] | None = None,
    ) -> str:
        """Create a new todo.

        Args:
            title: Todo title; must be non-empty after trimming.
            description: Optional free-text description.
            priority: Priority level (low, medium, high).
            tags: Optional ordered tags; duplicates are kept.

        Returns:
            The id of the created todo.

        Raises:
            ValidationError: If the title is empty or a field is invalid.
        """
        title = normalize_title(title)
        description = normalize_description(description)
        priority = Priority.coerce(priority)
        tags = normalize_tags(tags)

        with self._lock:
            now = _utcnow()
            item = TodoItem(
                id=self._next_id(),
                title=title,
                description=description,
                priority=priority,
                tags=tags,
                created_at=now,
                updated_at=now,
            )
            self._items[item.id] = item

        logger.debug("todo_created", todo_id=item.id, priority=priority.value)
        return item.id

    def _lookup(self, todo_id: object) -> TodoItem:
        item = self._items.get(_check_id(todo_id))
        if item is None:
            raise NotFoundError(todo_id)
        return item

    def get(self, todo_id: str) -> TodoItem:
        """Get a copy of a todo by id.

        Raises:
            NotFoundError: If no todo has this id.
            ValidationError: If the id is not a string.
        """
        with self._lock:
            return self._lookup(todo_id).copy()

    def list(self) -> list[TodoItem]:
        """Return a snapshot of all todos in insertion order."""
        with self._lock:
            return [item.copy() for item in self._items.values()]

    def update(self, todo_id: str, patch: TodoPatch) -> TodoItem:
        """Apply a partial update to a todo.

        Every supplied field is validated before any is written, so a
        failed update leaves the todo untouched.

        Returns:
            A copy of the updated todo.

        Raises:
            NotFoundError: If no todo has this id.
            ValidationError: If the id is not a string or a supplied field is invalid.
        """
        with self._lock:
            item = self._lookup(todo_id)

            values = patch.validated()
            for name, value in values.items():
                setattr(item, name, value)
            item.updated_at = max(_utcnow(), item.created_at)
            updated = item.copy()

        logger.debug("todo_updated", todo_id=todo_id, fields=sorted(values))
        return updated

    def delete(self, todo_id: str) -> TodoItem:
        """Remove a todo and return it.

        Raises:
            NotFoundError: If no todo has this id.
            ValidationError: If the id is not a string.
        """
        with self._lock:
            item = self._items.pop(self._lookup(todo_id).id)

        logger.debug("todo_deleted", todo_id=todo_id)
        return item

    def is_empty(self) -> bool:
        """Check if the store has any todos."""
        return not self._items

    def clear(self) -> None:
        """Remove all todos. The id counter keeps counting."""
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, todo_id: object) -> bool:
        return isinstance(todo_id, str) and todo_id in self._items
