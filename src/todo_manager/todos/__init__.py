"""Todo store and query engine.

The store owns the todo records; the query functions filter, order and
aggregate snapshots taken from it.

Example:
    >>> store = TodoStore()
    >>> todo_id = store.create("Write report", priority="high", tags=["work"])
    >>> compute_stats(store.list()).pending_by_priority["high"]
    1
"""

from todo_manager.todos.errors import NotFoundError, TodoError, ValidationError
from todo_manager.todos.models import (
    UNSET,
    Priority,
    StatusFilter,
    TodoItem,
    TodoPatch,
)
from todo_manager.todos.query import (
    TodoStats,
    TodoSummary,
    compute_stats,
    filter_todos,
    sort_by_recency,
    summarize,
)
from todo_manager.todos.store import TodoStore

__all__ = [
    "TodoStore",
    "TodoItem",
    "TodoPatch",
    "UNSET",
    "Priority",
    "StatusFilter",
    "TodoError",
    "ValidationError",
    "NotFoundError",
    "TodoStats",
    "TodoSummary",
    "compute_stats",
    "filter_todos",
    "sort_by_recency",
    "summarize",
]
