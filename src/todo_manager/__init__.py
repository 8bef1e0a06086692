"""Todo Manager - an in-memory task-tracking service for calling agents.

This package provides:

- TodoStore: the authoritative in-memory collection of todos
- Query engine: filtering, recency ordering and statistics over snapshots
- Todo tools: create_todo, list_todos, update_todo, delete_todo, todo_stats
- Views: todos://json and todos://summary
- TodoService: owns a store and dispatches tool calls and view reads

The request/response transport is supplied by the host process, which
keeps one TodoService for its lifetime.
"""

from todo_manager.config import (
    SettingsContext,
    TodoSettings,
    get_context_settings,
    get_settings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from todo_manager.service import TodoService, create_service
from todo_manager.todos import (
    NotFoundError,
    Priority,
    StatusFilter,
    TodoError,
    TodoItem,
    TodoPatch,
    TodoStats,
    TodoStore,
    TodoSummary,
    ValidationError,
)

__all__ = [
    # Service
    "TodoService",
    "create_service",
    # Store and models
    "TodoStore",
    "TodoItem",
    "TodoPatch",
    "Priority",
    "StatusFilter",
    "TodoStats",
    "TodoSummary",
    # Errors
    "TodoError",
    "ValidationError",
    "NotFoundError",
    # Settings
    "TodoSettings",
    "SettingsContext",
    "get_settings",
    "set_settings",
    "set_context_settings",
    "get_context_settings",
    "reload_settings",
]

__version__ = "1.0.0"
