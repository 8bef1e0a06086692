"""Todo management tools.

Provides the five operations a calling agent uses to manage todos:
- create_todo: Add a todo
- list_todos: List todos, newest first, with optional filters
- update_todo: Change any subset of a todo's fields
- delete_todo: Remove a todo
- todo_stats: Completion, per-priority and tag statistics

Each tool reads the store bound by the service (see tools.context) and
returns a dict. Store errors come back as structured failures rather
than exceptions.
"""

from typing import Any

from todo_manager.config import get_settings
from todo_manager.logging import Loggers
from todo_manager.todos import (
    TodoError,
    TodoPatch,
    compute_stats,
    filter_todos,
    sort_by_recency,
)
from todo_manager.tools import require_context
from todo_manager.tools.context import get_context_todo_store
from todo_manager.tools.registry import (
    PermissionLevel,
    ToolCategory,
    ToolError,
    register_tool,
)

logger = Loggers.tools()


def _failure(error: TodoError, tool_name: str) -> dict[str, Any]:
    """Convert a store error into a structured tool failure."""
    logger.info(
        "tool_call_failed",
        tool=tool_name,
        code=error.error_code,
        error=error.message,
    )
    return ToolError(
        message=error.message,
        error_code=error.error_code,
        recoverable=True,
        details=error.details,
        tool_name=tool_name,
    ).to_dict()


@register_tool(
    category=ToolCategory.TODO,
    permission_level=PermissionLevel.CAUTION,
    description="Create a new todo with a title, optional description, priority (low/medium/high, default medium) and tags.",
)
@require_context("Todo store", get_context_todo_store)
def create_todo(
    title: str,
    description: str | None = None,
    priority: str = "medium",
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Create a new todo.

    Args:
        title: Todo title (required, non-empty).
        description: Optional longer description.
        priority: Priority level (low, medium, high).
        tags: Optional tags for categorization.

    Returns:
        A dict with the new todo's id and a confirmation message.
    """
    store = get_context_todo_store()
    try:
        todo_id = store.create(title, description=description, priority=priority, tags=tags)
        todo = store.get(todo_id)
    except TodoError as e:
        return _failure(e, "create_todo")

    logger.info("todo_created", todo_id=todo_id)
    return {
        "success": True,
        "id": todo_id,
        "todo": todo.to_dict(),
        "message": f'Created todo "{todo.title}" with ID: {todo_id}',
    }


@register_tool(
    category=ToolCategory.TODO,
    permission_level=PermissionLevel.SAFE,
    description="List todos newest first, optionally filtered by status (all/completed/pending), priority, or tag.",
)
@require_context("Todo store", get_context_todo_store)
def list_todos(
    status: str = "all",
    priority: str | None = None,
    tag: str | None = None,
) -> dict[str, Any]:
    """List todos with optional filters.

    Args:
        status: all, completed or pending.
        priority: Keep only this priority (low, medium, high).
        tag: Keep only todos carrying this tag.

    Returns:
        A dict with the matching todos, newest first.
    """
    store = get_context_todo_store()
    try:
        todos = filter_todos(store.list(), status=status, priority=priority, tag=tag)
    except TodoError as e:
        return _failure(e, "list_todos")

    todos = sort_by_recency(todos)
    message = (
        f"Todo List ({len(todos)} items)"
        if todos
        else "No todos found matching your criteria."
    )
    return {
        "success": True,
        "todos": [todo.to_dict() for todo in todos],
        "count": len(todos),
        "message": message,
    }


@register_tool(
    category=ToolCategory.TODO,
    permission_level=PermissionLevel.CAUTION,
    description="Update a todo by ID. Only the fields provided (title, description, completed, priority, tags) are changed.",
)
@require_context("Todo store", get_context_todo_store)
def update_todo(
    id: str,
    title: str | None = None,
    description: str | None = None,
    completed: bool | None = None,
    priority: str | None = None,
    tags: list[str] | None = None,
) -> dict[str, Any]:
    """Update a todo.

    Args:
        id: ID of the todo to update.
        title: New title (non-empty).
        description: New description.
        completed: Mark as completed (True) or pending (False).
        priority: New priority (low, medium, high).
        tags: Replacement tag list.

    Returns:
        A dict with the updated todo.
    """
    store = get_context_todo_store()
    patch = TodoPatch.from_kwargs(
        title=title,
        description=description,
        completed=completed,
        priority=priority,
        tags=tags,
    )
    try:
        todo = store.update(id, patch)
    except TodoError as e:
        return _failure(e, "update_todo")

    status_change = ""
    if completed is not None:
        status_change = " Marked as completed!" if completed else " Marked as pending!"
    logger.info("todo_updated", todo_id=id, fields=sorted(patch.fields()))
    return {
        "success": True,
        "todo": todo.to_dict(),
        "message": f'Updated todo "{todo.title}"{status_change}',
    }


@register_tool(
    category=ToolCategory.TODO,
    permission_level=PermissionLevel.CAUTION,
    description="Delete a todo by ID.",
)
@require_context("Todo store", get_context_todo_store)
def delete_todo(id: str) -> dict[str, Any]:
    """Delete a todo.

    Args:
        id: ID of the todo to delete.

    Returns:
        A dict with the removed todo.
    """
    store = get_context_todo_store()
    try:
        todo = store.delete(id)
    except TodoError as e:
        return _failure(e, "delete_todo")

    logger.info("todo_deleted", todo_id=id)
    return {
        "success": True,
        "todo": todo.to_dict(),
        "message": f'Deleted todo "{todo.title}"',
    }


@register_tool(
    category=ToolCategory.TODO,
    permission_level=PermissionLevel.SAFE,
    description="Get todo statistics: totals, completion rate, pending todos by priority, and the most used tags.",
)
@require_context("Todo store", get_context_todo_store)
def todo_stats() -> dict[str, Any]:
    """Compute statistics over all todos."""
    store = get_context_todo_store()
    stats = compute_stats(store.list(), top_tags_limit=get_settings().top_tags_limit)
    return {"success": True, "stats": stats.to_dict()}
