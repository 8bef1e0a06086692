"""Tools module for the todo manager.

Tool System:
    - ToolDefinition: Metadata-rich tool definitions
    - ToolError: Standard error class for consistent error handling
    - ToolRegistry: Registry for tool management and discovery
    - register_tool: Decorator for easy tool registration
    - require_context: Guard returning an error dict when a manager is unbound

Todo Tools:
    create_todo, list_todos, update_todo, delete_todo, todo_stats
"""

import functools
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable)


def require_context(
    context_name: str,
    getter: Callable[..., Any],
    error_message: str | None = None,
) -> Callable[[F], F]:
    """Guard decorator: returns error dict if getter() is None.

    Apply below @register_tool so it runs first (innermost).

    Args:
        context_name: Human-readable name for error messages.
        getter: Zero-arg callable returning the context value or None.
        error_message: Custom error message (defaults to "{context_name} not available").
    """
    msg = error_message or f"{context_name} not available"

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            if getter() is None:
                return {"success": False, "error": msg}
            return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


from todo_manager.tools.registry import (
    ErrorCode,
    PermissionLevel,
    ToolCategory,
    ToolDefinition,
    ToolError,
    ToolRegistry,
    get_registry,
    register_tool,
)
from todo_manager.tools.todo_tools import (
    create_todo,
    delete_todo,
    list_todos,
    todo_stats,
    update_todo,
)

__all__ = [
    # Registry classes
    "ToolCategory",
    "PermissionLevel",
    "ToolDefinition",
    "ToolError",
    "ToolRegistry",
    "ErrorCode",
    "get_registry",
    "register_tool",
    "require_context",
    # Todo tools
    "create_todo",
    "list_todos",
    "update_todo",
    "delete_todo",
    "todo_stats",
]
