"""Context variables for tool execution.

The service binds the store it owns before running a tool, and tools
read it back through the getter. Nothing here holds a store of its own.
"""

from contextvars import ContextVar, Token
from typing import Any, Callable


def _make_context_accessors(name: str) -> tuple[Callable[..., Token], Callable[..., Any]]:
    """Create a (setter, getter) pair backed by a ContextVar."""
    var: ContextVar[Any] = ContextVar(f"{name}_context", default=None)

    def setter(value: Any) -> Token:
        return var.set(value)

    def getter() -> Any:
        return var.get()

    setter.__name__ = setter.__qualname__ = f"set_context_{name}"
    getter.__name__ = getter.__qualname__ = f"get_context_{name}"
    return setter, getter


set_context_todo_store, get_context_todo_store = _make_context_accessors("todo_store")
