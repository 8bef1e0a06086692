"""Read-only data views over the todo store.

Two views are exposed to the transport:
- todos://json     full JSON dump of every todo
- todos://summary  compact completion summary

Views are rendered from the store on every read; nothing is cached.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable

from todo_manager.todos import TodoStore, summarize

JSON_MIME_TYPE = "application/json"


@dataclass
class ViewDefinition:
    """A named, addressable read-only view."""

    name: str
    uri: str
    description: str
    render: Callable[[TodoStore], str]
    mime_type: str = JSON_MIME_TYPE

    def read(self, store: TodoStore) -> dict[str, Any]:
        """Render the view and wrap it with its uri and MIME type."""
        return {"uri": self.uri, "mime_type": self.mime_type, "text": self.render(store)}

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "uri": self.uri,
            "description": self.description,
            "mime_type": self.mime_type,
        }


_views: dict[str, ViewDefinition] = {}


def register_view(
    name: str, uri: str, description: str
) -> Callable[[Callable[[TodoStore], str]], Callable[[TodoStore], str]]:
    """Register a render function under ``uri``."""

    def decorator(func: Callable[[TodoStore], str]) -> Callable[[TodoStore], str]:
        _views[uri] = ViewDefinition(name=name, uri=uri, description=description, render=func)
        return func

    return decorator


def get_view(uri: str) -> ViewDefinition | None:
    return _views.get(uri)


def list_views() -> list[ViewDefinition]:
    return list(_views.values())


@register_view("todos-json", "todos://json", "All todos as a JSON array")
def todos_json(store: TodoStore) -> str:
    return json.dumps([todo.to_dict() for todo in store.list()], indent=2)


@register_view("todos-summary", "todos://summary", "Todo completion summary")
def todos_summary(store: TodoStore) -> str:
    return json.dumps(summarize(store.list()).to_dict(), indent=2)
