"""Todo service: owns the store and dispatches operations.

The transport layer (out of this package) holds one TodoService for the
life of the process and routes every tool call and view read through it.

Example:
    >>> service = TodoService(TodoSettings())
    >>> result = service.call_tool("create_todo", {"title": "Buy groceries"})
    >>> result["id"]
    'todo-1'
"""

import contextlib
import inspect
from typing import Any, Iterator

from todo_manager import views
from todo_manager.config import TodoSettings, get_settings, set_context_settings
from todo_manager.logging import Loggers, bind_context, configure_logging, unbind_context
from todo_manager.todos import TodoStore
from todo_manager.tools import ErrorCode, ToolCategory, ToolError, get_registry
from todo_manager.tools.context import set_context_todo_store

logger = Loggers.service()


class TodoService:
    """Owner of a TodoStore and entry point for the five todo operations.

    Tool calls run with this service's settings and store bound into
    context variables, so the tool functions never reach a global store.
    """

    def __init__(self, settings: TodoSettings, store: TodoStore | None = None) -> None:
        self._settings = settings
        self._store = store if store is not None else TodoStore(id_prefix=settings.id_prefix)
        logger.info(
            "service_ready",
            server=settings.server_name,
            version=settings.server_version,
        )

    @property
    def settings(self) -> TodoSettings:
        return self._settings

    @property
    def store(self) -> TodoStore:
        return self._store

    @property
    def server_info(self) -> dict[str, str]:
        return {"name": self._settings.server_name, "version": self._settings.server_version}

    @contextlib.contextmanager
    def _tool_context(self) -> Iterator[None]:
        """Bind settings and store for the duration of a tool call.

        Uses token-based reset to correctly restore the parent context.
        """
        tokens = [
            set_context_settings(self._settings),
            set_context_todo_store(self._store),
        ]
        try:
            yield
        finally:
            for token in reversed(tokens):
                token.var.reset(token)

    def list_tools(self) -> list[dict[str, Any]]:
        """Describe the todo tools for the transport."""
        return [t.to_dict() for t in get_registry().list_by_category(ToolCategory.TODO)]

    def call_tool(self, name: str, arguments: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a todo tool by name.

        Unknown tools and arguments that do not fit the tool's signature
        come back as structured failures, like store errors do.
        """
        arguments = arguments or {}
        definition = get_registry().get(name)
        if definition is None or definition.category is not ToolCategory.TODO:
            logger.info("unknown_tool", tool=name)
            return ToolError(
                message=f"Unknown tool: {name}",
                error_code=ErrorCode.NOT_FOUND,
                recoverable=True,
                tool_name=name,
            ).to_dict()

        try:
            inspect.signature(definition.func).bind(**arguments)
        except TypeError as e:
            logger.info("invalid_tool_arguments", tool=name, error=str(e))
            return ToolError(
                message=f"Invalid arguments for {name}: {e}",
                error_code=ErrorCode.INVALID_INPUT,
                recoverable=True,
                details={"arguments": sorted(arguments)},
                tool_name=name,
            ).to_dict()

        bind_context(tool=name)
        try:
            with self._tool_context():
                return definition.func(**arguments)
        finally:
            unbind_context("tool")

    def list_views(self) -> list[dict[str, Any]]:
        return [v.to_dict() for v in views.list_views()]

    def read_view(self, uri: str) -> dict[str, Any]:
        """Render the view at ``uri`` from the current store state.

        Raises:
            KeyError: If no view is registered at ``uri``.
        """
        view = views.get_view(uri)
        if view is None:
            raise KeyError(uri)
        return view.read(self._store)


def create_service(settings: TodoSettings | None = None) -> TodoService:
    """Configure logging and build a service from settings.

    Args:
        settings: Settings to use. Defaults to get_settings().
    """
    settings = settings or get_settings()
    configure_logging(settings)
    Loggers.config().debug(
        "settings_loaded",
        log_level=settings.log_level,
        id_prefix=settings.id_prefix,
        top_tags_limit=settings.top_tags_limit,
    )
    return TodoService(settings)
