"""Tool registry for the todo operations.

Provides:
- ToolDefinition: Metadata-rich tool definition
- ToolError: Standard error class for tool failures
- ToolRegistry: Registry for tool discovery and dispatch
"""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class ToolCategory(Enum):
    """Categories for organizing tools."""

    TODO = "todo"
    OTHER = "other"


class PermissionLevel(Enum):
    """Whether a tool only reads state or also changes it."""

    SAFE = "safe"  # read-only
    CAUTION = "caution"  # mutates the store


@dataclass
class ToolDefinition:
    """Metadata-rich tool definition.

    Attributes:
        name: Tool name (defaults to function name)
        description: Human-readable description
        func: The actual tool function
        category: Tool category for organization
        permission_level: Whether the tool mutates state
    """

    name: str
    description: str
    func: Callable[..., Any]
    category: ToolCategory = ToolCategory.OTHER
    permission_level: PermissionLevel = PermissionLevel.SAFE
    metadata: dict[str, Any] = field(default_factory=dict)

    @property
    def read_only(self) -> bool:
        return self.permission_level is PermissionLevel.SAFE

    def parameters(self) -> dict[str, dict[str, Any]]:
        """Describe the tool's parameters from its signature."""
        params: dict[str, dict[str, Any]] = {}
        for name, param in inspect.signature(self.func).parameters.items():
            required = param.default is inspect.Parameter.empty
            params[name] = {"required": required}
            if not required:
                params[name]["default"] = param.default
        return params

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "category": self.category.value,
            "read_only": self.read_only,
            "parameters": self.parameters(),
        }


class ToolError(Exception):
    """Standard error for tool failures.

    Provides structured error information that callers can use to
    understand and recover from failures.

    Attributes:
        message: Human-readable error message
        error_code: Machine-readable error code
        recoverable: Whether the error might be recoverable
        details: Additional error details
        tool_name: Name of the tool that failed
    """

    def __init__(
        self,
        message: str,
        error_code: str = "TOOL_ERROR",
        recoverable: bool = False,
        details: dict[str, Any] | None = None,
        tool_name: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.recoverable = recoverable
        self.details = details or {}
        self.tool_name = tool_name

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "success": False,
            "error": {
                "message": self.message,
                "code": self.error_code,
                "recoverable": self.recoverable,
                "details": self.details,
                "tool_name": self.tool_name,
            },
        }


class ErrorCode:
    """Standard error codes for tool failures."""

    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_FAILED = "VALIDATION_FAILED"
    NOT_FOUND = "NOT_FOUND"


class ToolRegistry:
    """Registry for managing and discovering tools."""

    def __init__(self):
        self._tools: dict[str, ToolDefinition] = {}

    def register(
        self,
        func: Callable[..., Any] | None = None,
        *,
        name: str | None = None,
        description: str | None = None,
        category: ToolCategory = ToolCategory.OTHER,
        permission_level: PermissionLevel = PermissionLevel.SAFE,
        **metadata,
    ) -> Callable[..., Any]:
        """Register a tool function.

        Can be used as a decorator:
            @registry.register(category=ToolCategory.TODO)
            def my_tool(query: str) -> dict:
                ...

        Or called directly:
            registry.register(my_tool, category=ToolCategory.TODO)
        """

        def decorator(f: Callable[..., Any]) -> Callable[..., Any]:
            tool_name = name or f.__name__
            tool_desc = description or (f.__doc__ or "").split("\n")[0].strip()

            self._tools[tool_name] = ToolDefinition(
                name=tool_name,
                description=tool_desc,
                func=f,
                category=category,
                permission_level=permission_level,
                metadata=metadata,
            )
            return f

        if func is not None:
            return decorator(func)
        return decorator

    def get(self, name: str) -> ToolDefinition | None:
        """Get a tool definition by name."""
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDefinition]:
        """List all registered tools."""
        return list(self._tools.values())

    def list_by_category(self, category: ToolCategory) -> list[ToolDefinition]:
        """List tools by category."""
        return [t for t in self._tools.values() if t.category == category]

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools


# Global registry instance
_default_registry = ToolRegistry()


def get_registry() -> ToolRegistry:
    """Get the default tool registry."""
    return _default_registry


def register_tool(
    func: Callable[..., Any] | None = None,
    *,
    name: str | None = None,
    description: str | None = None,
    category: ToolCategory = ToolCategory.OTHER,
    permission_level: PermissionLevel = PermissionLevel.SAFE,
    **metadata,
) -> Callable[..., Any]:
    """Register a tool with the default registry.

    Decorator for registering tools:
        @register_tool(category=ToolCategory.TODO)
        def todo_stats() -> dict:
            '''Summarize todo progress.'''
            ...
    """
    return _default_registry.register(
        func,
        name=name,
        description=description,
        category=category,
        permission_level=permission_level,
        **metadata,
    )
