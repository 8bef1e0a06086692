"""Todo entity model and patch structure."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any

from todo_manager.todos.errors import ValidationError


class Priority(str, Enum):
    """Valid todo priorities."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def coerce(cls, value: "Priority | str") -> "Priority":
        """Convert a raw value to a Priority, raising ValidationError if invalid."""
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise ValidationError(
                f"Invalid priority '{value}'. Valid: {valid}",
                {"field": "priority", "value": value},
            ) from None


class StatusFilter(str, Enum):
    """Completion-state filter for listing todos."""

    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"

    @classmethod
    def coerce(cls, value: "StatusFilter | str") -> "StatusFilter":
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(s.value for s in cls)
            raise ValidationError(
                f"Invalid status '{value}'. Valid: {valid}",
                {"field": "status", "value": value},
            ) from None


def normalize_title(title: Any) -> str:
    """Return the trimmed title, raising ValidationError if it is empty."""
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Title cannot be empty", {"field": "title"})
    return title.strip()


def normalize_description(description: Any) -> str | None:
    """Return the description, raising ValidationError if it is not text."""
    if description is not None and not isinstance(description, str):
        raise ValidationError("Description must be a string", {"field": "description"})
    return description


def normalize_tags(tags: Any) -> list[str]:
    """Copy a tag sequence, keeping order and duplicates."""
    if tags is None:
        return []
    if not isinstance(tags, (list, tuple)) or not all(isinstance(t, str) for t in tags):
        raise ValidationError("Tags must be a list of strings", {"field": "tags"})
    return list(tags)


@dataclass
class TodoItem:
    """A single todo record."""

    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    description: str | None = None
    completed: bool = False
    priority: Priority = Priority.MEDIUM
    tags: list[str] = field(default_factory=list)

    def copy(self) -> "TodoItem":
        """Return a copy that shares no mutable state with this record."""
        return replace(self, tags=list(self.tags))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "completed": self.completed,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }


class _Unset:
    """Marker for a patch field that was not supplied."""

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


@dataclass(frozen=True)
class TodoPatch:
    """Partial update for a todo.

    Fields left as UNSET are not touched. ``description=None`` is a
    supplied value and clears the description.
    """

    title: Any = UNSET
    description: Any = UNSET
    completed: Any = UNSET
    priority: Any = UNSET
    tags: Any = UNSET

    @classmethod
    def from_kwargs(cls, **kwargs: Any) -> "TodoPatch":
        """Build a patch from keyword arguments, treating None as not supplied."""
        return cls(**{k: v for k, v in kwargs.items() if v is not None})

    def fields(self) -> dict[str, Any]:
        """Return the supplied fields."""
        return {
            name: value
            for name, value in (
                ("title", self.title),
                ("description", self.description),
                ("completed", self.completed),
                ("priority", self.priority),
                ("tags", self.tags),
            )
            if value is not UNSET
        }

    def validated(self) -> dict[str, Any]:
        """Validate every supplied field and return normalized values.

        Raises ValidationError on the first invalid field; nothing is
        applied by this method.
        """
        values = self.fields()
        if "title" in values:
            values["title"] = normalize_title(values["title"])
        if "description" in values:
            values["description"] = normalize_description(values["description"])
        if "completed" in values and not isinstance(values["completed"], bool):
            raise ValidationError(
                "Completed must be a boolean", {"field": "completed"}
            )
        if "priority" in values:
            values["priority"] = Priority.coerce(values["priority"])
        if "tags" in values:
            values["tags"] = normalize_tags(values["tags"])
        return values
