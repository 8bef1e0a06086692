"""Filtering, ordering and statistics over todo snapshots.

Every function here takes a sequence of records (normally the result of
``TodoStore.list()``) and returns new values; records are never mutated.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, Sequence

from todo_manager.todos.models import Priority, StatusFilter, TodoItem

DEFAULT_TOP_TAGS = 5

# Reporting order for per-priority counts
PRIORITY_ORDER = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


def filter_todos(
    records: Iterable[TodoItem],
    status: StatusFilter | str = StatusFilter.ALL,
    priority: Priority | str | None = None,
    tag: str | None = None,
) -> list[TodoItem]:
    """Filter todos by completion state, priority and tag.

    Filters combine with AND. ``status="all"``, a missing priority and a
    missing tag do not filter.

    Raises:
        ValidationError: If status or priority is not a known value.
    """
    status = StatusFilter.coerce(status)
    wanted_priority = Priority.coerce(priority) if priority else None

    results = list(records)
    if status is StatusFilter.COMPLETED:
        results = [t for t in results if t.completed]
    elif status is StatusFilter.PENDING:
        results = [t for t in results if not t.completed]
    if wanted_priority is not None:
        results = [t for t in results if t.priority is wanted_priority]
    if tag:
        results = [t for t in results if tag in t.tags]
    return results


def _id_sort_key(todo_id: str) -> tuple[str, int]:
    prefix, sep, number = todo_id.rpartition("-")
    if sep and number.isdigit():
        return prefix, int(number)
    return todo_id, -1


def sort_by_recency(records: Iterable[TodoItem]) -> list[TodoItem]:
    """Order todos newest first; equal timestamps fall back to id, highest first."""
    return sorted(
        records,
        key=lambda t: (t.created_at, _id_sort_key(t.id)),
        reverse=True,
    )


def completion_rate(completed: int, total: int) -> int:
    """Percentage of completed todos, rounded half up; 0 for an empty set."""
    if total <= 0:
        return 0
    return math.floor(completed * 100 / total + 0.5)


def rank_tags(
    records: Iterable[TodoItem], limit: int = DEFAULT_TOP_TAGS
) -> list[tuple[str, int]]:
    """Count every tag occurrence and return the ``limit`` most frequent.

    Ties keep the order in which tags were first seen.
    """
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(record.tags)
    # sorted() is stable and Counter preserves first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


@dataclass
class TodoStats:
    """Aggregate statistics over a set of todos."""

    total: int
    completed_count: int
    pending_count: int
    completion_rate: int
    pending_by_priority: dict[str, int]
    top_tags: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed_count": self.completed_count,
            "pending_count": self.pending_count,
            "completion_rate": self.completion_rate,
            "pending_by_priority": dict(self.pending_by_priority),
            "top_tags": [{"tag": tag, "count": count} for tag, count in self.top_tags],
        }


@dataclass
class TodoSummary:
    """Compact statistics stamped with the time they were generated."""

    total: int
    completed_count: int
    pending_count: int
    completion_rate: int
    generated_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "completed_count": self.completed_count,
            "pending_count": self.pending_count,
            "completion_rate": self.completion_rate,
            "generated_at": self.generated_at.isoformat(),
        }


def compute_stats(
    records: Sequence[TodoItem], top_tags_limit: int = DEFAULT_TOP_TAGS
) -> TodoStats:
    """Compute completion, per-priority and tag statistics."""
    total = len(records)
    completed = sum(1 for t in records if t.completed)

    pending_by_priority = {p.value: 0 for p in PRIORITY_ORDER}
    for record in records:
        if not record.completed:
            pending_by_priority[record.priority.value] += 1

    return TodoStats(
        total=total,
        completed_count=completed,
        pending_count=total - completed,
        completion_rate=completion_rate(completed, total),
        pending_by_priority=pending_by_priority,
        top_tags=rank_tags(records, top_tags_limit),
    )


def summarize(records: Sequence[TodoItem]) -> TodoSummary:
    total = len(records)
    completed = sum(1 for t in records if t.completed)
    return TodoSummary(
        total=total,
        completed_count=completed,
        pending_count=total - completed,
        completion_rate=completion_rate(completed, total),
        generated_at=datetime.now(timezone.utc),
    )
