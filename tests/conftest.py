"""Shared test fixtures for todo-manager tests.

Provides:
- Settings isolated from environment variables and .env files
- A fresh TodoStore per test
- A store bound into the tool context
- A TodoService built from the isolated settings
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Generator
from unittest.mock import patch

import pytest

from todo_manager.config import (
    TodoSettings,
    reload_settings,
    set_context_settings,
    set_settings,
)
from todo_manager.service import TodoService
from todo_manager.todos import Priority, TodoItem, TodoStore
from todo_manager.tools.context import set_context_todo_store


@pytest.fixture
def settings() -> Generator[TodoSettings, None, None]:
    """Fixture providing default settings, installed globally for the test."""
    with patch.dict(os.environ, {}, clear=True):
        test_settings = TodoSettings(_env_file=None)
    set_settings(test_settings)
    yield test_settings
    set_context_settings(None)
    reload_settings()


@pytest.fixture
def store() -> TodoStore:
    """Fixture providing an empty store."""
    return TodoStore()


@pytest.fixture
def bound_store(store: TodoStore, settings: TodoSettings) -> Generator[TodoStore, None, None]:
    """Fixture binding the store into the tool context."""
    token = set_context_todo_store(store)
    try:
        yield store
    finally:
        token.var.reset(token)


@pytest.fixture
def service(settings: TodoSettings) -> TodoService:
    """Fixture providing a service with its own store."""
    return TodoService(settings)


BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def _make_todo(
    todo_id: str,
    title: str = "Task",
    *,
    minutes: int = 0,
    completed: bool = False,
    priority: Priority = Priority.MEDIUM,
    tags: list[str] | None = None,
) -> TodoItem:
    """Build a TodoItem created ``minutes`` after BASE_TIME."""
    created = BASE_TIME + timedelta(minutes=minutes)
    return TodoItem(
        id=todo_id,
        title=title,
        created_at=created,
        updated_at=created,
        completed=completed,
        priority=priority,
        tags=list(tags or []),
    )


@pytest.fixture
def make_todo():
    """Fixture providing a factory for records with controlled timestamps."""
    return _make_todo
