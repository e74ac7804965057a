# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator

import pytest

from store import TaskListStore
from view import TodoScreen


@pytest.fixture()
def store() -> TaskListStore:
    return TaskListStore()


@pytest.fixture()
def screen(store: TaskListStore) -> Iterator[TodoScreen]:
    """Screen with a fixed width so wrapping does not depend on the terminal."""
    s = TodoScreen(store, width=40)
    yield s
    s.close()
