# tests/helpers.py

from __future__ import annotations

from store import TaskListStore
from view import strip_ansi


def add(store: TaskListStore, text: str) -> None:
    """Type ``text`` into the field and press Add."""
    store.set_text_input(text)
    store.create_task()


def plain(lines: list[str]) -> list[str]:
    return [strip_ansi(line) for line in lines]
