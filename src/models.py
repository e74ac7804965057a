"""Data models for the terminal to-do list.

Both types are frozen: the store publishes a new AppState for every change
instead of editing the current one, so a snapshot handed to the view never
moves under it.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple
import uuid

@dataclass(frozen=True)
class Task:
    """A single to-do entry.

    Fields:
        content: Text typed into the field when the task was added (may be empty).
        id: Random UUID assigned at creation; identity is independent of content.
    """
    content: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def create(cls, content: str) -> "Task":
        return cls(content=content)

    def short_id(self) -> str:
        return self.id.hex[:8]

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.short_id()}, content={self.content!r})"


@dataclass(frozen=True)
class AppState:
    """Everything the screen shows.

    Fields:
        text_input: Current value of the add-task field.
        search: Current value of the search field (stored, never used to filter).
        tasks: Newest first.
    """
    text_input: str = ""
    search: str = ""
    tasks: Tuple[Task, ...] = ()
