"""Screen rendering and input bindings for the to-do list.

The screen subscribes to a TaskListStore once and rebuilds its frame on every
published snapshot. Rows in a frame are keyed by task id; the row number the
user sees is only a handle into the most recent frame.
"""
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple
import logging
import re, shutil
import uuid

from models import AppState, Task
from store import TaskListStore
from theme import color, HEADER_COLOR, ROW_COLOR, KEY_COLOR, BUTTON_COLOR, EMPTY_COLOR, BOLD

logger = logging.getLogger(__name__)

TITLE = "Todo"
FIELD_LABEL = "Task"
BUTTON_LABEL = "Add"
MIN_WIDTH = 24
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


@dataclass(frozen=True)
class Row:
    key: uuid.UUID
    position: int
    lines: Tuple[str, ...]


class TodoScreen:
    def __init__(self, store: TaskListStore, width: Optional[int] = None, title_bar: bool = False,
                 on_frame: Optional[Callable[[List[str]], None]] = None):
        self.store = store
        self.width = width
        self.title_bar = title_bar
        self.on_frame = on_frame
        self.frame: List[str] = []
        self.rows: List[Row] = []
        self._render(store.snapshot)
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self._render)

    def close(self) -> None:
        """Detach from the store; the last frame stays readable."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # -------------------- input bindings --------------------
    def type_text(self, value: str) -> None:
        self.store.set_text_input(value)

    def type_search(self, value: str) -> None:
        self.store.set_search(value)

    def press_add(self) -> None:
        self.store.create_task()

    def tap(self, position: int) -> Optional[str]:
        """Tap row ``position`` (1-based) of the last frame.

        Returns a message when no such row exists, None otherwise.
        """
        row = self.row_at(position)
        if row is None:
            return f'No row #{position}.'
        self.store.remove_task(row.key)
        return None

    def row_at(self, position: int) -> Optional[Row]:
        if position < 1 or position > len(self.rows):
            return None
        return self.rows[position - 1]

    # -------------------- display --------------------
    def draw(self) -> None:
        for line in self.frame:
            print(line)

    def _render(self, state: AppState) -> None:
        width = self._width()
        frame: List[str] = []
        if self.title_bar:
            frame.append(color(TITLE, HEADER_COLOR, BOLD))
            frame.append(color('=' * width, HEADER_COLOR))
        frame.append(self._input_line(state.text_input, width))
        frame.append(color('-' * width, HEADER_COLOR))
        rows: List[Row] = []
        for position, task in enumerate(state.tasks, start=1):
            rows.append(Row(key=task.id, position=position, lines=tuple(self._wrap_task(task, position, width))))
        if rows:
            for row in rows:
                frame.extend(row.lines)
        else:
            frame.append(color('(empty)', EMPTY_COLOR))
        self.rows = rows
        self.frame = frame
        logger.debug("Rendered %d rows", len(rows))
        if self.on_frame is not None:
            self.on_frame(frame)

    def _width(self) -> int:
        if self.width is not None:
            return max(MIN_WIDTH, self.width)
        return max(MIN_WIDTH, shutil.get_terminal_size((80, 24)).columns)

    def _input_line(self, text_input: str, width: int) -> str:
        label = f"{FIELD_LABEL}: "
        button = f"[ {BUTTON_LABEL} ]"
        # field shows the tail of long input so the cursor end stays visible
        room = max(1, width - len(label) - len(button) - 1)
        shown = text_input if len(text_input) <= room else text_input[-room:]
        pad = width - len(label) - len(shown) - len(button)
        return (color(label, HEADER_COLOR, BOLD) + shown + ' ' * max(1, pad)
                + color(button, BUTTON_COLOR))

    def _wrap_task(self, task: Task, position: int, width: int) -> List[str]:
        prefix_visible = f"{position}. "
        prefix_colored = color(f"{position}.", KEY_COLOR) + ' '
        limit = max(1, width - len(prefix_visible))
        lines_raw: List[str] = []
        current = ''
        for w in task.content.split():
            candidate = w if not current else current + ' ' + w
            if len(candidate) <= limit:
                current = candidate
            else:
                if current:
                    lines_raw.append(current)
                current = w
        if current:
            lines_raw.append(current)
        if not lines_raw:
            return [prefix_colored + color('<blank>', EMPTY_COLOR)]
        indent = ' ' * len(prefix_visible)
        colored: List[str] = [prefix_colored + color(lines_raw[0], ROW_COLOR)]
        colored.extend(indent + color(line, ROW_COLOR) for line in lines_raw[1:])
        return colored


def strip_ansi(s: str) -> str:
    return ANSI_RE.sub('', s)
