"""State container for the to-do screen.

Holds the single current AppState. Every mutation builds the next snapshot
from the current one, swaps the reference, then hands the new snapshot to
each subscriber, in publish order, before returning.
"""
from __future__ import annotations
from collections import deque
from dataclasses import replace
from typing import Callable, Deque, List, Optional
import logging
import threading
import uuid

from models import AppState, Task

logger = logging.getLogger(__name__)

Listener = Callable[[AppState], None]
Unsubscribe = Callable[[], None]


class TaskListStore:
    def __init__(self, initial: Optional[AppState] = None):
        self._state: AppState = initial if initial is not None else AppState()
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()
        self._pending: Deque[AppState] = deque()
        self._dispatch_lock = threading.RLock()
        self._dispatching = False

    # -------------------- observation --------------------
    @property
    def snapshot(self) -> AppState:
        return self._state

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register ``listener``; returns a callable that detaches it again."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # -------------------- mutations --------------------
    def set_text_input(self, value: str) -> None:
        self._update(lambda s: replace(s, text_input=value))

    def set_search(self, value: str) -> None:
        self._update(lambda s: replace(s, search=value))

    def create_task(self) -> None:
        def build(s: AppState) -> AppState:
            task = Task.create(s.text_input)
            logger.debug("Creating task %s (%d chars)", task.short_id(), len(task.content))
            return replace(s, tasks=(task,) + s.tasks, text_input="")
        self._update(build)

    def remove_task(self, task_id: uuid.UUID) -> None:
        def drop(s: AppState) -> AppState:
            kept = tuple(t for t in s.tasks if t.id != task_id)
            if len(kept) == len(s.tasks):
                logger.debug("Remove of unknown task %s ignored", task_id)
            return replace(s, tasks=kept)
        self._update(drop)

    # -------------------- internals --------------------
    def _update(self, fn: Callable[[AppState], AppState]) -> AppState:
        # read-compute-swap is serialized; delivery happens in _dispatch
        with self._lock:
            new_state = fn(self._state)
            self._state = new_state
            self._pending.append(new_state)
        self._dispatch()
        return new_state

    def _dispatch(self) -> None:
        """Deliver queued snapshots to every listener in publish order.

        Only the outermost caller drains: a listener that mutates the store
        queues its snapshot behind the one being delivered, and a caller on
        another thread waits here until its snapshot has gone out. Every
        listener sees every snapshot even if one raises; the first error is
        re-raised once the queue is empty.
        """
        with self._dispatch_lock:
            if self._dispatching:
                return
            self._dispatching = True
            first_error: Optional[Exception] = None
            try:
                while True:
                    with self._lock:
                        if not self._pending:
                            break
                        state = self._pending.popleft()
                        listeners = list(self._listeners)
                    for listener in listeners:
                        try:
                            listener(state)
                        except Exception as exc:
                            if first_error is None:
                                first_error = exc
                            else:
                                logger.exception("Listener failed after an earlier listener error")
            finally:
                self._dispatching = False
            if first_error is not None:
                raise first_error
