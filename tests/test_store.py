# tests/test_store.py

from __future__ import annotations

import threading
import time
import uuid

import pytest

from models import AppState, Task
from store import TaskListStore

from .helpers import add


def contents(store: TaskListStore) -> list[str]:
    return [t.content for t in store.snapshot.tasks]


def test_buy_milk_scenario(store: TaskListStore) -> None:
    store.set_text_input("buy milk")
    store.create_task()
    assert contents(store) == ["buy milk"]
    assert store.snapshot.text_input == ""


def test_tasks_are_newest_first(store: TaskListStore) -> None:
    for text in ["t1", "t2", "t3", "t4"]:
        add(store, text)
    assert contents(store) == ["t4", "t3", "t2", "t1"]


def test_last_text_input_wins(store: TaskListStore) -> None:
    store.set_text_input("x")
    store.set_text_input("y")
    store.create_task()
    assert contents(store) == ["y"]


def test_create_resets_input_and_accepts_empty_content(store: TaskListStore) -> None:
    store.create_task()
    store.set_text_input("   ")
    store.create_task()
    assert contents(store) == ["   ", ""]
    assert store.snapshot.text_input == ""


def test_identical_content_gets_distinct_ids(store: TaskListStore) -> None:
    for _ in range(5):
        add(store, "dup")
    ids = {t.id for t in store.snapshot.tasks}
    assert len(ids) == 5


def test_remove_middle_task_keeps_order(store: TaskListStore) -> None:
    for text in ["C", "B", "A"]:
        add(store, text)
    a, b, c = store.snapshot.tasks
    assert [a.content, b.content, c.content] == ["A", "B", "C"]
    store.remove_task(b.id)
    assert contents(store) == ["A", "C"]


def test_remove_unknown_and_repeated_is_noop(store: TaskListStore) -> None:
    add(store, "one")
    add(store, "two")
    before = store.snapshot.tasks
    store.remove_task(uuid.uuid4())
    assert store.snapshot.tasks == before

    target = before[0]
    store.remove_task(target.id)
    after_first = store.snapshot.tasks
    store.remove_task(target.id)
    assert store.snapshot.tasks == after_first
    assert [t.content for t in after_first] == ["one"]


def test_search_is_stored_but_does_not_filter(store: TaskListStore) -> None:
    add(store, "apples")
    add(store, "pears")
    store.set_search("apples")
    assert store.snapshot.search == "apples"
    assert contents(store) == ["pears", "apples"]


def test_set_text_input_leaves_other_fields(store: TaskListStore) -> None:
    add(store, "kept")
    store.set_search("s")
    tasks = store.snapshot.tasks
    store.set_text_input("draft")
    assert store.snapshot.tasks == tasks
    assert store.snapshot.search == "s"


def test_mutations_publish_new_snapshots(store: TaskListStore) -> None:
    first = store.snapshot
    store.set_text_input("a")
    second = store.snapshot
    assert first is not second
    assert first == AppState()
    assert second.text_input == "a"


def test_initial_state_is_used() -> None:
    task = Task.create("seed")
    store = TaskListStore(AppState(tasks=(task,)))
    assert store.snapshot.tasks == (task,)


def test_subscribers_see_every_mutation_including_identical_ones(store: TaskListStore) -> None:
    seen: list[AppState] = []
    store.subscribe(seen.append)
    store.set_text_input("same")
    store.set_text_input("same")
    store.set_search("")
    store.remove_task(uuid.uuid4())
    store.create_task()
    assert len(seen) == 5
    assert seen[0] == seen[1]
    assert seen[-1] is store.snapshot
    assert seen[-1].tasks[0].content == "same"


def test_unsubscribe_detaches_and_is_repeatable(store: TaskListStore) -> None:
    a: list[AppState] = []
    b: list[AppState] = []
    unsubscribe_a = store.subscribe(a.append)
    store.subscribe(b.append)
    store.set_text_input("1")
    unsubscribe_a()
    unsubscribe_a()
    store.set_text_input("2")
    assert [s.text_input for s in a] == ["1"]
    assert [s.text_input for s in b] == ["1", "2"]


def test_listener_may_mutate_store_and_unsubscribe_itself(store: TaskListStore) -> None:
    calls: list[str] = []

    def echo_search(state: AppState) -> None:
        calls.append(state.text_input)
        unsubscribe()
        store.set_search(state.text_input)

    unsubscribe = store.subscribe(echo_search)
    store.set_text_input("q")
    assert calls == ["q"]
    assert store.snapshot.search == "q"


def test_concurrent_creates_lose_nothing(store: TaskListStore) -> None:
    per_thread = 200
    threads = [threading.Thread(target=lambda: [store.create_task() for _ in range(per_thread)])
               for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    tasks = store.snapshot.tasks
    assert len(tasks) == 8 * per_thread
    assert len({t.id for t in tasks}) == len(tasks)


def wait_for(predicate, timeout: float = 5.0) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        assert time.monotonic() < deadline, "timed out"
        time.sleep(0.001)


def test_nested_mutation_is_delivered_after_current_snapshot(store: TaskListStore) -> None:
    def echo(state: AppState) -> None:
        if state.search != state.text_input:
            store.set_search(state.text_input)

    seen: list[AppState] = []
    store.subscribe(echo)
    store.subscribe(seen.append)
    store.set_text_input("q")
    assert [(s.text_input, s.search) for s in seen] == [("q", ""), ("q", "q")]
    assert seen[-1] is store.snapshot


def test_concurrent_mutation_waits_for_delivery_in_order(store: TaskListStore) -> None:
    entered = threading.Event()
    release = threading.Event()
    seen: list[str] = []

    def slow(state: AppState) -> None:
        if state.text_input == "a":
            entered.set()
            release.wait(5)
        seen.append(state.text_input)

    store.subscribe(slow)
    first = threading.Thread(target=store.set_text_input, args=("a",))
    first.start()
    entered.wait(5)
    second = threading.Thread(target=store.set_text_input, args=("b",))
    second.start()
    wait_for(lambda: store.snapshot.text_input == "b")
    # "b" is published but cannot be delivered ahead of "a"
    assert seen == []
    release.set()
    first.join(5)
    second.join(5)
    assert seen == ["a", "b"]


def test_listener_error_reaches_caller_after_all_listeners_run(store: TaskListStore) -> None:
    before: list[str] = []
    after: list[str] = []

    def boom(state: AppState) -> None:
        raise RuntimeError("render failed")

    store.subscribe(before.append)
    store.subscribe(boom)
    store.subscribe(after.append)
    with pytest.raises(RuntimeError, match="render failed"):
        store.set_text_input("x")
    assert before == after
    assert after[-1] is store.snapshot

    # the store keeps working for the next mutation
    with pytest.raises(RuntimeError):
        store.set_text_input("y")
    assert [s.text_input for s in after] == ["x", "y"]


def test_first_listener_error_wins(store: TaskListStore) -> None:
    def first(state: AppState) -> None:
        raise KeyError("first")

    def second(state: AppState) -> None:
        raise ValueError("second")

    store.subscribe(first)
    store.subscribe(second)
    with pytest.raises(KeyError):
        store.create_task()
    assert len(store.snapshot.tasks) == 1
