"""Tests for ToDoStore add/remove/list bookkeeping."""

from __future__ import annotations

import random

import pytest

from todos.errors import (
    DuplicateIdError,
    EmptyNameError,
    OutOfRangeError,
    ToDoNotFoundError,
)
from todos.store import ToDoStore
from todos.todo import IMAGES, SAMPLE_TODOS, ToDo


@pytest.fixture
def store() -> ToDoStore:
    return ToDoStore(rng=random.Random(0))


@pytest.fixture
def abc(store: ToDoStore) -> list[ToDo]:
    return [store.add(name, "agac") for name in ("A", "B", "C")]


def test_new_store_is_empty(store: ToDoStore) -> None:
    assert store.list() == []
    assert len(store) == 0
    assert store.next_id == 1


def test_add_appends_trimmed_todo(store: ToDoStore) -> None:
    """add should trim the name and append the todo last."""
    store.add("first", "cicek")
    todo = store.add("  Buy milk  ", "agac")

    assert todo.name == "Buy milk"
    assert todo.image == "agac"
    assert store.list()[-1] == todo
    assert len(store) == 2


@pytest.mark.parametrize("name", ["", "   ", "\t\n"])
def test_add_blank_name_fails_and_leaves_store_unchanged(store: ToDoStore, abc, name: str) -> None:
    before = store.list()
    next_id = store.next_id

    with pytest.raises(EmptyNameError):
        store.add(name, "agac")

    assert store.list() == before
    assert store.next_id == next_id


def test_add_generates_increasing_ids(store: ToDoStore) -> None:
    ids = [store.add(f"task {i}", "agac").id for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_ids_are_not_reused_after_removal(store: ToDoStore) -> None:
    """Removing the newest todo must not free its ID."""
    store.add("a", "agac")
    last = store.add("b", "agac")
    store.remove_at(1)

    assert store.add("c", "agac").id == last.id + 1


def test_add_picks_random_image_when_missing(store: ToDoStore) -> None:
    """A missing or blank image is drawn from the fixed set."""
    assert store.add("no image").image in IMAGES
    assert store.add("blank image", "  ").image in IMAGES


def test_add_keeps_explicit_image_outside_set(store: ToDoStore) -> None:
    assert store.add("Go to gym", "simsek").image == "simsek"


def test_add_with_external_id_advances_next_id(store: ToDoStore) -> None:
    todo = store.add("external", "agac", todo_id=10)
    assert todo.id == 10
    assert store.add("next", "agac").id == 11


def test_add_with_lower_external_id_keeps_next_id(store: ToDoStore, abc) -> None:
    store.remove_at(0)
    store.add("again", "agac", todo_id=1)
    assert store.next_id == 4


def test_add_duplicate_external_id_fails(store: ToDoStore, abc) -> None:
    before = store.list()
    with pytest.raises(DuplicateIdError, match=r"already exists"):
        store.add("dup", "agac", todo_id=abc[0].id)
    assert store.list() == before


def test_seed_keeps_ids_and_order(store: ToDoStore) -> None:
    store.seed(SAMPLE_TODOS)
    assert store.list() == list(SAMPLE_TODOS)
    assert store.next_id == 4


def test_remove_at_first_of_three(store: ToDoStore, abc) -> None:
    """Removing index 0 from [A, B, C] yields [B, C] and returns A."""
    a, b, c = abc
    assert store.remove_at(0) == a
    assert store.list() == [b, c]


def test_remove_at_shifts_following_items(store: ToDoStore, abc) -> None:
    a, b, c = abc
    assert store.remove_at(1) == b
    assert store.list() == [a, c]
    assert store.remove_at(1) == c
    assert store.list() == [a]


@pytest.mark.parametrize("position", [3, 4, 100, -1, -3])
def test_remove_at_out_of_range_fails_and_leaves_store_unchanged(
    store: ToDoStore, abc, position: int
) -> None:
    """Negative positions never wrap around."""
    before = store.list()
    with pytest.raises(OutOfRangeError):
        store.remove_at(position)
    assert store.list() == before


def test_remove_at_on_empty_store(store: ToDoStore) -> None:
    with pytest.raises(OutOfRangeError, match=r"no todos"):
        store.remove_at(0)


def test_out_of_range_error_is_index_error(store: ToDoStore) -> None:
    with pytest.raises(IndexError):
        store.remove_at(0)


def test_remove_at_rejects_non_int_position(store: ToDoStore, abc) -> None:
    with pytest.raises(TypeError):
        store.remove_at("0")  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        store.remove_at(True)  # type: ignore[arg-type]


def test_remove_by_id(store: ToDoStore, abc) -> None:
    a, b, c = abc
    assert store.remove(b.id) == b
    assert store.list() == [a, c]


def test_remove_missing_id_fails(store: ToDoStore, abc) -> None:
    before = store.list()
    with pytest.raises(ToDoNotFoundError, match=r"ToDo #999 not found"):
        store.remove(999)
    assert store.list() == before


def test_get(store: ToDoStore, abc) -> None:
    assert store.get(abc[1].id) == abc[1]
    assert store.get(999) is None


def test_list_returns_copy(store: ToDoStore, abc) -> None:
    """Changing the returned list must not touch the store."""
    todos = store.list()
    todos.clear()
    assert len(store) == 3


def test_iteration_in_insertion_order(store: ToDoStore, abc) -> None:
    assert list(store) == abc


def test_length_tracks_successful_operations() -> None:
    """len(list()) == successful adds - successful removes, for any sequence."""
    rng = random.Random(1234)
    store = ToDoStore(rng=rng)
    added = removed = 0

    for step in range(500):
        if rng.random() < 0.6:
            name = rng.choice(["task", "", "  ", f"item {step}"])
            try:
                store.add(name)
                added += 1
            except EmptyNameError:
                pass
        else:
            try:
                store.remove_at(rng.randint(-2, len(store) + 2))
                removed += 1
            except OutOfRangeError:
                pass
        assert len(store.list()) == added - removed


def test_added_todo_listed_until_removed(store: ToDoStore, abc) -> None:
    """A todo returned by add stays in list() until removed, never after."""
    todo = store.add("tracked", "agac")
    store.remove_at(0)
    assert todo in store.list()

    store.remove(todo.id)
    assert todo not in store.list()

    store.add("later", "agac")
    assert todo not in store.list()
    assert store.get(todo.id) is None


@pytest.mark.parametrize("image", [5, ["agac"]])
def test_add_rejects_non_str_image(store: ToDoStore, image) -> None:
    """A wrong image type is a TypeError and leaves the store unchanged."""
    with pytest.raises(TypeError, match=r"image must be a str"):
        store.add("task", image)
    assert store.list() == []
    assert store.next_id == 1
