"""In-memory todo store."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable, Iterable, Iterator
from enum import Enum

from todos.errors import DuplicateIdError, EmptyNameError, OutOfRangeError, ToDoNotFoundError
from todos.todo import ToDo, random_image

logger = logging.getLogger(__name__)


class StoreEvent(str, Enum):
    """Kinds of change a store reports to its subscribers."""

    ADDED = "added"
    REMOVED = "removed"


Listener = Callable[[StoreEvent, ToDo], None]


class ToDoStore:
    """Ordered, in-memory collection of todos.

    The store is the only owner of its list. Callers get copies from
    ``list()`` and ``filter()`` and change the collection through ``add``,
    ``remove_at`` and ``remove`` only. Every failed operation leaves the
    collection unchanged.

    Not thread-safe: a store is meant to be driven from a single thread.
    """

    def __init__(self, case_sensitive: bool = False, rng: random.Random | None = None):
        self.case_sensitive = case_sensitive
        self._rng = rng
        self._todos: list[ToDo] = []
        self._next_id: int = 1
        self._listeners: list[Listener] = []

    def __len__(self) -> int:
        return len(self._todos)

    def __iter__(self) -> Iterator[ToDo]:
        return iter(list(self._todos))

    @property
    def next_id(self) -> int:
        """ID the next generated todo will get."""
        return self._next_id

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener.

        Listeners run after the collection has changed. An exception raised
        by a listener is logged and does not fail the operation.

        Returns:
            A callable that removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, event: StoreEvent, todo: ToDo) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, todo)
            except Exception:
                logger.exception(f"Listener {listener!r} failed on {event.value} todo #{todo.id}")

    def list(self) -> list[ToDo]:
        """List all todos in insertion order."""
        return list(self._todos)  # Return a copy to prevent external modification

    def get(self, todo_id: int) -> ToDo | None:
        """Get a todo by ID."""
        for todo in self._todos:
            if todo.id == todo_id:
                return todo
        return None

    def add(self, name: str, image: str | None = None, *, todo_id: int | None = None) -> ToDo:
        """Create a todo and append it to the end of the collection.

        Args:
            name: Todo name; surrounding whitespace is trimmed.
            image: Image identifier. A random one is picked when missing or blank.
            todo_id: Externally supplied ID. Generated when omitted.

        Raises:
            EmptyNameError: If ``name`` is empty after trimming.
            DuplicateIdError: If ``todo_id`` is already in the store.
        """
        if isinstance(name, str) and not name.strip():
            raise EmptyNameError()

        if todo_id is not None and self.get(todo_id) is not None:
            raise DuplicateIdError(todo_id)

        if image is None or (isinstance(image, str) and not image.strip()):
            image = random_image(self._rng)

        todo = ToDo(id=self._next_id if todo_id is None else todo_id, name=name, image=image)

        self._todos.append(todo)
        # IDs are never handed out twice, even after removal
        self._next_id = max(self._next_id, todo.id + 1)
        logger.debug(f"Added todo #{todo.id}: {todo.name!r} ({todo.image})")
        self._notify(StoreEvent.ADDED, todo)
        return todo

    def seed(self, todos: Iterable[ToDo]) -> list[ToDo]:
        """Append existing todos, keeping their IDs."""
        return [self.add(todo.name, todo.image, todo_id=todo.id) for todo in todos]

    def remove_at(self, position: int) -> ToDo:
        """Remove and return the todo at ``position``.

        Negative positions are rejected rather than counted from the end.

        Raises:
            OutOfRangeError: If ``position`` is not a valid index.
        """
        if isinstance(position, bool) or not isinstance(position, int):
            raise TypeError(f"Position must be an int, got {type(position).__name__}")
        if not 0 <= position < len(self._todos):
            raise OutOfRangeError(position, len(self._todos))

        todo = self._todos.pop(position)
        logger.debug(f"Removed todo #{todo.id} at position {position}")
        self._notify(StoreEvent.REMOVED, todo)
        return todo

    def remove(self, todo_id: int) -> ToDo:
        """Remove and return the todo with ``todo_id``.

        Raises:
            ToDoNotFoundError: If no todo has that ID.
        """
        for position, todo in enumerate(self._todos):
            if todo.id == todo_id:
                return self.remove_at(position)
        raise ToDoNotFoundError(todo_id)

    def filter(self, query: str) -> list[ToDo]:
        """Return todos whose name contains ``query``.

        An empty query returns every todo. Matching ignores case unless the
        store was created with ``case_sensitive=True``.
        """
        if query == "":
            return self.list()
        if self.case_sensitive:
            return [t for t in self._todos if query in t.name]
        needle = query.casefold()
        return [t for t in self._todos if needle in t.name.casefold()]
