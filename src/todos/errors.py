"""Exceptions raised by the todo store and shell."""


class ToDoError(Exception):
    """Base class for all todo errors."""


class ValidationError(ToDoError, ValueError):
    """A todo was rejected at creation."""


class EmptyNameError(ValidationError):
    """The todo name is empty after trimming whitespace."""

    def __init__(self, message: str = "Name can not be empty !"):
        super().__init__(message)


class DuplicateIdError(ToDoError, ValueError):
    """A todo with the same ID is already in the store."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"ToDo with ID {todo_id} already exists")


class OutOfRangeError(ToDoError, IndexError):
    """A position does not point into the current collection."""

    def __init__(self, position: int, length: int):
        self.position = position
        self.length = length
        if length:
            message = f"Position {position} out of range (0..{length - 1})"
        else:
            message = f"Position {position} out of range (no todos)"
        super().__init__(message)


class ToDoNotFoundError(ToDoError, LookupError):
    """No todo with the requested ID."""

    def __init__(self, todo_id: int):
        self.todo_id = todo_id
        super().__init__(f"ToDo #{todo_id} not found")


class ConfigError(ToDoError, RuntimeError):
    """The configuration file could not be used."""
