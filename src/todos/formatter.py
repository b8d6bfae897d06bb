"""Output formatter for todos."""

import json
from enum import Enum

from todos.todo import ToDo

EMPTY_MESSAGE = "No ToDos Yet !"


class FormatType(str, Enum):
    """Output format types."""

    TABLE = "table"
    JSON = "json"
    COMPACT = "compact"


class Formatter:
    """Format todos for display."""

    def __init__(self, format_type: FormatType = FormatType.TABLE):
        self.format_type = format_type

    def format(self, todos: list[ToDo]) -> str:
        """Format todos for display."""
        if self.format_type == FormatType.JSON:
            return self._format_json(todos)

        if not todos:
            return EMPTY_MESSAGE

        if self.format_type == FormatType.COMPACT:
            return self._format_compact(todos)
        return self._format_table(todos)

    def format_one(self, todo: ToDo) -> str:
        """Format a single todo as a detail block."""
        if self.format_type == FormatType.JSON:
            return json.dumps(todo.to_dict(), indent=2)
        return f"ToDo #{todo.id}\n  Name:  {todo.name}\n  Image: {todo.image}"

    def _format_table(self, todos: list[ToDo]) -> str:
        """Format as table.

        The first column is the 1-based row position used by ``delete``.
        """
        image_width = max(len("Image"), *(len(t.image) for t in todos))
        lines = []
        lines.append(f"{'#':<4} {'ID':<4} {'Image':<{image_width}} {'Name'}")
        lines.append("-" * 80)

        for position, todo in enumerate(todos, start=1):
            lines.append(f"{position:<4} {todo.id:<4} {todo.image:<{image_width}} {todo.name}")

        return "\n".join(lines)

    def _format_compact(self, todos: list[ToDo]) -> str:
        """Format as compact list."""
        return "\n".join(f"[{t.id}] {t.name}" for t in todos)

    def _format_json(self, todos: list[ToDo]) -> str:
        """Format as JSON."""
        return json.dumps([t.to_dict() for t in todos], indent=2)
