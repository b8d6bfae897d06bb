"""Command shell for the todo list."""

from __future__ import annotations

import argparse
import logging
import shlex
import sys
from dataclasses import replace
from typing import TextIO

from todos import __version__
from todos.config import Config, load_config
from todos.errors import ConfigError, EmptyNameError, OutOfRangeError, ToDoError
from todos.formatter import EMPTY_MESSAGE, Formatter, FormatType
from todos.store import StoreEvent, ToDoStore
from todos.todo import IMAGES, SAMPLE_TODOS, ToDo

logger = logging.getLogger(__name__)

PROMPT = "todos> "

HELP = """\
Commands:
  list [-f table|compact|json]   Show todos (filtered by the current search)
  add NAME... [-i IMAGE]         Add a todo; a random image is used if none given
  delete POSITION                Delete the todo at a position shown by 'list'
  delete --id ID                 Delete the todo with an ID
  search [QUERY...]              Filter 'list' by name; no query clears the search
  show ID                        Show one todo
  images                         List image identifiers
  help                           Show this help
  quit, exit                     Leave the shell"""


class UsageError(ToDoError):
    """A shell command could not be parsed."""


class _ShellParser(argparse.ArgumentParser):
    """Argument parser that raises instead of exiting the process."""

    def error(self, message: str):
        raise UsageError(message)


class ToDoApp:
    """A todo list session: the store plus the current search text."""

    def __init__(self, config: Config | None = None, store: ToDoStore | None = None):
        self.config = config or Config()
        if store is None:
            store = ToDoStore(case_sensitive=self.config.case_sensitive_search)
            if self.config.seed:
                store.seed(SAMPLE_TODOS)
        self.store = store
        self.search_text = ""
        self._unsubscribe = self.store.subscribe(self._log_change)

    def _log_change(self, event: StoreEvent, todo: ToDo) -> None:
        if event is StoreEvent.ADDED:
            logger.info(f"ToDo Save : {todo.name} - {todo.image}")
        elif event is StoreEvent.REMOVED:
            logger.info(f"ToDo Delete : {todo.id}")

    def visible(self) -> list[ToDo]:
        """Todos matching the current search, in insertion order."""
        return self.store.filter(self.search_text)

    def search(self, text: str) -> list[ToDo]:
        """Set the search text and return the matching todos."""
        self.search_text = text.strip()
        logger.info(f"ToDos Search : {self.search_text}")
        return self.visible()

    def add(self, name: str, image: str | None = None) -> ToDo:
        """Add a new todo."""
        return self.store.add(name, image)

    def delete(self, position: int) -> ToDo:
        """Delete the todo at a 0-based position of the visible list."""
        if not self.search_text:
            return self.store.remove_at(position)

        rows = self.visible()
        if not 0 <= position < len(rows):
            raise OutOfRangeError(position, len(rows))
        return self.store.remove(rows[position].id)

    def remove(self, todo_id: int) -> ToDo:
        """Delete a todo by ID."""
        return self.store.remove(todo_id)

    def get(self, todo_id: int) -> ToDo | None:
        """Get a todo by ID."""
        return self.store.get(todo_id)

    def close(self) -> None:
        """Detach from the store."""
        self._unsubscribe()


def build_parser() -> argparse.ArgumentParser:
    """Build the parser for commands typed into the shell."""
    parser = _ShellParser(prog="todos", add_help=False)
    subparsers = parser.add_subparsers(dest="command")

    # List command
    list_parser = subparsers.add_parser("list", add_help=False)
    list_parser.add_argument("-f", "--format", choices=[f.value for f in FormatType])

    # Add command
    add_parser = subparsers.add_parser("add", add_help=False)
    add_parser.add_argument("name", nargs="+")
    add_parser.add_argument("-i", "--image")

    # Delete command
    delete_parser = subparsers.add_parser("delete", add_help=False)
    delete_parser.add_argument("position", nargs="?", type=int)
    delete_parser.add_argument("--id", dest="todo_id", type=int)

    # Search command
    search_parser = subparsers.add_parser("search", add_help=False)
    search_parser.add_argument("query", nargs="*")

    # Show command
    show_parser = subparsers.add_parser("show", add_help=False)
    show_parser.add_argument("todo_id", type=int)

    for name in ("images", "help", "quit", "exit"):
        subparsers.add_parser(name, add_help=False)

    return parser


def run_command(app: ToDoApp, args: argparse.Namespace) -> int:
    """Run one parsed command against ``app``.

    Returns:
        0 on success, 1 if the command was rejected.
    """
    formatter = Formatter(app.config.format)
    try:
        if args.command == "list":
            if args.format:
                formatter = Formatter(FormatType(args.format))
            todos = app.visible()
            if not todos and app.search_text and formatter.format_type != FormatType.JSON:
                print(f"No ToDos match {app.search_text!r}")
            else:
                print(formatter.format(todos))

        elif args.command == "add":
            app.add(" ".join(args.name), args.image)

        elif args.command == "delete":
            if (args.position is None) == (args.todo_id is None):
                raise UsageError("delete needs either a POSITION or --id ID")
            if args.todo_id is not None:
                app.remove(args.todo_id)
            else:
                # Positions are shown 1-based by 'list'
                try:
                    app.delete(args.position - 1)
                except OutOfRangeError:
                    print(f"✗ No ToDo at position {args.position}")
                    return 1

        elif args.command == "search":
            app.search(" ".join(args.query))

        elif args.command == "show":
            todo = app.get(args.todo_id)
            if todo is None:
                print(f"✗ ToDo #{args.todo_id} not found")
                return 1
            print(formatter.format_one(todo))

        elif args.command == "images":
            print("\n".join(IMAGES))

        elif args.command == "help":
            print(HELP)

        else:
            raise UsageError(f"Unknown command: {args.command}")

    except EmptyNameError:
        print("✗ Name can not be empty !")
        return 1
    except ToDoError as e:
        print(f"✗ {e}")
        return 1
    return 0


def run_line(app: ToDoApp, line: str) -> int | None:
    """Parse and run one line of shell input.

    Returns:
        The command's exit status, or ``None`` when the line asks to quit.
    """
    try:
        tokens = shlex.split(line)
    except ValueError as e:
        print(f"✗ {e}")
        return 1
    if not tokens:
        return 0

    try:
        args = build_parser().parse_args(tokens)
    except UsageError as e:
        print(f"✗ {e}")
        return 1

    if args.command in ("quit", "exit"):
        return None
    return run_command(app, args)


def run_shell(app: ToDoApp, stream: TextIO | None = None) -> int:
    """Read commands from ``stream`` until it ends or the user quits.

    Returns:
        1 if any command failed, else 0.
    """
    stream = stream or sys.stdin
    interactive = stream is sys.stdin and stream.isatty()
    if interactive:
        print(f"todos {__version__}. Type 'help' for commands.")
        if not app.store.list():
            print(EMPTY_MESSAGE)

    status = 0
    while True:
        if interactive:
            try:
                line = input(PROMPT)
            except (EOFError, KeyboardInterrupt):
                print()
                break
        else:
            line = stream.readline()
            if not line:
                break

        result = run_line(app, line)
        if result is None:
            break
        status = max(status, result)
    return status


def configure_logging(level_name: str = "WARNING", verbosity: int = 0) -> None:
    """Configure root logging once at startup.

    Each ``-v`` lowers the configured level by one step, down to DEBUG.
    """
    level = max(logging.DEBUG, getattr(logging, level_name) - 10 * verbosity)
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def build_startup_parser() -> argparse.ArgumentParser:
    """Build the parser for the ``todos`` command line."""
    parser = argparse.ArgumentParser(prog="todos", description="In-memory ToDos shell")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="TOML config file")
    parser.add_argument("--no-seed", action="store_true", help="Start with an empty list")
    parser.add_argument("-f", "--format", choices=[f.value for f in FormatType])
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging")
    parser.add_argument(
        "-c",
        "--command",
        action="append",
        help="Run a shell command and exit (repeatable)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    options = build_startup_parser().parse_args(argv)

    try:
        config = load_config(options.config)
    except ConfigError as e:
        print(f"✗ {e}", file=sys.stderr)
        return 1

    if options.no_seed:
        config = replace(config, seed=False)
    if options.format:
        config = replace(config, format=FormatType(options.format))

    configure_logging(config.log_level, options.verbose)

    app = ToDoApp(config)
    try:
        if not options.command:
            return run_shell(app)

        status = 0
        for line in options.command:
            result = run_line(app, line)
            if result is None:
                break
            status = max(status, result)
        return status
    finally:
        app.close()


if __name__ == "__main__":
    sys.exit(main())
