# src/taskboard/board/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable

from .board_state import DRAFT_FIELDS, TaskBoard
from .render import render_board, render_draft

CommandHandler = Callable[[TaskBoard, list[str]], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console board (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        self.color = True

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, board: TaskBoard, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(board, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit the board.")
        lines.append("Plain text (no slash) adds a task with that title.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0].lstrip("#"))
    except ValueError:
        return None


def cmd_help(board: TaskBoard, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(board: TaskBoard, args: list[str]) -> str:
    return render_board(board, color=registry.color)


def cmd_add(board: TaskBoard, args: list[str]) -> str:
    """
    /add            -> add a task from the current draft
    /add Buy milk   -> set the draft title, then add
    """
    if args:
        board.set_draft_field("title", " ".join(args))

    task = board.add_task()
    if task is None:
        return "Title is required. Use /add <title> or /draft title <text>."

    logger.debug("Board task added id=%s", task.id)
    return f"Added #{task.id}: {task.title}"


def cmd_draft(board: TaskBoard, args: list[str]) -> str:
    """
    /draft                    -> show the draft
    /draft <field> <value...> -> set title | date | priority | description
    """
    if not args:
        return render_draft(board)

    name = args[0].lower()
    try:
        board.set_draft_field(name, " ".join(args[1:]))
    except ValueError as e:
        return str(e)
    return render_draft(board)


def cmd_cancel(board: TaskBoard, args: list[str]) -> str:
    board.clear_draft()
    return "Draft cleared."


def cmd_done(board: TaskBoard, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    task = board.toggle_task(task_id)
    if task is None:
        return f"No task #{task_id}."
    return f"#{task.id} marked as {'completed' if task.completed else 'pending'}."


def cmd_rm(board: TaskBoard, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm <id>"
    if not board.delete_task(task_id):
        return f"No task #{task_id}."
    return f"Deleted #{task_id}."


def cmd_dark(board: TaskBoard, args: list[str]) -> str:
    dark = board.toggle_dark_mode()
    return f"Display mode: {'dark' if dark else 'light'}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the board.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <title> or /add (uses the draft).")
registry.register(
    "draft",
    cmd_draft,
    help_text=f"Show or edit the draft: /draft <{'|'.join(DRAFT_FIELDS)}> <value>.",
)
registry.register("cancel", cmd_cancel, help_text="Clear the draft.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <id>.", aliases=["del", "delete"])
registry.register("dark", cmd_dark, help_text="Toggle light/dark display mode.", aliases=["theme"])
