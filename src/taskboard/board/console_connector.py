# src/taskboard/board/console_connector.py

from __future__ import annotations

import logging
import sys
from datetime import datetime

from .board_state import TaskBoard
from .commands import cmd_add
from .commands import registry as command_registry
from .render import render_board

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def handle_line(board: TaskBoard, line: str) -> str | None:
    """
    One REPL step. Slash commands go to the registry; plain text is a quick add.
    Returns the reply to print (None for an empty line).
    """
    line = line.strip()
    if not line:
        return None

    reply = command_registry.handle(board, line)
    if reply is not None:
        return reply
    return cmd_add(board, line.split())


def run_console_loop(board: TaskBoard, *, app_name: str = "taskboard") -> None:
    color = sys.stdout.isatty()
    command_registry.color = color

    logger.info("Console board started (dark_mode=%s).", board.dark_mode)
    _print_ts("[BOARD] Type a task title to add it. Use /help for commands. Use /exit to quit.\n")
    print(render_board(board, title=app_name, color=color))

    while True:
        try:
            user_input = input("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        before = (list(board.tasks), board.dark_mode)
        try:
            reply = handle_line(board, user_input)
        except Exception:
            logger.exception("Board command crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            continue

        _print_ts(reply)
        if (board.tasks, board.dark_mode) != before:
            print(render_board(board, title=app_name, color=color))

    logger.info("Console board finished.")
