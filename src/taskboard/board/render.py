# src/taskboard/board/render.py

from __future__ import annotations

from ..tasks.task_models import Priority
from .board_state import BoardTask, TaskBoard

RESET = "\033[0m"
STRIKE = "\033[9m"

# 256-colour foregrounds. Light mode: dark greys on the terminal background,
# dark mode: light greys with muted pastel priority tags.
LIGHT_PALETTE = {
    "text": "\033[38;5;239m",
    "muted": "\033[38;5;246m",
    "border": "\033[38;5;252m",
    Priority.HIGH: "\033[38;5;96m",
    Priority.MEDIUM: "\033[38;5;101m",
    Priority.LOW: "\033[38;5;66m",
}

DARK_PALETTE = {
    "text": "\033[38;5;254m",
    "muted": "\033[38;5;246m",
    "border": "\033[38;5;238m",
    Priority.HIGH: "\033[38;5;181m",
    Priority.MEDIUM: "\033[38;5;187m",
    Priority.LOW: "\033[38;5;152m",
}

RULE_WIDTH = 48


def palette_for(board: TaskBoard) -> dict:
    return DARK_PALETTE if board.dark_mode else LIGHT_PALETTE


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color else text


def render_task(task: BoardTask, palette: dict, *, color: bool = True) -> list[str]:
    box = "[x]" if task.completed else "[ ]"
    title = task.title
    if task.completed and color:
        title = f"{STRIKE}{title}"

    head = f"{box} #{task.id} {_paint(title, palette['text'], color)}"
    if task.priority is not None:
        head += " " + _paint(f"({task.priority.value.capitalize()})", palette[task.priority], color)
    if task.date:
        head += " " + _paint(task.date, palette["muted"], color)

    lines = [head]
    if task.description:
        lines.append("      " + _paint(task.description, palette["muted"], color))
    return lines


def render_board(board: TaskBoard, *, title: str = "taskboard", color: bool = True) -> str:
    palette = palette_for(board)
    counts = board.counts()
    mode = "dark" if board.dark_mode else "light"
    rule = _paint("-" * RULE_WIDTH, palette["border"], color)

    lines = [
        _paint(f"{title} [{mode}]", palette["text"], color),
        _paint(
            f"Total {counts.total} | Completed {counts.completed} | Pending {counts.pending}",
            palette["muted"],
            color,
        ),
        rule,
    ]
    if not board.tasks:
        lines.append(_paint("No tasks yet. Use /add <title> to create one.", palette["muted"], color))
    for task in board.tasks:
        lines.extend(render_task(task, palette, color=color))
    lines.append(rule)
    return "\n".join(lines)


def render_draft(board: TaskBoard) -> str:
    d = board.draft
    pri = d.priority.value if d.priority is not None else "-"
    return (
        "Draft:\n"
        f"  title: {d.title or '-'}\n"
        f"  date: {d.date or '-'}\n"
        f"  priority: {pri}\n"
        f"  description: {d.description or '-'}"
    )
