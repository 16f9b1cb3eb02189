# src/tasknest/connectors/console_render.py

"""Plain-text views of the store for the console connector."""

from __future__ import annotations

from ..core.state import AppState, TaskDraft
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

EMPTY_LIST_TEXT = "No tasks yet. Add one above to get started!"
REMINDER_FORMAT = "%Y-%m-%d %H:%M"


def _show_colors(state: AppState) -> bool:
    return bool(getattr(state.settings, "color_output", True))


def format_tag(store: TaskStore, tag: str, *, with_color: bool = True) -> str:
    if not with_color:
        return f"#{tag}"
    return f"#{tag}({store.get_tag_color(tag)})"


def format_task_line(store: TaskStore, task: Task, label: str, *, with_color: bool = True) -> str:
    box = "[x]" if task.completed else "[ ]"
    if task.has_subtasks:
        marker = "▾" if task.expanded else "▸"
    else:
        marker = " "

    line = f"{label:>5} {marker} {box} {task.text}"
    if task.reminder is not None:
        line += f"  @ {task.reminder.strftime(REMINDER_FORMAT)}"
    if task.tags:
        line += "  " + " ".join(format_tag(store, t, with_color=with_color) for t in task.tags)
    return line


def render_task_list(state: AppState) -> str:
    store = state.store
    roots = store.roots
    if not roots:
        return EMPTY_LIST_TEXT

    with_color = _show_colors(state)
    lines: list[str] = []
    for n, root in enumerate(roots, start=1):
        lines.append(format_task_line(store, root, f"{n}.", with_color=with_color))
        if root.expanded:
            for m, sub in enumerate(root.subtasks, start=1):
                sub_line = format_task_line(store, sub, f"{n}.{m}", with_color=with_color)
                lines.append("    " + sub_line)
    return "\n".join(lines)


def render_draft(draft: TaskDraft) -> str:
    reminder = draft.reminder.strftime(REMINDER_FORMAT) if draft.reminder else "-"
    return (
        "Draft:\n"
        f"  text:     {draft.text or '-'}\n"
        f"  reminder: {reminder}\n"
        f"  tags:     {draft.tags or '-'}"
    )


def render_palette(store: TaskStore, tag: str) -> str:
    lines = [f'Change color for "{tag}" (current: {store.get_tag_color(tag)}):']
    for i, color in enumerate(store.palette, start=1):
        lines.append(f"  {i:>2}. {color}")
    lines.append("Use /color <number|token> to apply, /tag to close.")
    return "\n".join(lines)


def render_tag_colors(store: TaskStore) -> str:
    if not store.tag_colors:
        return "No tags registered."
    lines = ["Tags:"]
    for tc in store.tag_colors.values():
        lines.append(f"  {tc.name}: {tc.color}")
    return "\n".join(lines)
