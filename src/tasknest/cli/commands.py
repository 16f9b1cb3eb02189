# src/tasknest/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..connectors.console_render import (
    render_draft,
    render_palette,
    render_tag_colors,
    render_task_list,
)
from ..core.refs import TaskRefError, resolve_ref
from ..core.state import AppState, submit_draft

# (state, whitespace-split args, raw text after the command word)
CommandHandler = Callable[[AppState, list[str], str], str]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

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

    def handle(
        self,
        state: AppState,
        line: str,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        head = line[1:].split(None, 1)
        if not head:
            return "Empty command. Use /help to list available commands."

        name = head[0].lower()
        raw = head[1] if len(head) > 1 else ""
        args = raw.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args, raw)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_reminder(raw: str) -> datetime:
    """Accept the datetime-local format (2024-05-01T09:30) or a space instead of T."""
    return datetime.fromisoformat(raw.strip().replace(" ", "T", 1))


def add_from_input(state: AppState, text: str) -> str:
    """Plain console input: put it into the draft and submit, like pressing Enter."""
    state.draft.text = text
    task = submit_draft(state)
    if task is None:
        return "Nothing added (task text is empty)."
    return f"Added: {task.text}"


def cmd_help(state: AppState, args: list[str], raw: str) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str], raw: str) -> str:
    return render_task_list(state)


def cmd_status(state: AppState, args: list[str], raw: str) -> str:
    store = state.store
    done = sum(1 for r in store.roots if r.completed) + sum(
        1 for r in store.roots for s in r.subtasks if s.completed
    )
    app_name = getattr(state.settings, "app_name", "tasknest")
    return (
        f"{app_name} status:\n"
        f"  Tasks: {len(store.roots)} root, {store.count_tasks()} total, {done} completed\n"
        f"  Tags: {len(store.tag_colors)} registered\n"
        f"  Editing tag: {state.editing_tag or '-'}"
    )


def cmd_text(state: AppState, args: list[str], raw: str) -> str:
    state.draft.text = raw
    return render_draft(state.draft)


def cmd_remind(state: AppState, args: list[str], raw: str) -> str:
    """
    /remind                   -> show draft
    /remind 2024-05-01T09:30  -> set draft reminder
    /remind clear             -> unset draft reminder
    """
    if not args:
        return render_draft(state.draft)

    value = raw.strip()
    if value.lower() in ("clear", "none", "-"):
        state.draft.reminder = None
        return render_draft(state.draft)

    try:
        state.draft.reminder = parse_reminder(value)
    except ValueError:
        return f"Bad reminder: {value!r}. Use YYYY-MM-DDTHH:MM."
    return render_draft(state.draft)


def cmd_tags(state: AppState, args: list[str], raw: str) -> str:
    state.draft.tags = raw
    return render_draft(state.draft)


def cmd_draft(state: AppState, args: list[str], raw: str) -> str:
    return render_draft(state.draft)


def cmd_add(state: AppState, args: list[str], raw: str) -> str:
    if args:
        state.draft.text = raw
    task = submit_draft(state)
    if task is None:
        return "Nothing added (task text is empty). Use /add <text> or /text <text>."
    return f"Added: {task.text}"


def cmd_sub(state: AppState, args: list[str], raw: str) -> str:
    if len(args) < 2:
        return "Usage: /sub <N> <text>"
    try:
        ref = resolve_ref(state.store, args[0])
    except TaskRefError as e:
        return str(e)
    if ref.task.is_subtask:
        return "Subtasks cannot have subtasks."

    text = raw.split(None, 1)[1]
    task = state.store.add_subtask(ref.task.id, text)
    if task is None:
        return "Nothing added (subtask text is empty)."
    return f"Added subtask to {ref.task.text!r}: {task.text}"


def cmd_done(state: AppState, args: list[str], raw: str) -> str:
    if len(args) != 1:
        return "Usage: /done <N | N.M>"
    try:
        ref = resolve_ref(state.store, args[0])
    except TaskRefError as e:
        return str(e)

    state.store.toggle_task(ref.task.id, ref.parent_id)
    now = state.store.get_task(ref.task.id, ref.parent_id)
    mark = "completed" if now is not None and now.completed else "not completed"
    return f"{ref.task.text}: {mark}"


def cmd_del(state: AppState, args: list[str], raw: str) -> str:
    if len(args) != 1:
        return "Usage: /del <N | N.M>"
    try:
        ref = resolve_ref(state.store, args[0])
    except TaskRefError as e:
        return str(e)

    state.store.delete_task(ref.task.id, ref.parent_id)
    return f"Deleted: {ref.task.text}"


def cmd_expand(state: AppState, args: list[str], raw: str) -> str:
    if len(args) != 1:
        return "Usage: /expand <N>"
    try:
        ref = resolve_ref(state.store, args[0])
    except TaskRefError as e:
        return str(e)
    if ref.task.is_subtask:
        return "Only top-level tasks can be expanded."

    state.store.toggle_expanded(ref.task.id)
    return render_task_list(state)


def cmd_tag(state: AppState, args: list[str], raw: str) -> str:
    """
    /tag         -> close the color picker
    /tag <name>  -> open the color picker for <name> (again to close)
    """
    if not args:
        state.editing_tag = None
        return "Color picker closed."

    name = raw.strip()
    if state.editing_tag == name:
        state.editing_tag = None
        return "Color picker closed."

    state.editing_tag = name
    logger.debug("Color picker opened tag=%s", name)
    return render_palette(state.store, name)


def cmd_color(state: AppState, args: list[str], raw: str) -> str:
    tag = state.editing_tag
    if tag is None:
        return "No tag selected. Use /tag <name> first."
    if len(args) != 1:
        return "Usage: /color <number | token>"

    palette = state.store.palette
    choice = args[0]
    if choice.isdigit():
        idx = int(choice)
        if not 1 <= idx <= len(palette):
            return f"Pick a color between 1 and {len(palette)}."
        color = palette[idx - 1]
    elif choice in palette:
        color = choice
    else:
        return f"Unknown color: {choice}. Use /tag {tag} to see the palette."

    changed = state.store.update_tag_color(tag, color)
    state.editing_tag = None
    if not changed:
        return f"Unknown tag: {tag!r}. Tags are registered when a task uses them."
    return f"Tag {tag!r} color: {state.store.get_tag_color(tag)}"


def cmd_tagcolors(state: AppState, args: list[str], raw: str) -> str:
    return render_tag_colors(state.store)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show task and tag counts.")
registry.register("text", cmd_text, help_text="Set draft text: /text <text>.")
registry.register(
    "remind", cmd_remind, help_text="Set draft reminder: /remind YYYY-MM-DDTHH:MM | /remind clear."
)
registry.register("tags", cmd_tags, help_text="Set draft tags: /tags work, urgent.")
registry.register("draft", cmd_draft, help_text="Show the pending draft.")
registry.register("add", cmd_add, help_text="Add the draft as a task: /add [text].")
registry.register("sub", cmd_sub, help_text="Add a subtask: /sub <N> <text>.")
registry.register(
    "done", cmd_done, help_text="Toggle completion: /done <N | N.M>.", aliases=["toggle"]
)
registry.register("del", cmd_del, help_text="Delete a task: /del <N | N.M>.", aliases=["rm"])
registry.register("expand", cmd_expand, help_text="Show/hide subtasks: /expand <N>.")
registry.register("tag", cmd_tag, help_text="Open/close the color picker: /tag <name>.")
registry.register(
    "color", cmd_color, help_text="Recolor the selected tag: /color <number | token>."
)
registry.register("tagcolors", cmd_tagcolors, help_text="List tag colors.")
