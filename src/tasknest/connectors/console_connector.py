# src/tasknest/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import add_from_input, registry as command_registry
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from .console_render import render_task_list

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def handle_line(state: AppState, line: str) -> str | None:
    """
    Turn one line of console input into a reply.

    Slash commands go to the registry, anything else is added as a task
    exactly as typed (the store keeps task text untrimmed).
    Returns None for blank input.
    """
    stripped = line.strip()
    if not stripped:
        return None

    try:
        if stripped.startswith("/"):
            reply = command_registry.handle(state, line.lstrip())
        else:
            reply = add_from_input(state, line)
    except Exception:
        logger.exception("Command handler crashed line=%r", line)
        return "Internal error while handling a command."
    return reply


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Read lines until /exit or EOF.

    The loop observes the store: after any line that changed it, the task
    list is printed again (unless the reply already was the task list).
    """
    app_name = str(getattr(state.settings, "app_name", "tasknest"))
    store = state.store
    changed = False

    def on_change(s: TaskStore) -> None:
        nonlocal changed
        changed = True
        logger.debug("Store changed: %d tasks, %d tags", s.count_tasks(), len(s.tag_colors))

    store.add_listener(on_change)
    logger.info("Console connector started (app=%s).", app_name)
    write(f"[{app_name}] My Tasks. Type a task to add it, /help for commands, /exit to quit.\n")
    write(render_task_list(state))

    try:
        while True:
            try:
                user_input = read(">>> ")
            except EOFError:
                logger.info("Console EOF received, exiting.")
                break
            except KeyboardInterrupt:
                logger.info("Console KeyboardInterrupt, exiting.")
                write("")
                break

            if user_input.strip().lower() in EXIT_COMMANDS:
                logger.info("Console exit command received.")
                break

            changed = False
            reply = handle_line(state, user_input)
            if reply is not None:
                write(reply)
            if changed:
                listing = render_task_list(state)
                if reply != listing:
                    write(listing)
    finally:
        store.remove_listener(on_change)

    logger.info("Console connector finished.")
