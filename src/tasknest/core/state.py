# src/tasknest/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore


@dataclass
class TaskDraft:
    """Pending input of the "new task" form. Not part of the store."""

    text: str = ""
    reminder: datetime | None = None
    tags: str = ""

    def clear(self) -> None:
        self.text = ""
        self.reminder = None
        self.tags = ""


@dataclass
class AppState:
    # Settings are kept on the state so renderers and commands can read them.
    settings: object
    store: TaskStore

    draft: TaskDraft = field(default_factory=TaskDraft)
    # Tag whose color picker is currently open.
    editing_tag: str | None = None


def submit_draft(state: AppState, parent_id: str | None = None) -> Task | None:
    """
    Add a task from the draft fields.

    The draft is cleared once the text passes the non-blank check, even if the
    store then drops the task (unknown parent).
    """
    draft = state.draft
    if not draft.text.strip():
        return None

    task = state.store.add_task(draft.text, draft.reminder, draft.tags, parent_id)
    draft.clear()
    return task
