# src/tasknest/core/refs.py

"""
Task references as typed in the console.

"3" is the third root, "3.2" is the second subtask of the third root.
Numbers are 1-based and follow the current order of `TaskStore.roots`.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore


class TaskRefError(ValueError):
    """Raised when a typed reference does not point to an existing task."""


@dataclass(frozen=True, slots=True)
class TaskRef:
    task: Task
    parent_id: str | None = None


def _position(raw: str, what: str) -> int:
    try:
        n = int(raw)
    except ValueError:
        raise TaskRefError(f"Not a {what} number: {raw!r}") from None
    if n < 1:
        raise TaskRefError(f"{what.capitalize()} numbers start at 1.")
    return n


def resolve_ref(store: TaskStore, raw: str) -> TaskRef:
    parts = raw.strip().split(".")
    if len(parts) not in (1, 2):
        raise TaskRefError(f"Bad task reference: {raw!r} (use N or N.M)")

    roots = store.roots
    n = _position(parts[0], "task")
    if n > len(roots):
        raise TaskRefError(f"No task #{n}.")
    root = roots[n - 1]

    if len(parts) == 1:
        return TaskRef(task=root)

    m = _position(parts[1], "subtask")
    if m > len(root.subtasks):
        raise TaskRefError(f"Task #{n} has no subtask #{m}.")
    return TaskRef(task=root.subtasks[m - 1], parent_id=root.id)
