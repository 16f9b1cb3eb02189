# src/tasknest/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Final

# Tailwind-style color tokens, kept in this order for the color picker.
AVAILABLE_COLORS: Final[tuple[str, ...]] = (
    "bg-blue-500",
    "bg-green-500",
    "bg-red-500",
    "bg-purple-500",
    "bg-orange-500",
    "bg-yellow-500",
    "bg-pink-500",
    "bg-indigo-500",
    "bg-teal-500",
    "bg-cyan-500",
)

FALLBACK_COLOR: Final[str] = "bg-gray-500"


@dataclass(frozen=True, slots=True)
class TagColor:
    name: str
    color: str


DEFAULT_TAG_COLORS: Final[tuple[TagColor, ...]] = (
    TagColor("work", "bg-blue-500"),
    TagColor("personal", "bg-green-500"),
    TagColor("urgent", "bg-red-500"),
    TagColor("shopping", "bg-purple-500"),
    TagColor("health", "bg-orange-500"),
)


@dataclass(frozen=True, slots=True)
class Task:
    """
    One node of the task tree.

    Notes:
    - instances are immutable; the store replaces them on every change
    - subtasks are owned by their root; parent_id is only a lookup key
    """

    id: str
    text: str
    completed: bool = False
    reminder: datetime | None = None
    tags: tuple[str, ...] = ()
    subtasks: tuple[Task, ...] = ()
    expanded: bool = False
    parent_id: str | None = None

    @property
    def is_subtask(self) -> bool:
        return self.parent_id is not None

    @property
    def has_subtasks(self) -> bool:
        return bool(self.subtasks)


def parse_tags(tags_csv: str | None) -> tuple[str, ...]:
    """Split a comma separated tag string. Order and duplicates are kept."""
    if not tags_csv:
        return ()
    return tuple(t for t in (p.strip() for p in tags_csv.split(",")) if t)
