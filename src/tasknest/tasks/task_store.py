# src/tasknest/tasks/task_store.py

from __future__ import annotations

import logging
import random
import string
from collections.abc import Callable, Iterable, Mapping
from dataclasses import replace
from datetime import datetime
from types import MappingProxyType

from .task_models import (
    AVAILABLE_COLORS,
    DEFAULT_TAG_COLORS,
    FALLBACK_COLOR,
    TagColor,
    Task,
    parse_tags,
)

logger = logging.getLogger(__name__)

StoreListener = Callable[["TaskStore"], None]

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_LENGTH = 9


def _index_of(tasks: tuple[Task, ...], task_id: str) -> int | None:
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    return None


def _replace_at(tasks: tuple[Task, ...], index: int, task: Task) -> tuple[Task, ...]:
    return tasks[:index] + (task,) + tasks[index + 1 :]


def _drop_at(tasks: tuple[Task, ...], index: int) -> tuple[Task, ...]:
    return tasks[:index] + tasks[index + 1 :]


class TaskStore:
    """
    In-memory task tree and tag color registry.

    State:
    - roots: top-level tasks, each owning its own subtasks
    - tag_colors: tag name -> TagColor, insertion ordered, never shrinks

    Every invalid call (blank text, unknown id, unknown tag) is a silent no-op.
    Mutations build new tuples/instances and swap them in with one assignment,
    so a snapshot of `roots` taken earlier never changes under the reader.
    """

    def __init__(
        self,
        *,
        palette: Iterable[str] = AVAILABLE_COLORS,
        default_tags: Iterable[TagColor] = DEFAULT_TAG_COLORS,
        fallback_color: str = FALLBACK_COLOR,
        rng: random.Random | None = None,
    ) -> None:
        self._palette = tuple(palette)
        if not self._palette:
            raise ValueError("palette must not be empty")
        self._fallback_color = fallback_color
        self._rng = rng or random.Random()

        self._roots: tuple[Task, ...] = ()
        self._tag_colors: dict[str, TagColor] = {}
        for tc in default_tags:
            self._tag_colors.setdefault(tc.name, tc)

        self._issued_ids: set[str] = set()
        self._listeners: list[StoreListener] = []

        logger.info(
            "TaskStore ready palette=%d seeded_tags=%d",
            len(self._palette),
            len(self._tag_colors),
        )

    # ---- read-only state ----

    @property
    def roots(self) -> tuple[Task, ...]:
        return self._roots

    @property
    def tag_colors(self) -> Mapping[str, TagColor]:
        return MappingProxyType(self._tag_colors)

    @property
    def palette(self) -> tuple[str, ...]:
        return self._palette

    @property
    def fallback_color(self) -> str:
        return self._fallback_color

    def count_tasks(self) -> int:
        return sum(1 + len(root.subtasks) for root in self._roots)

    def get_task(self, task_id: str, parent_id: str | None = None) -> Task | None:
        """Locate a root, or a direct subtask of the root `parent_id`."""
        if parent_id:
            pidx = _index_of(self._roots, parent_id)
            if pidx is None:
                return None
            subtasks = self._roots[pidx].subtasks
            sidx = _index_of(subtasks, task_id)
            return subtasks[sidx] if sidx is not None else None

        idx = _index_of(self._roots, task_id)
        return self._roots[idx] if idx is not None else None

    def get_tag_color(self, tag_name: str) -> str:
        tc = self._tag_colors.get(tag_name)
        return tc.color if tc is not None else self._fallback_color

    # ---- listeners ----

    def add_listener(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("TaskStore listener %r failed", listener)

    # ---- internals ----

    def _new_id(self) -> str:
        while True:
            task_id = "".join(self._rng.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))
            if task_id not in self._issued_ids:
                self._issued_ids.add(task_id)
                return task_id

    def _register_tags(self, tags: Iterable[str]) -> bool:
        added: dict[str, TagColor] = {}
        for tag in tags:
            if tag in self._tag_colors or tag in added:
                continue
            added[tag] = TagColor(tag, self._rng.choice(self._palette))
            logger.debug("Tag registered name=%s color=%s", tag, added[tag].color)

        if not added:
            return False
        self._tag_colors = {**self._tag_colors, **added}
        return True

    def _map_task(self, task_id: str, parent_id: str | None, fn: Callable[[Task], Task]) -> bool:
        if not parent_id:
            idx = _index_of(self._roots, task_id)
            if idx is None:
                return False
            self._roots = _replace_at(self._roots, idx, fn(self._roots[idx]))
            return True

        pidx = _index_of(self._roots, parent_id)
        if pidx is None:
            return False
        parent = self._roots[pidx]
        sidx = _index_of(parent.subtasks, task_id)
        if sidx is None:
            return False
        subtasks = _replace_at(parent.subtasks, sidx, fn(parent.subtasks[sidx]))
        self._roots = _replace_at(self._roots, pidx, replace(parent, subtasks=subtasks))
        return True

    # ---- public API ----

    def add_task(
        self,
        text: str,
        reminder: datetime | None = None,
        tags_csv: str | None = "",
        parent_id: str | None = None,
    ) -> Task | None:
        """
        Create a task and append it to the roots, or to the subtasks of root `parent_id`.

        Returns the new task, or None when nothing was added:
        - text is blank
        - parent_id does not name a root (subtasks cannot be nested further)

        Unseen tags are registered even if the task itself is then dropped.
        """
        if not text or not text.strip():
            logger.debug("add_task ignored: blank text")
            return None

        tags = parse_tags(tags_csv)
        tags_changed = self._register_tags(tags)

        task = Task(
            id=self._new_id(),
            text=text,
            reminder=reminder or None,
            tags=tags,
            parent_id=parent_id or None,
        )

        if parent_id:
            pidx = _index_of(self._roots, parent_id)
            if pidx is None:
                logger.debug("add_task dropped: no root with id=%s", parent_id)
                if tags_changed:
                    self._notify()
                return None
            parent = self._roots[pidx]
            self._roots = _replace_at(
                self._roots, pidx, replace(parent, subtasks=parent.subtasks + (task,))
            )
        else:
            self._roots = self._roots + (task,)

        logger.debug("Task added id=%s parent_id=%s tags=%s", task.id, task.parent_id, list(tags))
        self._notify()
        return task

    def add_subtask(self, parent_id: str, text: str) -> Task | None:
        """Append a plain subtask to root `parent_id` and expand that root."""
        if not text or not text.strip():
            logger.debug("add_subtask ignored: blank text")
            return None

        pidx = _index_of(self._roots, parent_id)
        if pidx is None:
            logger.debug("add_subtask dropped: no root with id=%s", parent_id)
            return None

        parent = self._roots[pidx]
        task = Task(id=self._new_id(), text=text, parent_id=parent.id)
        self._roots = _replace_at(
            self._roots,
            pidx,
            replace(parent, subtasks=parent.subtasks + (task,), expanded=True),
        )
        logger.debug("Subtask added id=%s parent_id=%s", task.id, parent.id)
        self._notify()
        return task

    def delete_task(self, task_id: str, parent_id: str | None = None) -> bool:
        """Remove a root (with its whole subtree) or one direct subtask of `parent_id`."""
        if parent_id:
            pidx = _index_of(self._roots, parent_id)
            sidx = _index_of(self._roots[pidx].subtasks, task_id) if pidx is not None else None
            if pidx is None or sidx is None:
                logger.debug("delete_task no-op id=%s parent_id=%s", task_id, parent_id)
                return False
            parent = self._roots[pidx]
            self._roots = _replace_at(
                self._roots, pidx, replace(parent, subtasks=_drop_at(parent.subtasks, sidx))
            )
        else:
            idx = _index_of(self._roots, task_id)
            if idx is None:
                logger.debug("delete_task no-op id=%s", task_id)
                return False
            self._roots = _drop_at(self._roots, idx)

        logger.debug("Task deleted id=%s parent_id=%s", task_id, parent_id)
        self._notify()
        return True

    def toggle_task(self, task_id: str, parent_id: str | None = None) -> bool:
        """Flip `completed` on one task. Parents and children are left alone."""
        if not self._map_task(task_id, parent_id, lambda t: replace(t, completed=not t.completed)):
            logger.debug("toggle_task no-op id=%s parent_id=%s", task_id, parent_id)
            return False
        logger.debug("Task toggled id=%s parent_id=%s", task_id, parent_id)
        self._notify()
        return True

    def toggle_expanded(self, task_id: str) -> bool:
        if not self._map_task(task_id, None, lambda t: replace(t, expanded=not t.expanded)):
            logger.debug("toggle_expanded no-op id=%s", task_id)
            return False
        self._notify()
        return True

    def update_tag_color(self, tag_name: str, new_color: str) -> bool:
        """Recolor a known tag. The color is not checked against the palette."""
        if tag_name not in self._tag_colors:
            logger.debug("update_tag_color no-op: unknown tag %s", tag_name)
            return False
        self._tag_colors = {**self._tag_colors, tag_name: TagColor(tag_name, new_color)}
        logger.debug("Tag color updated name=%s color=%s", tag_name, new_color)
        self._notify()
        return True
