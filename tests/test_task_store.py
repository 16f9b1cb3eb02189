# tests/test_task_store.py

from __future__ import annotations

import random
import string
from datetime import datetime

from tasknest.tasks.task_models import AVAILABLE_COLORS, FALLBACK_COLOR, TagColor
from tasknest.tasks.task_store import TaskStore


def test_add_root_task(store: TaskStore) -> None:
    before = len(store.roots)
    task = store.add_task("  Buy milk ")

    assert task is not None
    assert len(store.roots) == before + 1
    assert store.roots[-1] is task
    # Text is stored as entered, only the blank check trims.
    assert task.text == "  Buy milk "
    assert task.completed is False
    assert task.subtasks == ()
    assert task.parent_id is None
    assert len(task.id) == 9
    assert set(task.id) <= set(string.digits + string.ascii_lowercase)


def test_add_blank_text_is_noop(store: TaskStore) -> None:
    store.add_task("keep")
    roots = store.roots
    tags = dict(store.tag_colors)

    assert store.add_task("") is None
    assert store.add_task("   ", tags_csv="brand-new") is None

    assert store.roots == roots
    assert dict(store.tag_colors) == tags


def test_add_with_tags_registers_only_new_ones(store: TaskStore) -> None:
    size = len(store.tag_colors)
    task = store.add_task("Report", tags_csv="work, newtag, work")

    assert task is not None
    assert task.tags == ("work", "newtag", "work")
    assert len(store.tag_colors) == size + 1
    assert store.tag_colors["newtag"].color in AVAILABLE_COLORS
    # Pre-seeded entries keep their color.
    assert store.get_tag_color("work") == "bg-blue-500"


def test_new_tags_appended_in_order(store: TaskStore) -> None:
    store.add_task("x", tags_csv="zeta, alpha")
    names = list(store.tag_colors)
    assert names[-2:] == ["zeta", "alpha"]
    assert names[:5] == ["work", "personal", "urgent", "shopping", "health"]


def test_reminder_is_kept_and_empty_means_unset(store: TaskStore) -> None:
    when = datetime(2026, 10, 20, 9, 30)
    with_reminder = store.add_task("Call", when)
    without = store.add_task("Walk", None)

    assert with_reminder is not None and with_reminder.reminder == when
    assert without is not None and without.reminder is None


def test_add_subtask_via_parent_id(store: TaskStore) -> None:
    parent = store.add_task("Buy milk")
    assert parent is not None
    sub = store.add_task("Get bread", None, "", parent.id)

    assert sub is not None
    assert sub.parent_id == parent.id
    assert len(store.roots) == 1
    assert store.roots[0].subtasks == (sub,)
    # Parent's own fields are untouched.
    assert store.roots[0].text == "Buy milk"
    assert store.roots[0].expanded is False


def test_add_under_unknown_or_nested_parent_is_dropped(store: TaskStore) -> None:
    parent = store.add_task("Root")
    assert parent is not None
    sub = store.add_task("Child", parent_id=parent.id)
    assert sub is not None
    roots = store.roots

    assert store.add_task("Orphan", parent_id="missing") is None
    assert store.add_task("Grandchild", parent_id=sub.id) is None
    assert store.roots == roots


def test_dropped_subtask_still_registers_tags(store: TaskStore) -> None:
    assert store.add_task("Orphan", tags_csv="lonely", parent_id="missing") is None
    assert "lonely" in store.tag_colors


def test_ids_are_unique(store: TaskStore) -> None:
    ids = set()
    for i in range(200):
        task = store.add_task(f"t{i}")
        assert task is not None
        ids.add(task.id)
    assert len(ids) == 200


def test_ids_not_reused_after_collision() -> None:
    class StuckRandom(random.Random):
        """Returns the same id twice, then moves on."""

        def __init__(self) -> None:
            super().__init__(0)
            self.calls = 0

        def choice(self, seq):
            self.calls += 1
            return seq[0] if self.calls <= 18 else seq[1]

    store = TaskStore(default_tags=(), rng=StuckRandom())
    first = store.add_task("a")
    second = store.add_task("b")
    assert first is not None and second is not None
    assert first.id == "0" * 9
    assert second.id != first.id


def test_toggle_root_twice_restores(store: TaskStore) -> None:
    task = store.add_task("Toggle me")
    assert task is not None

    assert store.toggle_task(task.id) is True
    assert store.roots[0].completed is True
    assert store.toggle_task(task.id) is True
    assert store.roots[0].completed is False


def test_toggle_subtask_does_not_cascade(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None
    a = store.add_task("A", parent_id=parent.id)
    b = store.add_task("B", parent_id=parent.id)
    assert a is not None and b is not None

    assert store.toggle_task(a.id, parent.id) is True

    root = store.roots[0]
    assert root.completed is False
    assert root.subtasks[0].completed is True
    assert root.subtasks[1].completed is False

    # Completing the parent leaves children alone.
    store.toggle_task(parent.id)
    assert store.roots[0].completed is True
    assert store.roots[0].subtasks[1].completed is False


def test_toggle_unknown_is_noop(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None
    roots = store.roots

    assert store.toggle_task("missing") is False
    assert store.toggle_task("missing", parent.id) is False
    assert store.toggle_task(parent.id, "missing") is False
    assert store.roots == roots


def test_delete_root_removes_subtree(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    other = store.add_task("Other")
    assert parent is not None and other is not None
    store.add_task("Child", parent_id=parent.id)

    assert store.delete_task(parent.id) is True
    assert [t.id for t in store.roots] == [other.id]
    assert store.count_tasks() == 1

    roots = store.roots
    assert store.delete_task(parent.id) is False
    assert store.roots == roots


def test_delete_subtask_keeps_siblings_and_parent(store: TaskStore) -> None:
    parent = store.add_task("Parent", tags_csv="work")
    assert parent is not None
    a = store.add_task("A", parent_id=parent.id)
    b = store.add_task("B", parent_id=parent.id)
    c = store.add_task("C", parent_id=parent.id)
    assert a is not None and b is not None and c is not None
    store.toggle_expanded(parent.id)

    assert store.delete_task(b.id, parent.id) is True

    root = store.roots[0]
    assert [s.id for s in root.subtasks] == [a.id, c.id]
    assert root.text == "Parent"
    assert root.tags == ("work",)
    assert root.expanded is True


def test_delete_subtask_is_not_recursive(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None
    sub = store.add_task("Sub", parent_id=parent.id)
    assert sub is not None

    # A subtask id is not a root id.
    assert store.delete_task(sub.id) is False
    assert store.delete_task("missing", parent.id) is False
    assert store.roots[0].subtasks == (sub,)


def test_toggle_expanded_only_touches_named_root(store: TaskStore) -> None:
    a = store.add_task("A", tags_csv="urgent")
    b = store.add_task("B")
    assert a is not None and b is not None
    sub = store.add_task("A1", parent_id=a.id)
    assert sub is not None
    before_b = store.roots[1]

    assert store.toggle_expanded(a.id) is True

    root = store.roots[0]
    assert root.expanded is True
    assert root.completed is False
    assert root.tags == ("urgent",)
    assert root.subtasks == (sub,)
    assert store.roots[1] == before_b

    assert store.toggle_expanded(sub.id) is False
    assert store.toggle_expanded("missing") is False


def test_update_and_get_tag_color(store: TaskStore) -> None:
    personal = store.tag_colors["personal"]

    assert store.update_tag_color("work", "bg-pink-500") is True
    assert store.get_tag_color("work") == "bg-pink-500"
    assert store.tag_colors["personal"] == personal
    # Order is kept when recoloring.
    assert list(store.tag_colors)[0] == "work"

    assert store.update_tag_color("nonexistent", "bg-pink-500") is False
    assert "nonexistent" not in store.tag_colors
    assert store.get_tag_color("nonexistent") == FALLBACK_COLOR


def test_update_tag_color_does_not_validate_palette(store: TaskStore) -> None:
    assert store.update_tag_color("work", "not-a-color") is True
    assert store.get_tag_color("work") == "not-a-color"


def test_custom_fallback_and_no_defaults() -> None:
    store = TaskStore(default_tags=(), fallback_color="bg-black", rng=random.Random(1))
    assert len(store.tag_colors) == 0
    assert store.get_tag_color("work") == "bg-black"


def test_default_tags_seeded(store: TaskStore) -> None:
    assert store.tag_colors["shopping"] == TagColor("shopping", "bg-purple-500")


def test_add_subtask_expands_parent(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None

    assert store.add_subtask(parent.id, "   ") is None
    assert store.roots[0].expanded is False

    sub = store.add_subtask(parent.id, "Child")
    assert sub is not None
    assert sub.tags == ()
    assert sub.reminder is None
    assert sub.parent_id == parent.id
    assert store.roots[0].expanded is True
    assert store.roots[0].subtasks == (sub,)

    assert store.add_subtask("missing", "Child") is None


def test_get_task(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None
    sub = store.add_task("Sub", parent_id=parent.id)
    assert sub is not None

    assert store.get_task(parent.id) == store.roots[0]
    assert store.get_task(sub.id, parent.id) == sub
    assert store.get_task(sub.id) is None
    assert store.get_task(sub.id, "missing") is None


def test_snapshots_are_not_mutated(store: TaskStore) -> None:
    parent = store.add_task("Parent")
    assert parent is not None
    store.add_task("Sub", parent_id=parent.id)

    roots_before = store.roots
    tags_before = store.tag_colors

    store.toggle_task(parent.id)
    store.toggle_expanded(parent.id)
    store.add_task("More", tags_csv="fresh")
    store.update_tag_color("work", "bg-teal-500")

    assert roots_before[0].completed is False
    assert roots_before[0].expanded is False
    assert len(roots_before) == 1
    assert "fresh" not in tags_before
    assert tags_before["work"].color == "bg-blue-500"


def test_listeners_fire_on_changes_only(store: TaskStore) -> None:
    calls: list[int] = []

    def listener(s: TaskStore) -> None:
        calls.append(len(s.roots))

    store.add_listener(listener)

    task = store.add_task("One")
    assert task is not None
    assert calls == [1]

    store.add_task("")
    store.toggle_task("missing")
    store.delete_task("missing")
    store.toggle_expanded("missing")
    store.update_tag_color("missing", "bg-red-500")
    assert calls == [1]

    store.toggle_task(task.id)
    store.delete_task(task.id)
    assert calls == [1, 1, 0]

    store.remove_listener(listener)
    store.add_task("Two")
    assert calls == [1, 1, 0]


def test_failing_listener_does_not_break_mutation(store: TaskStore) -> None:
    seen: list[str] = []

    def broken(_s: TaskStore) -> None:
        raise RuntimeError("boom")

    store.add_listener(broken)
    store.add_listener(lambda s: seen.append("ok"))

    assert store.add_task("Still added") is not None
    assert len(store.roots) == 1
    assert seen == ["ok"]


def test_scenario_buy_milk(store: TaskStore) -> None:
    milk = store.add_task("Buy milk", None, "shopping")
    assert milk is not None
    assert len(store.roots) == 1
    assert milk.tags == ("shopping",)
    assert store.get_tag_color("shopping") == "bg-purple-500"

    bread = store.add_task("Get bread", None, "", milk.id)
    assert bread is not None
    assert store.roots[0].subtasks == (bread,)

    store.toggle_expanded(milk.id)
    assert store.roots[0].expanded is True

    store.toggle_task(bread.id, milk.id)
    assert store.roots[0].subtasks[0].completed is True
    assert store.roots[0].completed is False
