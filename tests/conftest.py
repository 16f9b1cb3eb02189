# tests/conftest.py

from __future__ import annotations

import random
from pathlib import Path
from types import SimpleNamespace

import pytest

from tasknest.cli.bootstrap import create_initial_state
from tasknest.core.state import AppState
from tasknest.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the console modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasknest-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        log_to_file=False,
        seed_default_tags=True,
        random_seed=1234,
        fallback_color="bg-gray-500",
        color_output=True,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore(rng=random.Random(42))


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)
