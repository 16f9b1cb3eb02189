# src/tasknest/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- builds the TaskStore from settings,
- wires it into AppState.
"""

from __future__ import annotations

import logging
import random

from ..config import get_settings
from ..core.state import AppState
from ..tasks.task_models import AVAILABLE_COLORS, DEFAULT_TAG_COLORS
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_store(settings) -> TaskStore:
    seed = getattr(settings, "random_seed", None)
    rng = random.Random(seed) if seed is not None else random.Random()
    default_tags = DEFAULT_TAG_COLORS if getattr(settings, "seed_default_tags", True) else ()

    return TaskStore(
        palette=AVAILABLE_COLORS,
        default_tags=default_tags,
        fallback_color=settings.fallback_color,
        rng=rng,
    )


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    state = AppState(settings=settings, store=create_store(settings))
    logger.debug("AppState created seed=%s", getattr(settings, "random_seed", None))
    return state
