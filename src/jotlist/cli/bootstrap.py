# src/jotlist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- turns Settings into a TaskFile for the resolved path,
- opens the TaskStore on top of it (or restores it from backup).
"""

from __future__ import annotations

import logging

from ..config import Settings
from ..core.ports import RestoreResult
from ..tasks.task_file import TaskFile
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def create_task_file(settings: Settings) -> TaskFile:
    if settings.debug:
        logger.info("Debug mode: using %s", settings.db_path)
    return TaskFile(settings.db_path)


def open_store(settings: Settings) -> TaskStore:
    """Load the store for the configured path."""
    return TaskStore.open(create_task_file(settings))


def restore_store(settings: Settings) -> tuple[TaskStore, RestoreResult]:
    return TaskStore.from_backup(create_task_file(settings))
