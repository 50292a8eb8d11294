# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from jotlist.tasks.task_file import TaskFile
from jotlist.tasks.task_store import TaskStore

from fakes import FakeTaskPersistence


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep every test away from the real home directory and a developer's .env."""
    for name in ("JOTLIST_DB", "JOTLIST_DEBUG", "JOTLIST_LOG_LEVEL", "JOTLIST_LOG_FILE", "JOTLIST_APP_NAME"):
        # setenv first so teardown also removes values a .env load adds later.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "tasks.json"


@pytest.fixture()
def task_file(db_path: Path) -> TaskFile:
    return TaskFile(db_path)


@pytest.fixture()
def fake_persistence() -> FakeTaskPersistence:
    return FakeTaskPersistence()


@pytest.fixture()
def store(fake_persistence: FakeTaskPersistence) -> TaskStore:
    """Store wired to the in-memory fake (auto-saves are recorded, nothing touches disk)."""
    return TaskStore.open(fake_persistence)
