# tests/test_config.py

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

from jotlist.config import Settings, debug_db_path, default_db_path, resolve_db_path


def test_default_path_is_under_home(tmp_path: Path) -> None:
    assert resolve_db_path(None, home=tmp_path) == tmp_path / ".jotlist" / "tasks.json"
    assert resolve_db_path("   ", home=tmp_path) == default_db_path(tmp_path)


def test_file_path_used_as_is(tmp_path: Path) -> None:
    target = tmp_path / "custom" / "my_tasks.json"
    assert resolve_db_path(str(target)) == target


def test_existing_directory_gets_filename(tmp_path: Path) -> None:
    folder = tmp_path / "custom"
    folder.mkdir()
    assert resolve_db_path(str(folder)) == folder / "tasks.json"


def test_trailing_separator_means_directory(tmp_path: Path) -> None:
    raw = str(tmp_path / "not_created_yet") + os.sep
    assert resolve_db_path(raw) == tmp_path / "not_created_yet" / "tasks.json"


def test_unusable_path_is_left_for_storage_to_report(tmp_path: Path) -> None:
    target = tmp_path / ("x" * 300)
    assert resolve_db_path(str(target)) == target


def test_tilde_is_expanded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("HOME", str(tmp_path))
    assert resolve_db_path("~/t.json") == tmp_path / "t.json"


def test_debug_ignores_override(tmp_path: Path) -> None:
    expected = Path(tempfile.gettempdir()) / "jotlist_debug" / "tasks.json"
    assert debug_db_path() == expected
    assert resolve_db_path(str(tmp_path / "x.json"), debug=True) == expected


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("JOTLIST_DB", str(tmp_path / "t.json"))
    monkeypatch.setenv("JOTLIST_LOG_LEVEL", "debug")
    monkeypatch.setenv("JOTLIST_LOG_FILE", "yes")

    settings = Settings.from_env(dotenv=False)

    assert settings.db_path == tmp_path / "t.json"
    assert settings.data_dir == tmp_path
    assert settings.log_level == "DEBUG"
    assert settings.log_to_file is True
    assert settings.debug is False
    assert settings.app_name == "jotlist"


def test_settings_defaults_and_bad_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JOTLIST_LOG_LEVEL", "chatty")
    settings = Settings.from_env(dotenv=False)
    assert settings.log_level == "WARNING"
    assert settings.log_to_file is False
    assert settings.db_path == Path.home() / ".jotlist" / "tasks.json"


def test_settings_debug_mode(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("JOTLIST_DB", str(tmp_path / "t.json"))
    monkeypatch.setenv("JOTLIST_DEBUG", "1")
    settings = Settings.from_env(dotenv=False)
    assert settings.debug is True
    assert settings.db_path == debug_db_path()


def test_dotenv_does_not_override_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    (tmp_path / ".env").write_text(
        f"JOTLIST_DB={tmp_path / 'from_dotenv.json'}\nJOTLIST_APP_NAME=dotenv-name\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("JOTLIST_APP_NAME", "real-env")

    settings = Settings.from_env()

    assert settings.db_path == tmp_path / "from_dotenv.json"
    assert settings.app_name == "real-env"
