"""Tests for configuration loading and validation logic.

Updates:
  v0.2.0 - 2026-09-28 - Cover wallpaper command, interval and retry attempt validation.
  v0.1.1 - 2026-09-14 - Warn and ignore LiteLLM API secrets supplied via JSON configuration.
  v0.1.0 - 2026-08-30 - Cover JSON/env precedence and validation errors.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest
from pytest import LogCaptureFixture, MonkeyPatch

from config import QuoteWallSettings, SettingsError, load_settings
from config.settings import DEFAULT_WALLPAPER_HEIGHT, DEFAULT_WALLPAPER_WIDTH


def test_defaults_without_configuration() -> None:
    """Settings load with documented defaults when nothing is configured."""
    settings = load_settings()

    assert isinstance(settings, QuoteWallSettings)
    assert settings.db_path == (Path("data") / "quote_wall.db").resolve()
    assert settings.wallpaper_width == DEFAULT_WALLPAPER_WIDTH
    assert settings.wallpaper_height == DEFAULT_WALLPAPER_HEIGHT
    assert settings.background_interval_seconds == 12 * 3600
    assert settings.litellm_model is None
    assert settings.import_enabled is False


def test_load_settings_reads_json_and_env(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    """JSON configuration is loaded and the environment fills missing values."""
    db_path_value = str(tmp_path / "from_json.db")
    config_path = tmp_path / "settings.json"
    config_path.write_text(
        json.dumps({"database_path": db_path_value, "wallpaper_width": 720}),
        encoding="utf-8",
    )
    monkeypatch.setenv("QUOTE_WALL_CONFIG_JSON", str(config_path))
    monkeypatch.setenv("QUOTE_WALL_WALLPAPER_WIDTH", "1440")
    monkeypatch.setenv("QUOTE_WALL_WALLPAPER_HEIGHT", "3200")

    settings = load_settings()

    assert settings.db_path == Path(db_path_value)
    # JSON is higher precedence for overlapping keys
    assert settings.wallpaper_width == 720
    assert settings.wallpaper_height == 3200


def test_explicit_overrides_win(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("QUOTE_WALL_WALLPAPER_DIR", str(tmp_path / "env"))
    settings = load_settings(wallpaper_dir=tmp_path / "explicit")
    assert settings.wallpaper_dir == (tmp_path / "explicit").resolve()


def test_missing_explicit_json_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("QUOTE_WALL_CONFIG_JSON", str(tmp_path / "absent.json"))
    with pytest.raises(SettingsError):
        load_settings()


def test_invalid_json_raises(monkeypatch: MonkeyPatch, tmp_path: Path) -> None:
    config_path = tmp_path / "broken.json"
    config_path.write_text("{not json", encoding="utf-8")
    monkeypatch.setenv("QUOTE_WALL_CONFIG_JSON", str(config_path))
    with pytest.raises(SettingsError):
        load_settings()


def test_json_with_litellm_api_key_is_ignored(
    monkeypatch: MonkeyPatch,
    tmp_path: Path,
    caplog: LogCaptureFixture,
) -> None:
    """LiteLLM API keys present in JSON configs are ignored with a warning."""
    config_path = tmp_path / "settings.json"
    config_path.write_text(
        json.dumps({"litellm_model": "gpt-4o-mini", "litellm_api_key": "from-json"}),
        encoding="utf-8",
    )
    monkeypatch.setenv("QUOTE_WALL_CONFIG_JSON", str(config_path))

    with caplog.at_level(logging.WARNING, logger="quote_wall.settings"):
        settings = load_settings()

    assert settings.litellm_model == "gpt-4o-mini"
    assert settings.litellm_api_key is None
    assert "Ignoring secret key(s)" in caplog.text


def test_api_key_from_bare_environment_alias(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv("LITELLM_API_KEY", "sk-bare")
    monkeypatch.setenv("QUOTE_WALL_LITELLM_MODEL", "gpt-4o-mini")

    settings = load_settings()

    assert settings.litellm_api_key == "sk-bare"
    assert settings.import_enabled is True
    assert "sk-bare" not in repr(settings)


def test_env_file_is_read_without_touching_environ(
    monkeypatch: MonkeyPatch,
    tmp_path: Path,
) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("QUOTE_WALL_LITELLM_MODEL=claude-from-dotenv\n", encoding="utf-8")
    monkeypatch.setenv("QUOTE_WALL_ENV_FILE", str(env_file))

    settings = load_settings()

    assert settings.litellm_model == "claude-from-dotenv"
    assert "QUOTE_WALL_LITELLM_MODEL" not in os.environ


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("temperature,max_tokens", ["temperature", "max_tokens"]),
        ('["timeout"]', ["timeout"]),
        ("", None),
    ],
)
def test_drop_params_parsing(
    monkeypatch: MonkeyPatch,
    raw: str,
    expected: list[str] | None,
) -> None:
    monkeypatch.setenv("QUOTE_WALL_LITELLM_DROP_PARAMS", raw)
    assert load_settings().litellm_drop_params == expected


@pytest.mark.parametrize(
    "overrides",
    [
        {"wallpaper_width": 0},
        {"wallpaper_height": -5},
        {"background_interval_hours": 0},
        {"litellm_timeout_seconds": 0},
        {"litellm_max_attempts": 0},
        {"wallpaper_command": "feh --bg-fill"},
    ],
)
def test_invalid_values_raise_settings_error(overrides: dict[str, object]) -> None:
    with pytest.raises(SettingsError):
        load_settings(**overrides)


def test_wallpaper_command_requires_placeholder() -> None:
    settings = load_settings(wallpaper_command="  feh --bg-fill {path}  ")
    assert settings.wallpaper_command == "feh --bg-fill {path}"
    assert load_settings(wallpaper_command="   ").wallpaper_command is None
