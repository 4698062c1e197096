"""Settings management utilities for Quote Wall configuration.

Updates:
  v0.2.1 - 2026-09-28 - Add import prompt override and LiteLLM retry attempts.
  v0.2.0 - 2026-09-21 - Add wallpaper command and background interval settings.
  v0.1.1 - 2026-09-14 - Load LiteLLM credentials from .env without touching os.environ.
  v0.1.0 - 2026-08-30 - Introduce pydantic-settings model with JSON config layering.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, cast

from dotenv import dotenv_values
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

ENV_PREFIX = "QUOTE_WALL_"
_DOTENV_FALLBACK_PATH = ".env"
_DEFAULT_CONFIG_PATH = Path("config") / "config.json"

DEFAULT_DB_PATH = Path("data") / "quote_wall.db"
DEFAULT_WALLPAPER_DIR = Path("data") / "wallpapers"
DEFAULT_WALLPAPER_WIDTH = 1080
DEFAULT_WALLPAPER_HEIGHT = 2400
DEFAULT_BACKGROUND_INTERVAL_HOURS = 12.0

# Field name -> accepted environment keys (prefixed with QUOTE_WALL_, and bare
# when upper case).
_ENV_ALIASES: dict[str, list[str]] = {
    "db_path": ["DB_PATH", "DATABASE_PATH", "db_path"],
    "wallpaper_dir": ["WALLPAPER_DIR", "wallpaper_dir"],
    "wallpaper_width": ["WALLPAPER_WIDTH", "wallpaper_width"],
    "wallpaper_height": ["WALLPAPER_HEIGHT", "wallpaper_height"],
    "font_path": ["FONT_PATH", "font_path"],
    "wallpaper_command": ["WALLPAPER_COMMAND", "wallpaper_command"],
    "background_interval_hours": ["BACKGROUND_INTERVAL_HOURS", "background_interval_hours"],
    "import_prompt": ["IMPORT_PROMPT", "import_prompt"],
    "litellm_model": ["LITELLM_MODEL", "litellm_model"],
    "litellm_api_key": ["LITELLM_API_KEY", "litellm_api_key"],
    "litellm_api_base": ["LITELLM_API_BASE", "litellm_api_base"],
    "litellm_api_version": ["LITELLM_API_VERSION", "litellm_api_version"],
    "litellm_drop_params": ["LITELLM_DROP_PARAMS", "litellm_drop_params"],
    "litellm_timeout_seconds": ["LITELLM_TIMEOUT_SECONDS", "litellm_timeout_seconds"],
    "litellm_max_attempts": ["LITELLM_MAX_ATTEMPTS", "litellm_max_attempts"],
    "litellm_logging_enabled": ["LITELLM_LOGGING_ENABLED", "litellm_logging_enabled"],
}

_JSON_KEYS = tuple(key for key in _ENV_ALIASES if key != "litellm_api_key")
_JSON_SECRET_KEYS = {"litellm_api_key", "LITELLM_API_KEY"}

logger = logging.getLogger("quote_wall.settings")


def _read_dotenv_values() -> dict[str, str]:
    """Load ``.env`` entries into a mapping without mutating ``os.environ``."""
    env_file_override = os.getenv(f"{ENV_PREFIX}ENV_FILE")
    if env_file_override is not None:
        candidate = env_file_override.strip()
        if not candidate:
            return {}
        path = Path(candidate).expanduser()
    else:
        path = Path(_DOTENV_FALLBACK_PATH).expanduser()
    if not path.is_file():
        return {}
    raw_values = dotenv_values(str(path))
    return {str(key): str(value) for key, value in raw_values.items() if value is not None}


class SettingsError(Exception):
    """Raised when configuration cannot be loaded or validated."""


class QuoteWallSettings(BaseSettings):
    """Validated configuration for the Quote Wall service and CLI."""

    db_path: Path = Field(
        default=DEFAULT_DB_PATH,
        description="SQLite database holding quotes, categories and settings.",
    )
    wallpaper_dir: Path = Field(
        default=DEFAULT_WALLPAPER_DIR,
        description="Directory where rendered wallpapers are cached.",
    )
    wallpaper_width: int = Field(
        default=DEFAULT_WALLPAPER_WIDTH,
        description="Rendered wallpaper width in pixels.",
    )
    wallpaper_height: int = Field(
        default=DEFAULT_WALLPAPER_HEIGHT,
        description="Rendered wallpaper height in pixels.",
    )
    font_path: Path | None = Field(
        default=None,
        description="Optional TrueType font used for rendering; Pillow's default otherwise.",
    )
    wallpaper_command: str | None = Field(
        default=None,
        description="Command template used to apply wallpapers; must contain {path}.",
    )
    background_interval_hours: float = Field(
        default=DEFAULT_BACKGROUND_INTERVAL_HOURS,
        description="Hours between daemon refreshes of the daily wallpaper.",
    )
    import_prompt: str | None = Field(
        default=None,
        description="Override for the bulk import system prompt; {categories} is substituted.",
    )
    litellm_model: str | None = Field(
        default=None,
        description="LiteLLM model identifier used for bulk import (import disabled when unset).",
    )
    litellm_api_key: str | None = Field(
        default=None,
        description="API key passed to LiteLLM.",
        repr=False,
    )
    litellm_api_base: str | None = Field(
        default=None,
        description="Optional LiteLLM API base URL.",
    )
    litellm_api_version: str | None = Field(
        default=None,
        description="Optional provider API version (e.g. Azure OpenAI).",
    )
    litellm_drop_params: list[str] | None = Field(
        default=None,
        description="Request parameters removed before calling LiteLLM.",
    )
    litellm_timeout_seconds: float | None = Field(
        default=None,
        description="Optional timeout forwarded to LiteLLM completion calls.",
    )
    litellm_max_attempts: int = Field(
        default=3,
        description="Attempts per import request, including retries of transient failures.",
    )
    litellm_logging_enabled: bool = Field(
        default=False,
        description="Let LiteLLM emit its own log records.",
    )

    model_config = cast(
        "SettingsConfigDict",
        {
            "env_prefix": ENV_PREFIX,
            "case_sensitive": False,
            "populate_by_name": True,
        },
    )

    @field_validator("db_path", "wallpaper_dir", mode="before")
    def _normalise_path(cls, value: Any) -> Path:
        """Expand user-relative paths and coerce values to Path instances."""
        if value is None or str(value).strip() == "":
            raise ValueError("a filesystem path is required")
        return Path(str(value).strip()).expanduser().resolve()

    @field_validator("font_path", mode="before")
    def _normalise_optional_path(cls, value: Any) -> Path | None:
        if value in (None, ""):
            return None
        return Path(str(value).strip()).expanduser().resolve()

    @field_validator("wallpaper_width", "wallpaper_height")
    def _validate_dimension(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("wallpaper dimensions must be greater than zero")
        return value

    @field_validator("background_interval_hours")
    def _validate_interval(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("background_interval_hours must be greater than zero")
        return value

    @field_validator("litellm_timeout_seconds")
    def _validate_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("litellm_timeout_seconds must be greater than zero")
        return value

    @field_validator("litellm_max_attempts")
    def _validate_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("litellm_max_attempts must be at least 1")
        return value

    @field_validator(
        "litellm_model",
        "litellm_api_key",
        "litellm_api_base",
        "litellm_api_version",
        "import_prompt",
        mode="before",
    )
    def _strip_strings(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        return stripped or None

    @field_validator("wallpaper_command", mode="before")
    def _validate_command(cls, value: str | None) -> str | None:
        if value is None:
            return None
        stripped = str(value).strip()
        if not stripped:
            return None
        if "{path}" not in stripped:
            raise ValueError("wallpaper_command must contain the {path} placeholder")
        return stripped

    @field_validator("litellm_drop_params", mode="before")
    def _normalise_drop_params(cls, value: object) -> list[str] | None:
        if value in (None, "", [], ()):  # type: ignore[comparison-overlap]
            return None
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                return None
            try:
                parsed = json.loads(stripped)
            except json.JSONDecodeError:
                items = [item.strip() for item in stripped.split(",") if item.strip()]
            else:
                if isinstance(parsed, Sequence) and not isinstance(parsed, (str, bytes, bytearray)):
                    sequence = cast("Sequence[object]", parsed)
                    items = [str(item).strip() for item in sequence if str(item).strip()]
                else:
                    items = [str(parsed).strip()]
            return items or None
        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            sequence_value = cast("Sequence[object]", value)
            items = [str(item).strip() for item in sequence_value if str(item).strip()]
            return items or None
        raise ValueError(
            "litellm_drop_params must be a list, comma-separated string, or JSON array"
        )

    @property
    def background_interval_seconds(self) -> float:
        return self.background_interval_hours * 3600

    @property
    def import_enabled(self) -> bool:
        return self.litellm_model is not None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
        PydanticBaseSettingsSource,
    ]:
        """Define configuration source precedence.

        Order (highest → lowest):
            1. Explicit keyword arguments (e.g. load_settings(db_path="...")).
            2. JSON configuration file.
            3. Environment variables / ``.env`` entries and their aliases.
            4. File secrets.
        """

        def env_with_aliases(_: BaseSettings | None = None) -> dict[str, Any]:
            data: dict[str, Any] = {}
            dotenv_data = _read_dotenv_values()

            def _lookup(candidate: str) -> str | None:
                value = os.getenv(candidate)
                if value is None:
                    value = dotenv_data.get(candidate)
                if value is None:
                    return None
                stripped_value = str(value).strip()
                return stripped_value or None

            for field, keys in _ENV_ALIASES.items():
                for key in keys:
                    candidates = [f"{ENV_PREFIX}{key}", f"{ENV_PREFIX}{key.upper()}"]
                    if key.isupper():
                        candidates.append(key)
                    value = next(
                        (found for found in map(_lookup, candidates) if found is not None),
                        None,
                    )
                    if value is not None:
                        data[field] = value
                        break
            return data

        return (
            init_settings,
            cls._json_config_settings_source(settings_cls),
            cast("PydanticBaseSettingsSource", env_with_aliases),
            file_secret_settings,
        )

    @classmethod
    def _json_config_settings_source(
        cls,
        _: type[BaseSettings],
    ) -> PydanticBaseSettingsSource:
        """Return settings extracted from an optional JSON config file."""

        def _loader(_: BaseSettings | None = None) -> dict[str, Any]:
            explicit_path = os.getenv(f"{ENV_PREFIX}CONFIG_JSON")
            if explicit_path:
                path = Path(explicit_path).expanduser()
                if not path.exists():
                    raise SettingsError(f"Configuration file not found: {path}")
            else:
                path = _DEFAULT_CONFIG_PATH
                if not path.exists():
                    return {}
            return _read_json_config(path)

        return cast("PydanticBaseSettingsSource", _loader)


def _read_json_config(path: Path) -> dict[str, Any]:
    try:
        raw_contents = path.read_text(encoding="utf-8")
    except OSError as exc:  # pragma: no cover - filesystem failure is env-specific
        raise SettingsError(f"Unable to read configuration file: {path}") from exc
    try:
        data = json.loads(raw_contents)
    except json.JSONDecodeError as exc:
        raise SettingsError(f"Invalid JSON in configuration file: {path}") from exc
    if not isinstance(data, dict):
        raise SettingsError(f"Configuration file {path} must contain a JSON object")

    mapping_data = cast("Mapping[object, Any]", data)
    data_dict: dict[str, Any] = {str(key): value for key, value in mapping_data.items()}
    removed_secrets = sorted(key for key in _JSON_SECRET_KEYS if key in data_dict)
    if removed_secrets:
        logger.warning(
            "Ignoring secret key(s) %s in configuration file %s; "
            "set credentials via environment variables instead.",
            ", ".join(removed_secrets),
            path,
        )
    mapped: dict[str, Any] = {}
    if "database_path" in data_dict and "db_path" not in data_dict:
        mapped["db_path"] = data_dict["database_path"]
    for key in _JSON_KEYS:
        if key in data_dict:
            mapped[key] = data_dict[key]
    return mapped


def load_settings(**overrides: Any) -> QuoteWallSettings:
    """Return validated settings, raising SettingsError on failure."""
    try:
        return QuoteWallSettings(**overrides)
    except SettingsError:
        raise
    except ValidationError as exc:
        raise SettingsError(f"Invalid Quote Wall configuration: {exc}") from exc


__all__ = [
    "DEFAULT_BACKGROUND_INTERVAL_HOURS",
    "DEFAULT_DB_PATH",
    "DEFAULT_WALLPAPER_DIR",
    "DEFAULT_WALLPAPER_HEIGHT",
    "DEFAULT_WALLPAPER_WIDTH",
    "ENV_PREFIX",
    "QuoteWallSettings",
    "SettingsError",
    "load_settings",
]
