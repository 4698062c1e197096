"""Printable summaries for Quote Wall configuration.

Updates:
  v0.1.1 - 2026-09-28 - Report bulk import readiness and wallpaper command.
  v0.1.0 - 2026-08-30 - Render settings summary for --print-settings.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from core.factory import determine_import_status

from .utils import describe_path, mask_secret

if TYPE_CHECKING:
    from config import QuoteWallSettings


def print_settings_summary(settings: QuoteWallSettings) -> None:
    """Emit a readable summary of configuration and health checks."""
    import_enabled, import_reason = determine_import_status(settings)
    drop_params = settings.litellm_drop_params or []
    timeout = settings.litellm_timeout_seconds

    lines = [
        "Quote Wall configuration summary",
        "--------------------------------",
        "Database path: "
        + describe_path(settings.db_path, expect_directory=False, allow_missing=True),
        "Wallpaper cache: "
        + describe_path(settings.wallpaper_dir, expect_directory=True, allow_missing=True),
        f"Wallpaper size: {settings.wallpaper_width}x{settings.wallpaper_height}",
        "Font: "
        + (
            describe_path(settings.font_path, expect_directory=False)
            if settings.font_path
            else "Pillow default"
        ),
        f"Wallpaper command: {settings.wallpaper_command or 'gsettings (GNOME)'}",
        f"Background interval: {settings.background_interval_hours:g} hours",
        "",
        f"LiteLLM model: {settings.litellm_model or 'not set'}",
        f"LiteLLM API key: {mask_secret(settings.litellm_api_key)}",
        f"LiteLLM API base: {settings.litellm_api_base or 'not set'}",
        f"LiteLLM API version: {settings.litellm_api_version or 'not set'}",
        f"LiteLLM drop params: {', '.join(drop_params) if drop_params else 'none'}",
        f"LiteLLM timeout: {f'{timeout:g}s' if timeout is not None else 'provider default'}",
        f"LiteLLM attempts: {settings.litellm_max_attempts}",
        f"LiteLLM logging: {'enabled' if settings.litellm_logging_enabled else 'disabled'}",
        f"Import prompt: {'custom' if settings.import_prompt else 'default'}",
        "Bulk import: "
        + ("enabled" if import_enabled else f"disabled ({import_reason})"),
    ]
    print("\n".join(lines))


__all__ = ["print_settings_summary"]
