"""Utility script to load and print Quote Wall settings for diagnostics.

Updates:
  v0.1.0 - 2026-09-02 - Add validation helper for environment/config debugging.
"""

from __future__ import annotations

import traceback

from config.settings import SettingsError, load_settings


def main() -> int:
    """Load settings and report validation outcomes."""
    try:
        settings = load_settings()
    except SettingsError:
        traceback.print_exc()
        return 2
    print("Settings loaded successfully.")
    print(f"db_path={settings.db_path}")
    print(f"wallpaper_dir={settings.wallpaper_dir}")
    print(f"wallpaper_size={settings.wallpaper_width}x{settings.wallpaper_height}")
    print(f"import_enabled={settings.import_enabled}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
