"""Tests for CLI runtime helpers and the settings validation script.

Updates:
  v0.1.0 - 2026-09-20 - Cover logging setup, LiteLLM log toggling and validate_settings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from cli.runtime import configure_litellm_logging, setup_logging
from scripts import validate_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path


@pytest.fixture()
def _restore_logging() -> Iterator[None]:
    quote_wall_logger = logging.getLogger("quote_wall")
    saved = (quote_wall_logger.level, list(quote_wall_logger.handlers), quote_wall_logger.propagate)
    yield
    quote_wall_logger.setLevel(saved[0])
    quote_wall_logger.handlers[:] = saved[1]
    quote_wall_logger.propagate = saved[2]


@pytest.mark.usefixtures("_restore_logging")
def test_setup_logging_reads_ini_file(tmp_path: Path) -> None:
    config = tmp_path / "logging.conf"
    config.write_text(
        "\n".join(
            [
                "[loggers]",
                "keys=root,quote_wall",
                "[handlers]",
                "keys=null",
                "[formatters]",
                "keys=",
                "[logger_root]",
                "level=WARNING",
                "handlers=null",
                "[logger_quote_wall]",
                "level=DEBUG",
                "handlers=null",
                "qualname=quote_wall",
                "propagate=1",
                "[handler_null]",
                "class=NullHandler",
                "args=()",
            ]
        ),
        encoding="utf-8",
    )

    setup_logging(config)

    assert logging.getLogger("quote_wall").level == logging.DEBUG


def test_configure_litellm_logging_toggles_loggers() -> None:
    configure_litellm_logging(False)
    assert logging.getLogger("LiteLLM").disabled is True
    assert logging.getLogger("litellm").level == logging.CRITICAL

    configure_litellm_logging(True)
    assert logging.getLogger("LiteLLM").disabled is False
    assert logging.getLogger("LiteLLM Router").level == logging.NOTSET


def test_validate_settings_script_reports_success(capsys: pytest.CaptureFixture[str]) -> None:
    assert validate_settings.main() == 0
    out = capsys.readouterr().out
    assert "Settings loaded successfully." in out
    assert "import_enabled=False" in out


def test_validate_settings_script_reports_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUOTE_WALL_WALLPAPER_HEIGHT", "0")
    assert validate_settings.main() == 2
