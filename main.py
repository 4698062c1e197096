"""Application entry point for Quote Wall.

Updates:
  v0.3.1 - 2026-10-17 - Always build the service before dispatching a command.
  v0.3.0 - 2026-09-28 - Dispatch coroutine command handlers through asyncio.run.
  v0.2.0 - 2026-09-20 - Apply LiteLLM logging toggle from settings.
  v0.1.0 - 2026-08-30 - Wire settings, logging and the quote wall service into the CLI.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from cli.commands import COMMAND_SPECS
from cli.parser import parse_args
from cli.runtime import configure_litellm_logging, setup_logging
from cli.settings_summary import print_settings_summary
from config import SettingsError, load_settings
from core import QuoteWallError, build_quote_wall

if TYPE_CHECKING:  # pragma: no cover - typing helpers
    from collections.abc import Sequence

    from config import QuoteWallSettings
    from core.quote_wall import QuoteWall


def _initialise_quote_wall(
    settings: QuoteWallSettings,
    logger: logging.Logger,
) -> QuoteWall | None:
    try:
        return build_quote_wall(settings)
    except QuoteWallError as exc:
        logger.error("Failed to initialise services: %s", exc)
        return None


def main(argv: Sequence[str] | None = None) -> int:
    """Entrypoint that wires settings, services, and CLI commands."""
    args = parse_args(argv)
    setup_logging(args.logging_config)

    logger = logging.getLogger("quote_wall.main")
    try:
        settings = load_settings()
    except SettingsError as exc:
        logger.error("Failed to load settings: %s", exc)
        return 2

    configure_litellm_logging(settings.litellm_logging_enabled)
    if args.print_settings:
        print_settings_summary(settings)
        return 0

    spec = COMMAND_SPECS[getattr(args, "command", None)]
    quote_wall = _initialise_quote_wall(settings, logger)
    if quote_wall is None:
        return 3

    try:
        return asyncio.run(spec.handler(quote_wall, settings, args, logger))
    except QuoteWallError as exc:
        logger.error("Command failed: %s", exc)
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130
    finally:
        quote_wall.close()


if __name__ == "__main__":
    raise SystemExit(main())
