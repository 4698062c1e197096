"""Runtime boot helpers for the Quote Wall CLI.

Updates:
  v0.1.1 - 2026-09-20 - Add LiteLLM logging toggle helper.
  v0.1.0 - 2026-08-30 - Configure logging from INI files with a basicConfig fallback.
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path

DEFAULT_LOGGING_CONFIG = Path("config/logging.conf")
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(logging_conf_path: Path | None) -> None:
    """Configure logging using *logging_conf_path* when available."""
    path = logging_conf_path or DEFAULT_LOGGING_CONFIG
    if path.exists():
        try:
            logging.config.fileConfig(path, disable_existing_loggers=False)
            return
        except (KeyError, ValueError, OSError) as exc:  # pragma: no cover - configuration fallback
            logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
            logging.getLogger("quote_wall.main").warning(
                "Ignoring invalid logging configuration %s: %s", path, exc
            )
            return
    logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)


def configure_litellm_logging(enabled: bool) -> None:
    """Enable or disable upstream LiteLLM library logs."""
    litellm_loggers = (
        logging.getLogger("LiteLLM"),
        logging.getLogger("LiteLLM Router"),
        logging.getLogger("litellm"),
    )
    for litellm_logger in litellm_loggers:
        litellm_logger.propagate = True
        if enabled:
            litellm_logger.disabled = False
            litellm_logger.setLevel(logging.NOTSET)
        else:
            litellm_logger.disabled = True
            litellm_logger.setLevel(logging.CRITICAL)


__all__ = ["DEFAULT_LOGGING_CONFIG", "configure_litellm_logging", "setup_logging"]
