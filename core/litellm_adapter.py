"""LiteLLM helpers shared by the quote importer.

Updates:
  v0.2.0 - 2026-09-21 - Extract message content and finish reason from responses.
  v0.1.1 - 2026-09-14 - Retry completions without parameters the model rejects.
  v0.1.0 - 2026-09-14 - Lazily import the LiteLLM completion API.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

logger = logging.getLogger("quote_wall.litellm")


class LiteLLMNotInstalledError(RuntimeError):
    """Raised when LiteLLM cannot be imported."""


_completion: Callable[..., object] | None = None
_LiteLLMException: type[Exception] = Exception


def _ensure_loaded() -> None:
    """Import LiteLLM on first use; importing it is slow."""
    global _completion, _LiteLLMException
    if _completion is not None:
        return
    try:  # pragma: no cover - runtime import path
        litellm = importlib.import_module("litellm")
    except ImportError as exc:
        raise LiteLLMNotInstalledError(
            "Quote import requires the 'litellm' package. Install it with `pip install litellm`."
        ) from exc

    completion = getattr(litellm, "completion", None)
    if completion is None:
        raise LiteLLMNotInstalledError(
            "litellm completion API is unavailable in the installed version."
        )

    # provider errors do not share one LiteLLM base class
    _completion = completion
    _LiteLLMException = Exception


def get_completion() -> tuple[Callable[..., object], type[Exception]]:
    """Return the LiteLLM completion callable and its base exception type."""
    _ensure_loaded()
    assert _completion is not None  # pragma: no cover
    return _completion, _LiteLLMException


def apply_configured_drop_params(
    request: dict[str, object],
    drop_params: Sequence[str] | None,
) -> tuple[str, ...]:
    """Remove configured parameters from *request* and return those dropped, in order."""
    if not drop_params:
        return ()
    dropped: list[str] = []
    for raw_key in drop_params:
        key = str(raw_key).strip()
        if key and key in request and key not in dropped:
            request.pop(key)
            dropped.append(key)
    return tuple(dropped)


def call_completion_with_fallback(
    request: dict[str, object],
    completion: Callable[..., object],
    lite_llm_exception: type[Exception],
    *,
    drop_candidates: Iterable[str] | None = None,
) -> object:
    """Invoke *completion*, retrying once without parameters the model rejected."""
    try:
        return completion(**request)
    except lite_llm_exception as exc:
        unsupported = _detect_unsupported_parameters(str(exc), request.keys(), drop_candidates)
        if not unsupported:
            raise
        trimmed = {key: value for key, value in request.items() if key not in unsupported}
        logger.info(
            "LiteLLM model rejected parameters %s; retrying request without them.",
            ", ".join(sorted(unsupported)),
        )
        return completion(**trimmed)


def extract_message(response: object) -> tuple[str, str | None]:
    """Return ``(content, finish_reason)`` of the first choice in *response*.

    Accepts both LiteLLM ``ModelResponse`` objects and plain mappings.
    """
    choices = _field(response, "choices")
    if not choices:
        raise ValueError("Completion response contained no choices")
    first = choices[0]
    message = _field(first, "message")
    content = _field(message, "content") if message is not None else None
    finish_reason = _field(first, "finish_reason")
    return (str(content) if content is not None else ""), (
        str(finish_reason) if finish_reason is not None else None
    )


def _field(source: object, name: str) -> object | None:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def _detect_unsupported_parameters(
    message: str,
    parameters: Iterable[str],
    drop_candidates: Iterable[str] | None = None,
) -> set[str]:
    lowered = message.lower()
    indicators = (
        "not support",
        "unsupported",
        "not allowed",
        "additional propert",
        "unexpected",
        "unknown",
    )
    if not any(token in lowered for token in indicators):
        return set()

    candidates = set(drop_candidates or {"max_tokens", "temperature", "timeout", "response_format"})
    unsupported: set[str] = set()
    for key in parameters:
        if key not in candidates:
            continue
        key_forms = (key, key.replace("_", " "), key.replace("_", "-"))
        if any(form in lowered for form in key_forms):
            unsupported.add(key)
    return unsupported


__all__ = [
    "LiteLLMNotInstalledError",
    "apply_configured_drop_params",
    "call_completion_with_fallback",
    "extract_message",
    "get_completion",
]
