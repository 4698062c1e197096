"""LiteLLM-backed bulk import of quotes from free-form text.

Updates:
  v0.2.1 - 2026-09-28 - Support system prompt overrides supplied via settings.
  v0.2.0 - 2026-09-21 - Retry transient LiteLLM failures with exponential backoff.
  v0.1.1 - 2026-09-20 - Skip quotes that already exist or repeat within a batch.
  v0.1.0 - 2026-09-14 - Introduce LiteLLM quote parser and importer.
"""

from __future__ import annotations

import asyncio
import json
import logging
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol

from models.quote_model import Quote
from prompt_templates import build_import_prompt

from .exceptions import QuoteImportError
from .litellm_adapter import (
    apply_configured_drop_params,
    call_completion_with_fallback,
    extract_message,
    get_completion,
)
from .retry import async_retry, is_retryable_completion_error

if TYPE_CHECKING:  # pragma: no cover - imported for annotations only
    from collections.abc import Iterable, Sequence

    from .stores import SQLiteQuoteStore

logger = logging.getLogger("quote_wall.import")

_FENCED_BLOCK = re.compile(r"```(?:json)?\s*([\s\S]*?)```")
_FENCE_MARKER = re.compile(r"```(?:json)?\s*")


@dataclass(slots=True)
class ParsedQuote:
    """Quote extracted by the model, before it is stored."""

    text: str
    author: str | None = None
    categories: list[str] = field(default_factory=list)


@dataclass(slots=True)
class ImportResult:
    """Outcome of a bulk import run."""

    parsed: list[ParsedQuote]
    created: list[Quote]
    skipped: list[ParsedQuote]


class QuoteParser(Protocol):
    async def parse(self, text: str, category_names: Sequence[str]) -> list[ParsedQuote]: ...


def extract_json(content: str) -> str:
    """Return the JSON object embedded in a model response.

    Strips Markdown code fences, any prose before the first ``{`` and anything
    after the last ``}``.
    """
    text = content.strip()
    if "```" in text:
        match = _FENCED_BLOCK.search(text)
        if match:
            text = match.group(1).strip()
        else:
            text = _FENCE_MARKER.sub("", text).replace("```", "").strip()

    start = text.find("{")
    if start > 0:
        text = text[start:]
    end = text.rfind("}")
    if end != -1:
        text = text[: end + 1]
    return text


def normalise_parsed_quotes(payload: Any, allowed_categories: Iterable[str]) -> list[ParsedQuote]:
    """Validate a decoded ``{"quotes": [...]}`` payload.

    Categories outside *allowed_categories* are discarded and entries with
    empty text are dropped.

    Raises:
        QuoteImportError: If the payload does not contain a ``quotes`` array.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("quotes"), list):
        raise QuoteImportError("Invalid response structure: quotes is not an array")

    allowed = set(allowed_categories)
    quotes: list[ParsedQuote] = []
    for item in payload["quotes"]:
        if not isinstance(item, dict):
            continue
        text = str(item.get("text") or "").strip()
        if not text:
            continue
        raw_author = item.get("author")
        author = str(raw_author).strip() if raw_author else None
        raw_categories = item.get("categories")
        categories: list[str] = []
        if isinstance(raw_categories, list):
            for name in raw_categories:
                if isinstance(name, str) and name in allowed and name not in categories:
                    categories.append(name)
        quotes.append(ParsedQuote(text=text, author=author or None, categories=categories))
    return quotes


@dataclass(slots=True)
class LiteLLMQuoteParser:
    """Split pasted text into quotes via the LiteLLM chat completion API."""

    model: str
    api_key: str | None = None
    api_base: str | None = None
    api_version: str | None = None
    drop_params: Sequence[str] | None = None
    timeout_seconds: float | None = None
    max_attempts: int = 3
    retry_base_delay_seconds: float = 0.5
    max_tokens: int = 16000
    system_prompt: str | None = None

    async def parse(self, text: str, category_names: Sequence[str]) -> list[ParsedQuote]:
        """Return the quotes found in *text*, tagged with *category_names* where they match."""
        if not text or not text.strip():
            raise QuoteImportError("Text is required to import quotes.")

        completion, lite_llm_exception = get_completion()
        request = self._build_request(text.strip(), category_names)
        dropped = apply_configured_drop_params(request, self.drop_params)
        if dropped:
            logger.debug(
                "Dropping LiteLLM parameters for quote import",
                extra={"dropped_params": list(dropped)},
            )

        async def _call() -> object:
            return await asyncio.to_thread(
                call_completion_with_fallback,
                dict(request),
                completion,
                lite_llm_exception,
            )

        try:
            response = await async_retry(
                _call,
                max_attempts=self.max_attempts,
                base_delay_seconds=self.retry_base_delay_seconds,
                should_retry=is_retryable_completion_error,
            )
        except Exception as exc:
            raise QuoteImportError(_summarise_litellm_error(exc)) from exc

        try:
            content, finish_reason = extract_message(response)
        except (ValueError, IndexError, TypeError) as exc:
            raise QuoteImportError("LiteLLM returned an unexpected payload") from exc
        if finish_reason == "length":
            logger.warning("LiteLLM response was truncated due to the length limit")
        if not content.strip():
            raise QuoteImportError("LiteLLM returned an empty response.")

        json_text = extract_json(content)
        try:
            payload = json.loads(json_text)
        except json.JSONDecodeError as exc:
            logger.debug("Unparseable import response: %s", json_text[:500])
            raise QuoteImportError(f"Invalid JSON in response: {exc.msg}") from exc

        quotes = normalise_parsed_quotes(payload, category_names)
        logger.info("Parsed %d quotes from %d characters of text", len(quotes), len(text))
        return quotes

    def _build_request(self, text: str, category_names: Sequence[str]) -> dict[str, object]:
        request: dict[str, object] = {
            "model": self.model,
            "messages": [
                {
                    "role": "system",
                    "content": build_import_prompt(category_names, self.system_prompt),
                },
                {"role": "user", "content": text},
            ],
            "temperature": 0.1,
            "max_tokens": self.max_tokens,
        }
        if self.timeout_seconds is not None:
            request["timeout"] = self.timeout_seconds
        if self.api_key:
            request["api_key"] = self.api_key
        if self.api_base:
            request["api_base"] = self.api_base
        if self.api_version:
            request["api_version"] = self.api_version
        return request


class QuoteImporter:
    """Parse free-form text and store the resulting quotes."""

    def __init__(self, parser: QuoteParser, store: SQLiteQuoteStore) -> None:
        self._parser = parser
        self._store = store

    async def preview(self, text: str) -> list[ParsedQuote]:
        """Return the parsed quotes without saving anything."""
        categories = await self._store.list_categories()
        return await self._parser.parse(text, [category.name for category in categories])

    async def import_text(self, text: str) -> ImportResult:
        """Parse *text* and save every quote that is not already stored."""
        categories = await self._store.list_categories()
        category_ids = {category.name: category.id for category in categories}
        parsed = await self._parser.parse(text, list(category_ids))

        pending: list[Quote] = []
        skipped: list[ParsedQuote] = []
        seen: set[str] = set()
        for item in parsed:
            key = item.text.casefold()
            if key in seen or await self._store.quote_text_exists(item.text):
                skipped.append(item)
                continue
            seen.add(key)
            pending.append(
                Quote(
                    id=None,
                    text=item.text,
                    author=item.author,
                    category_ids=[
                        category_ids[name]
                        for name in item.categories
                        if category_ids.get(name) is not None
                    ],
                )
            )

        created = await self._store.add_quotes(pending) if pending else []
        logger.info(
            "Imported %d quotes (%d skipped as duplicates)",
            len(created),
            len(skipped),
        )
        return ImportResult(parsed=parsed, created=created, skipped=skipped)


def _summarise_litellm_error(exc: Exception) -> str:
    """Return a concise, user-friendly message for LiteLLM failures."""
    text = str(exc).strip()
    if not text:
        return "LiteLLM request failed."
    lowered = text.lower()
    if "timeout" in lowered or "timed out" in lowered:
        return "LiteLLM request timed out. Please retry or check network connectivity."
    if "api key" in lowered or "authentication" in lowered:
        return "LiteLLM rejected the credentials. Check QUOTE_WALL_LITELLM_API_KEY."
    return text if text.startswith("LiteLLM") else f"LiteLLM request failed: {text}"


__all__ = [
    "ImportResult",
    "LiteLLMQuoteParser",
    "ParsedQuote",
    "QuoteImporter",
    "QuoteParser",
    "extract_json",
    "normalise_parsed_quotes",
]
