"""Tests for LiteLLM-backed bulk quote import.

Updates:
  v0.2.0 - 2026-09-21 - Cover transient retry and duplicate skipping.
  v0.1.0 - 2026-09-14 - Cover JSON extraction, category filtering and parser requests.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

import core.quote_import as quote_import
from core.exceptions import QuoteImportError
from core.quote_import import (
    LiteLLMQuoteParser,
    ParsedQuote,
    QuoteImporter,
    extract_json,
    normalise_parsed_quotes,
)
from models.quote_model import Quote
from prompt_templates import build_import_prompt

if TYPE_CHECKING:
    from collections.abc import Sequence

    from core.stores import SQLiteQuoteStore


def _response(content: str, finish_reason: str = "stop") -> dict[str, Any]:
    return {"choices": [{"message": {"content": content}, "finish_reason": finish_reason}]}


class _RecordingCompletion:
    def __init__(self, *outcomes: object) -> None:
        self.outcomes = list(outcomes)
        self.requests: list[dict[str, Any]] = []

    def __call__(self, **request: Any) -> object:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def _patch_completion(monkeypatch: pytest.MonkeyPatch, completion: _RecordingCompletion) -> None:
    monkeypatch.setattr(quote_import, "get_completion", lambda: (completion, Exception))


class _StaticParser:
    def __init__(self, quotes: list[ParsedQuote]) -> None:
        self.quotes = quotes
        self.category_names: list[str] = []

    async def parse(self, text: str, category_names: Sequence[str]) -> list[ParsedQuote]:
        self.category_names = list(category_names)
        return self.quotes


@pytest.mark.parametrize(
    ("content", "expected"),
    [
        ('{"quotes": []}', '{"quotes": []}'),
        ('```json\n{"quotes": []}\n```', '{"quotes": []}'),
        ('Here you go:\n{"quotes": []}\nEnjoy!', '{"quotes": []}'),
        ('```\n{"quotes": [1]}', '{"quotes": [1]}'),
    ],
)
def test_extract_json_strips_fences_and_prose(content: str, expected: str) -> None:
    assert extract_json(content) == expected


def test_normalise_filters_unknown_categories_and_empty_text() -> None:
    payload = {
        "quotes": [
            {"text": " Keep going ", "author": "Anon", "categories": ["Grit", "grit", "Other"]},
            {"text": "", "author": "Nobody"},
            {"text": "No author", "author": None, "categories": ["Grit", "Grit"]},
            "not a dict",
        ]
    }

    quotes = normalise_parsed_quotes(payload, ["Grit"])

    assert quotes == [
        ParsedQuote(text="Keep going", author="Anon", categories=["Grit"]),
        ParsedQuote(text="No author", author=None, categories=["Grit"]),
    ]


@pytest.mark.parametrize("payload", [{}, {"quotes": "nope"}, ["quotes"]])
def test_normalise_rejects_bad_structure(payload: object) -> None:
    with pytest.raises(QuoteImportError, match="quotes is not an array"):
        normalise_parsed_quotes(payload, [])


def test_build_import_prompt_lists_categories() -> None:
    assert "[Work, Life]" in build_import_prompt(["Work", "Life"])
    assert "[none available]" in build_import_prompt([])
    assert build_import_prompt(["A"], "Tags: {categories}") == "Tags: A"


@pytest.mark.asyncio()
async def test_parser_builds_request_and_parses_response(monkeypatch: pytest.MonkeyPatch) -> None:
    body = {"quotes": [{"text": "Act well", "author": "Epictetus", "categories": ["Stoic"]}]}
    completion = _RecordingCompletion(_response(f"```json\n{json.dumps(body)}\n```"))
    _patch_completion(monkeypatch, completion)
    parser = LiteLLMQuoteParser(
        model="gpt-4o-mini",
        api_key="sk-test",
        drop_params=["temperature"],
        timeout_seconds=30,
    )

    quotes = await parser.parse("  Act well your part. - Epictetus  ", ["Stoic"])

    assert quotes == [ParsedQuote(text="Act well", author="Epictetus", categories=["Stoic"])]
    request = completion.requests[0]
    assert request["model"] == "gpt-4o-mini"
    assert request["api_key"] == "sk-test"
    assert request["timeout"] == 30
    assert request["max_tokens"] == 16000
    assert "temperature" not in request
    assert "[Stoic]" in request["messages"][0]["content"]
    assert request["messages"][1] == {"role": "user", "content": "Act well your part. - Epictetus"}


@pytest.mark.asyncio()
async def test_parser_rejects_empty_text_before_calling_litellm(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    def _fail() -> tuple[object, type[Exception]]:
        raise AssertionError("LiteLLM should not be loaded")

    monkeypatch.setattr(quote_import, "get_completion", _fail)
    with pytest.raises(QuoteImportError, match="Text is required"):
        await LiteLLMQuoteParser(model="gpt").parse("   ", [])


@pytest.mark.asyncio()
async def test_parser_retries_transient_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    completion = _RecordingCompletion(
        TimeoutError("timed out"),
        _response('{"quotes": [{"text": "Again"}]}'),
    )
    _patch_completion(monkeypatch, completion)
    parser = LiteLLMQuoteParser(model="gpt", retry_base_delay_seconds=0)

    quotes = await parser.parse("Again", [])

    assert [quote.text for quote in quotes] == ["Again"]
    assert len(completion.requests) == 2


@pytest.mark.asyncio()
async def test_parser_does_not_retry_permanent_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    completion = _RecordingCompletion(ValueError("Invalid API key provided"))
    _patch_completion(monkeypatch, completion)
    parser = LiteLLMQuoteParser(model="gpt", retry_base_delay_seconds=0)

    with pytest.raises(QuoteImportError, match="credentials"):
        await parser.parse("text", [])
    assert len(completion.requests) == 1


@pytest.mark.asyncio()
async def test_parser_reports_invalid_json(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_completion(monkeypatch, _RecordingCompletion(_response("not json at all")))
    with pytest.raises(QuoteImportError, match="Invalid JSON in response"):
        await LiteLLMQuoteParser(model="gpt").parse("text", [])


@pytest.mark.asyncio()
async def test_parser_reports_empty_content(monkeypatch: pytest.MonkeyPatch) -> None:
    _patch_completion(monkeypatch, _RecordingCompletion(_response("   ")))
    with pytest.raises(QuoteImportError, match="empty response"):
        await LiteLLMQuoteParser(model="gpt").parse("text", [])


@pytest.mark.asyncio()
async def test_importer_maps_categories_and_skips_duplicates(
    quote_store: SQLiteQuoteStore,
) -> None:
    focus = await quote_store.create_category("Focus")
    await quote_store.add_quote(Quote(id=None, text="Already here"))
    parser = _StaticParser(
        [
            ParsedQuote(text="Deep work wins", author="Cal", categories=["Focus"]),
            ParsedQuote(text="already HERE"),
            ParsedQuote(text="Deep Work Wins"),
        ]
    )

    result = await QuoteImporter(parser, quote_store).import_text("ignored")

    assert parser.category_names == ["Focus"]
    assert [quote.text for quote in result.created] == ["Deep work wins"]
    assert result.created[0].category_ids == [focus.id]
    assert [item.text for item in result.skipped] == ["already HERE", "Deep Work Wins"]
    assert await quote_store.count_quotes() == 2


@pytest.mark.asyncio()
async def test_importer_preview_does_not_store(quote_store: SQLiteQuoteStore) -> None:
    parser = _StaticParser([ParsedQuote(text="Preview only")])

    parsed = await QuoteImporter(parser, quote_store).preview("ignored")

    assert [item.text for item in parsed] == ["Preview only"]
    assert await quote_store.count_quotes() == 0
