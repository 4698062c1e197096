"""Bulk import APIs for the Quote Wall service.

Updates:
  v0.1.0 - 2026-09-20 - Extract LiteLLM import workflow into mixin.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..exceptions import QuoteImportError, QuoteImportUnavailable, QuoteStorageError
from ..litellm_adapter import LiteLLMNotInstalledError
from ..repository import RepositoryError

if TYPE_CHECKING:
    from ..quote_import import ImportResult, ParsedQuote, QuoteImporter

__all__ = ["ImportSupport"]


class ImportSupport:
    """Mixin exposing LiteLLM-backed quote import."""

    _importer: QuoteImporter | None

    @property
    def import_available(self) -> bool:
        return self._importer is not None

    async def preview_import(self, text: str) -> list[ParsedQuote]:
        """Parse *text* into quotes without storing them."""
        importer = self._require_importer()
        try:
            return await importer.preview(text)
        except LiteLLMNotInstalledError as exc:
            raise QuoteImportUnavailable(str(exc)) from exc
        except RepositoryError as exc:
            raise QuoteStorageError("Unable to load categories for import") from exc

    async def import_quotes(self, text: str) -> ImportResult:
        """Parse *text* and store every new quote."""
        importer = self._require_importer()
        try:
            return await importer.import_text(text)
        except LiteLLMNotInstalledError as exc:
            raise QuoteImportUnavailable(str(exc)) from exc
        except RepositoryError as exc:
            raise QuoteImportError(f"Unable to save imported quotes: {exc}") from exc

    def _require_importer(self) -> QuoteImporter:
        if self._importer is None:
            raise QuoteImportUnavailable(
                "Quote import is not configured. Set QUOTE_WALL_LITELLM_MODEL to enable it."
            )
        return self._importer
