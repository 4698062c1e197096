"""Default LLM prompt templates used by the quote importer.

Updates: v0.1.1 - 2026-09-28 - Allow the import prompt to be overridden from settings.
Updates: v0.1.0 - 2026-09-14 - Centralise the bulk import system prompt.
"""

from __future__ import annotations

from typing import Iterable

CATEGORY_PLACEHOLDER = "{categories}"

QUOTE_IMPORT_PROMPT = (
    "You are a quote parser. Extract individual quotes from the provided text.\n\n"
    "For each quote, identify:\n"
    "1. The quote text itself (without surrounding quotation marks)\n"
    "2. The author (if mentioned, otherwise null)\n"
    "3. Matching categories from this list: [{categories}]\n"
    "   - Only use categories from the provided list exactly as written\n"
    "   - A quote can have multiple categories if relevant\n"
    "   - Use an empty array [] if no categories match or if no categories are available\n\n"
    "Return ONLY valid JSON in this exact format, no other text:\n"
    '{"quotes": [{"text": "quote text here", "author": "Author Name" or null, '
    '"categories": ["Category1", "Category2"] or []}]}'
)


def normalise_prompt_template(value: str | None) -> str | None:
    """Return a stripped template override, or ``None`` when it is blank."""

    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def build_import_prompt(category_names: Iterable[str], template: str | None = None) -> str:
    """Render the import system prompt listing the allowed *category_names*."""

    names = [name for name in category_names if name]
    category_list = ", ".join(names) if names else "none available"
    text = normalise_prompt_template(template) or QUOTE_IMPORT_PROMPT
    # str.format would trip over the JSON braces in the template
    return text.replace(CATEGORY_PLACEHOLDER, category_list)


__all__ = [
    "CATEGORY_PLACEHOLDER",
    "QUOTE_IMPORT_PROMPT",
    "build_import_prompt",
    "normalise_prompt_template",
]
