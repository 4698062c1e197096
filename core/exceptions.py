"""Common exception classes for core package.

This module centralises shared exception definitions for the **core**
package. Additional core-level exceptions should be added here rather than
redefining them in individual modules.

All exceptions ultimately inherit from :class:`QuoteWallError`, allowing
callers to catch a single base class for any service failure while still
distinguishing individual error categories when needed.

Updates:
  v0.3.0 - 2026-09-28 - Add wallpaper apply errors for background jobs.
  v0.2.0 - 2026-09-20 - Add bulk import exception hierarchy.
  v0.1.0 - 2026-08-30 - Created module with quote, category, and render errors.
"""

from __future__ import annotations


class QuoteWallError(Exception):
    """Base exception for Quote Wall failures."""


# ---------------------------------------------------------------------------
# Quote-specific errors
# ---------------------------------------------------------------------------


class QuoteNotFoundError(QuoteWallError):
    """Raised when a quote cannot be located in the backing store."""


class QuoteStorageError(QuoteWallError):
    """Raised when interactions with persistent backends fail."""


class CategoryError(QuoteWallError):
    """Base class for quote category management failures."""


class CategoryNotFoundError(CategoryError):
    """Raised when a requested category does not exist."""


class CategoryExistsError(CategoryError):
    """Raised when creating or renaming a category would duplicate a name."""


class CategoryStorageError(CategoryError):
    """Raised when persisting or loading categories fails."""


class RenderError(QuoteWallError):
    """Raised when a wallpaper image cannot be rendered."""


class QuoteImportError(QuoteWallError):
    """Raised when LiteLLM quote parsing fails or returns invalid data."""


class QuoteImportUnavailable(QuoteImportError):
    """Raised when bulk import is requested without a LiteLLM model configured."""


class WallpaperApplyError(QuoteWallError):
    """Raised when the platform wallpaper command cannot be executed."""


__all__ = [
    "CategoryError",
    "CategoryExistsError",
    "CategoryNotFoundError",
    "CategoryStorageError",
    "QuoteImportError",
    "QuoteImportUnavailable",
    "QuoteNotFoundError",
    "QuoteStorageError",
    "QuoteWallError",
    "RenderError",
    "WallpaperApplyError",
]
