"""Errors raised by the wishlist analysis pipeline."""
from __future__ import annotations

from collections.abc import Iterable

READ_ERROR_NOTICE = "Error reading PDF. Please try again or use a different file."
UNSUPPORTED_NOTICE = "Please upload a PDF file."


class WishlistAnalysisError(Exception):
    """Base error carrying the notice shown to the user."""

    notice = "Something went wrong while analysing the wishlist."

    def __init__(self, message: str, *, notice: str | None = None) -> None:
        super().__init__(message)
        if notice is not None:
            self.notice = notice


class UnsupportedInputType(WishlistAnalysisError):
    """The uploaded file is not a PDF document."""

    notice = UNSUPPORTED_NOTICE


class ExtractionFailure(WishlistAnalysisError):
    """No backend could read the document text."""

    notice = READ_ERROR_NOTICE

    def __init__(self, message: str, *, backends: Iterable[str] = ()) -> None:
        super().__init__(message)
        self.backends = list(backends)


class CatalogError(WishlistAnalysisError):
    """The retailer catalog file could not be loaded."""

    notice = "The retailer catalog could not be loaded."
