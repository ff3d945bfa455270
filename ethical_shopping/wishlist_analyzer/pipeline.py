"""Run state for one wishlist upload, search or URL request."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path

from .analysis import aggregate, quick_search
from .exceptions import UnsupportedInputType, WishlistAnalysisError
from .extractor import check_supported_document, extract_pdf_text
from .models import AnalysisResult
from .parser import extract_items
from .registry import DEFAULT_CATALOG, RetailerCatalog

logger = logging.getLogger(__name__)

NO_ITEMS_NOTICE = (
    "No items could be extracted. Please make sure this is an Amazon wishlist PDF."
)
URL_NOTICE = (
    "URL processing requires the wishlist to be public. "
    "For best results, please use the PDF upload option."
)
EMPTY_SEARCH_NOTICE = "Please enter a search term."


class Phase(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    PARSING = "parsing"
    READY = "ready"


class Outcome(str, Enum):
    READY = "ready"
    UNSUPPORTED_INPUT = "unsupported_input"
    EXTRACTION_FAILURE = "extraction_failure"
    NO_ITEMS_FOUND = "no_items_found"
    EMPTY_SEARCH = "empty_search"
    URL_UNSUPPORTED = "url_unsupported"


@dataclass(frozen=True)
class AnalysisState:
    """Snapshot of the analysis flow; replaced, never mutated."""

    phase: Phase = Phase.IDLE
    progress: int = 0
    result: AnalysisResult | None = None
    outcome: Outcome | None = None
    notice: str | None = None
    source: str | None = None

    @property
    def is_ready(self) -> bool:
        return self.phase is Phase.READY and self.result is not None


StateListener = Callable[[AnalysisState], None]


class WishlistAnalyzer:
    """Drives ``Idle -> Extracting -> Parsing -> Ready`` for each request.

    Every request starts from a clean state, so nothing parsed by an earlier
    run leaks into the next one. Failures end in ``Idle`` with a notice for
    the user instead of raising.
    """

    def __init__(
        self,
        catalog: RetailerCatalog = DEFAULT_CATALOG,
        *,
        pdf_backends: Iterable[str] | None = None,
        listener: StateListener | None = None,
    ) -> None:
        self.catalog = catalog
        self.pdf_backends = list(pdf_backends) if pdf_backends else None
        self.listener = listener
        self._state = AnalysisState()

    @property
    def state(self) -> AnalysisState:
        return self._state

    def reset(self) -> AnalysisState:
        return self._transition(AnalysisState())

    def analyze_pdf(self, path: Path) -> AnalysisState:
        self.reset()
        try:
            check_supported_document(path)
            self._transition(AnalysisState(phase=Phase.EXTRACTING, source=path.name))
            text = extract_pdf_text(path, on_progress=self._on_page, backends=self.pdf_backends)
        except WishlistAnalysisError as exc:
            return self._fail(exc, source=path.name)
        return self.analyze_text(text, source=path.name)

    def analyze_text(self, text: str, *, source: str | None = None) -> AnalysisState:
        self._transition(AnalysisState(phase=Phase.PARSING, progress=100, source=source))
        items = extract_items(text)
        if not items:
            logger.warning("No items found in %s", source or "wishlist text")
            return self._transition(
                AnalysisState(outcome=Outcome.NO_ITEMS_FOUND, notice=NO_ITEMS_NOTICE, source=source)
            )
        result = aggregate(items, self.catalog)
        logger.info(
            "Found %d items across %d categories", result.total_item_count, result.category_count
        )
        return self._transition(
            AnalysisState(
                phase=Phase.READY,
                progress=100,
                result=result,
                outcome=Outcome.READY,
                source=source,
            )
        )

    def search(self, term: str) -> AnalysisState:
        self.reset()
        cleaned = term.strip()
        if not cleaned:
            return self._transition(
                AnalysisState(outcome=Outcome.EMPTY_SEARCH, notice=EMPTY_SEARCH_NOTICE)
            )
        result = quick_search(cleaned, self.catalog)
        return self._transition(
            AnalysisState(phase=Phase.READY, result=result, outcome=Outcome.READY, source=cleaned)
        )

    def analyze_url(self, url: str) -> AnalysisState:
        # Wishlists are never fetched; the user is pointed at the upload path.
        self.reset()
        logger.info("URL analysis requested for %s", url)
        return self._transition(
            AnalysisState(outcome=Outcome.URL_UNSUPPORTED, notice=URL_NOTICE, source=url)
        )

    def _on_page(self, page_number: int, total: int) -> None:
        progress = round(page_number / total * 100)
        logger.info("Extracted page %d of %d", page_number, total)
        self._transition(replace(self._state, progress=progress))

    def _fail(self, exc: WishlistAnalysisError, *, source: str | None) -> AnalysisState:
        if isinstance(exc, UnsupportedInputType):
            outcome = Outcome.UNSUPPORTED_INPUT
        else:
            outcome = Outcome.EXTRACTION_FAILURE
        logger.warning("Analysis of %s failed: %s", source, exc)
        return self._transition(AnalysisState(outcome=outcome, notice=exc.notice, source=source))

    def _transition(self, state: AnalysisState) -> AnalysisState:
        self._state = state
        if self.listener is not None:
            self.listener(state)
        return state
