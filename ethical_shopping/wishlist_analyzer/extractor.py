"""Page-by-page text extraction from wishlist PDFs."""
from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

from .exceptions import ExtractionFailure, UnsupportedInputType

logger = logging.getLogger(__name__)

DEFAULT_PDF_BACKENDS = [
    "pypdf",
    "pdfminer",
    "pikepdf+pypdf",
    "pikepdf+pdfminer",
]

SUPPORTED_EXTENSIONS = {".pdf"}

ProgressCallback = Callable[[int, int], None]


@dataclass
class PdfPages:
    """An opened document whose page texts are produced lazily."""

    backend: str
    page_count: int
    pages: Iterator[str]


def resolve_backend_order(prefer_backends: Iterable[str] | None) -> list[str]:
    if prefer_backends:
        order = [backend.strip() for backend in prefer_backends if backend and backend.strip()]
    else:
        env_value = os.environ.get("WISHLIST_PDF_BACKENDS")
        if env_value:
            order = [backend.strip() for backend in env_value.split(",") if backend.strip()]
        else:
            order = list(DEFAULT_PDF_BACKENDS)
    seen = set()
    unique_order: list[str] = []
    for backend in order:
        if backend not in seen:
            unique_order.append(backend)
            seen.add(backend)
    return unique_order or list(DEFAULT_PDF_BACKENDS)


def check_supported_document(path: Path) -> None:
    if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
        raise UnsupportedInputType(f"unsupported input type: {path.name}")


@contextmanager
def open_pdf(path: Path, backends: Iterable[str] | None = None) -> Iterator[PdfPages]:
    """Open ``path`` with the first backend that can read it."""
    backend_order = resolve_backend_order(backends)
    errors: list[str] = []
    with tempfile.TemporaryDirectory(prefix="wishlist_pdf_") as tmp_dir:
        repaired_path: Path | None = None
        repair_error: str | None = None
        for backend_name in backend_order:
            use_repair = backend_name.startswith("pikepdf+")
            base_backend = backend_name.split("+", 1)[-1] if use_repair else backend_name
            target_path = path
            if use_repair:
                if repaired_path is None and repair_error is None:
                    try:
                        repaired_path = _repair_pdf_with_pikepdf(path, Path(tmp_dir))
                    except Exception as exc:  # pragma: no cover - pikepdf optional
                        repair_error = str(exc)
                        logger.debug("pikepdf repair failed for %s: %s", path, exc)
                if repaired_path is None:
                    errors.append(f"{backend_name}: pikepdf repair failed: {repair_error}")
                    continue
                target_path = repaired_path
            try:
                page_count, pages = _open_with_backend(base_backend, target_path)
            except Exception as exc:  # pragma: no cover - backend errors depend on deps
                logger.debug("PDF backend %s failed for %s: %s", backend_name, path, exc)
                errors.append(f"{backend_name}: {exc}")
                continue
            logger.debug("Opened %s with %s (%d pages)", path, backend_name, page_count)
            yield PdfPages(backend=backend_name, page_count=page_count, pages=pages)
            return
    raise ExtractionFailure(
        f"could not read {path.name}: " + "; ".join(errors or ["no backend available"]),
        backends=backend_order,
    )


def iter_pdf_pages(
    path: Path,
    on_progress: ProgressCallback | None = None,
    backends: Iterable[str] | None = None,
) -> Iterator[str]:
    """Yield each page's text in order, reporting progress after every page."""
    with open_pdf(path, backends) as document:
        total = document.page_count
        for page_number in range(1, total + 1):
            try:
                text = next(document.pages, "")
            except Exception as exc:  # pragma: no cover - depends on document
                raise ExtractionFailure(
                    f"page {page_number} of {path.name}: {exc}",
                    backends=[document.backend],
                ) from exc
            logger.debug("Extracted page %d/%d (%d chars)", page_number, total, len(text))
            if on_progress is not None:
                on_progress(page_number, total)
            yield text


def extract_pdf_text(
    path: Path,
    on_progress: ProgressCallback | None = None,
    backends: Iterable[str] | None = None,
) -> str:
    return "".join(f"{text}\n" for text in iter_pdf_pages(path, on_progress, backends))


def _open_with_backend(backend: str, path: Path) -> tuple[int, Iterator[str]]:
    if backend == "pypdf":
        return _open_with_pypdf(path)
    if backend == "pdfminer":
        return _open_with_pdfminer(path)
    raise RuntimeError(f"unknown backend: {backend}")


def _open_with_pypdf(path: Path) -> tuple[int, Iterator[str]]:
    try:
        from pypdf import PdfReader
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("pypdf is not installed") from exc

    reader = PdfReader(str(path))
    if reader.is_encrypted and not reader.decrypt(""):
        raise RuntimeError("document is encrypted")

    def pages() -> Iterator[str]:
        for page in reader.pages:
            yield page.extract_text() or ""

    return len(reader.pages), pages()


def _open_with_pdfminer(path: Path) -> tuple[int, Iterator[str]]:
    try:
        from pdfminer.high_level import extract_pages
        from pdfminer.layout import LTTextContainer
        from pdfminer.pdfpage import PDFPage
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("pdfminer.six is not installed") from exc

    with path.open("rb") as fh:
        page_count = sum(1 for _ in PDFPage.get_pages(fh))

    def pages() -> Iterator[str]:
        for layout in extract_pages(str(path)):
            yield "".join(
                element.get_text() for element in layout if isinstance(element, LTTextContainer)
            )

    return page_count, pages()


def _repair_pdf_with_pikepdf(source: Path, temp_dir: Path) -> Path:
    try:
        from pikepdf import Pdf  # type: ignore[attr-defined]
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise RuntimeError("pikepdf is not installed") from exc

    repaired_path = Path(temp_dir) / "repaired.pdf"
    with Pdf.open(str(source)) as pdf:
        pdf.save(str(repaired_path))
    logger.debug("pikepdf repair applied to %s", source)
    return repaired_path
