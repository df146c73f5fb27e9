"""PDF text extraction for retrospective exports."""
from __future__ import annotations

import io
import logging
import os
import re
from collections.abc import Iterable
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_PDF_BACKENDS = [
    "pypdf",
    "pdfminer",
]

PDF_HEADER = b"%PDF-"
# The header may be preceded by junk bytes, but only within the first kilobyte.
PDF_HEADER_WINDOW = 1024

WHITESPACE_RE = re.compile(r"\s+")


class ExtractionError(RuntimeError):
    """Raised when a file cannot be turned into text."""

    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Failed to extract text from {Path(path).name}: {reason}")
        self.path = Path(path)
        self.reason = reason


def resolve_backend_order(prefer_backends: Iterable[str] | None = None) -> list[str]:
    if prefer_backends:
        order = [backend.strip() for backend in prefer_backends if backend and backend.strip()]
    else:
        env_value = os.environ.get("RETRO_PDF_BACKENDS")
        if env_value:
            order = [backend.strip() for backend in env_value.split(",") if backend.strip()]
        else:
            order = list(DEFAULT_PDF_BACKENDS)
    seen = set()
    unique_order: list[str] = []
    for backend in order:
        if backend not in DEFAULT_PDF_BACKENDS:
            logger.debug("Ignoring unknown PDF backend: %s", backend)
            continue
        if backend not in seen:
            unique_order.append(backend)
            seen.add(backend)
    return unique_order or list(DEFAULT_PDF_BACKENDS)


def normalize_page_text(fragments: Iterable[str]) -> str:
    """Join a page's fragments with spaces and collapse whitespace runs."""
    joined = " ".join(fragments)
    return WHITESPACE_RE.sub(" ", joined).strip()


def join_pages(pages: Iterable[Iterable[str]]) -> str:
    page_texts = [normalize_page_text(fragments) for fragments in pages]
    return "\n".join(text for text in page_texts if text).strip()


def read_pdf_bytes(path: str | Path) -> bytes:
    pdf_path = Path(path)
    try:
        data = pdf_path.read_bytes()
    except OSError as exc:
        raise ExtractionError(pdf_path, str(exc)) from exc
    if PDF_HEADER not in data[:PDF_HEADER_WINDOW]:
        raise ExtractionError(pdf_path, "not a PDF file")
    return data


def extract_pdf_text(
    path: str | Path,
    *,
    prefer_backends: Iterable[str] | None = None,
) -> str:
    """Extract one normalized text blob from a PDF.

    Each page becomes a single line: its fragments joined with spaces and
    whitespace collapsed. Backends are tried in order until one yields text.
    Raises ``ExtractionError`` when the file is unreadable, is not a PDF, or
    every backend fails.
    """

    pdf_path = Path(path)
    data = read_pdf_bytes(pdf_path)
    last_error: str | None = None
    decoded = False

    for backend_name in resolve_backend_order(prefer_backends):
        try:
            pages = _extract_with_backend(backend_name, data)
        except Exception as exc:  # upstream errors vary by backend
            last_error = f"{backend_name}: {exc}"
            logger.debug("PDF backend %s failed for %s: %s", backend_name, pdf_path, exc)
            continue
        decoded = True
        text = join_pages(pages)
        if text:
            logger.debug(
                "Extracted %d characters from %s with %s", len(text), pdf_path.name, backend_name
            )
            return text
        logger.debug("PDF backend %s produced no text for %s", backend_name, pdf_path)

    if decoded:
        return ""
    raise ExtractionError(pdf_path, last_error or "no backend available")


def _extract_with_backend(backend: str, data: bytes) -> list[list[str]]:
    if backend == "pypdf":
        return _extract_with_pypdf(data)
    if backend == "pdfminer":
        return _extract_with_pdfminer(data)
    raise RuntimeError(f"unknown backend: {backend}")


def _extract_with_pypdf(data: bytes) -> list[list[str]]:
    from pypdf import PdfReader

    reader = PdfReader(io.BytesIO(data))
    pages: list[list[str]] = []
    for page in reader.pages:
        fragments: list[str] = []

        def collect(text, cm, tm, font_dict, font_size):  # type: ignore[no-untyped-def]
            if text:
                fragments.append(text)

        page.extract_text(visitor_text=collect)
        pages.append(fragments)
    return pages


def _extract_with_pdfminer(data: bytes) -> list[list[str]]:
    from pdfminer.high_level import extract_pages
    from pdfminer.layout import LTTextContainer

    pages: list[list[str]] = []
    for page_layout in extract_pages(io.BytesIO(data)):
        pages.append(
            [element.get_text() for element in page_layout if isinstance(element, LTTextContainer)]
        )
    return pages
