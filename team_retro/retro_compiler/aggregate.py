"""Compilation of many retrospective PDFs into ordered records."""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .extract import extract_pdf_text
from .sections import SegmentedDocument, segment_sections

logger = logging.getLogger(__name__)

Extractor = Callable[[Path], str]
Segmenter = Callable[[str], SegmentedDocument]


@dataclass(frozen=True)
class CompilationRecord:
    """One successfully processed document."""

    file: str
    title: str
    sections: dict[str, str]

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "title": self.title,
            "sections": dict(self.sections),
        }


@dataclass
class CompilationResult:
    records: list[CompilationRecord] = field(default_factory=list)
    found: int = 0
    failures: list[tuple[str, str]] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.records)

    def to_list(self) -> list[dict[str, object]]:
        return [record.to_dict() for record in self.records]


def compile_document(
    path: Path,
    extractor: Extractor = extract_pdf_text,
    segmenter: Segmenter = segment_sections,
) -> CompilationRecord:
    text = extractor(path)
    document = segmenter(text)
    return CompilationRecord(file=path.name, title=document.title, sections=dict(document.sections))


def compile_documents(
    paths: Iterable[Path],
    *,
    extractor: Extractor = extract_pdf_text,
    segmenter: Segmenter = segment_sections,
) -> CompilationResult:
    """Process ``paths`` one after another, skipping files that fail."""
    result = CompilationResult()
    for path in paths:
        result.found += 1
        logger.info("Processing: %s", path.name)
        try:
            record = compile_document(path, extractor, segmenter)
        except Exception as exc:
            logger.warning("Skipping %s - %s", path.name, exc)
            result.failures.append((path.name, str(exc)))
            continue
        result.records.append(record)
    logger.info("Successfully processed %d of %d PDF files", result.succeeded, result.found)
    return result
