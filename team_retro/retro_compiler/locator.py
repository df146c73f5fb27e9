"""Discovery of retrospective PDF exports on disk."""
from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

PDF_SUFFIX = ".pdf"


def iter_pdf_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if path.suffix.lower() == PDF_SUFFIX:
            yield path


def matches_name(path: Path, name_contains: str | None) -> bool:
    if not name_contains:
        return True
    return name_contains.lower() in path.name.lower()


def find_pdfs(root: Path, name_contains: str | None = None) -> list[Path]:
    """Return PDFs under ``root`` in lexicographic order.

    A missing root yields an empty list.
    """
    if not root.is_dir():
        return []
    return [path for path in iter_pdf_files(root) if matches_name(path, name_contains)]
