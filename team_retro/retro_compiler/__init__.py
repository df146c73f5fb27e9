"""TeamRetro compilation package."""
from __future__ import annotations

from pathlib import Path

from . import aggregate, extract, locator, publish, renderer, sections

__all__ = [
    "locator",
    "extract",
    "sections",
    "aggregate",
    "renderer",
    "publish",
    "compile_folder",
]


def compile_folder(root: Path, name_contains: str | None = None) -> aggregate.CompilationResult:
    """Convenience wrapper to locate and compile every PDF under ``root``."""
    pdf_files = locator.find_pdfs(root, name_contains)
    return aggregate.compile_documents(pdf_files)
