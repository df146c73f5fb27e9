"""Persistence of the compiled report and the source PDFs."""
from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from .renderer import REPORT_FILENAMES

logger = logging.getLogger(__name__)


class PublishError(RuntimeError):
    """Raised when the output directory or report cannot be written."""


def ensure_output_dir(out_dir: Path) -> Path:
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise PublishError(f"Cannot create output directory {out_dir}: {exc}") from exc
    return out_dir


def report_path(out_dir: Path, output_format: str) -> Path:
    return out_dir / REPORT_FILENAMES[output_format]


def write_report(out_dir: Path, content: str, output_format: str) -> Path:
    path = report_path(ensure_output_dir(out_dir), output_format)
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise PublishError(f"Cannot write report {path}: {exc}") from exc
    return path


def copy_pdfs(pdf_paths: Iterable[Path], out_dir: Path) -> list[Path]:
    """Copy PDFs into ``out_dir`` by base name; later duplicates overwrite.

    A file that cannot be copied is logged and left out of the result.
    """
    ensure_output_dir(out_dir)
    copied: list[Path] = []
    for pdf_path in pdf_paths:
        destination = out_dir / pdf_path.name
        if destination in copied:
            logger.debug("Overwriting %s with %s", destination, pdf_path)
        try:
            shutil.copy2(pdf_path, destination)
        except shutil.SameFileError:
            logger.debug("Skipping copy of %s onto itself", pdf_path)
        except OSError as exc:
            logger.warning("Could not copy %s - %s", pdf_path.name, exc)
            continue
        copied.append(destination)
    return copied
