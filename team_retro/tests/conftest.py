from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest


def _escape_pdf_string(value: str) -> str:
    return value.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: Sequence[Sequence[str]]) -> bytes:
    """Build a minimal Helvetica PDF, one text line per entry on each page."""
    bodies: dict[int, bytes] = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    kids: list[str] = []
    for index, lines in enumerate(pages):
        page_id = 4 + index * 2
        content_id = page_id + 1
        kids.append(f"{page_id} 0 R")
        ops = ["BT", "/F1 12 Tf", "14 TL", "72 720 Td"]
        ops.extend(f"({_escape_pdf_string(line)}) Tj T*" for line in lines)
        ops.append("ET")
        stream = "\n".join(ops).encode("latin-1")
        bodies[page_id] = (
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {content_id} 0 R /Resources << /Font << /F1 3 0 R >> >> >>"
        ).encode("ascii")
        bodies[content_id] = (
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )
    bodies[2] = f"<< /Type /Pages /Kids [{' '.join(kids)}] /Count {len(kids)} >>".encode("ascii")

    out = bytearray(b"%PDF-1.4\n")
    offsets: dict[int, int] = {}
    for obj_id in sorted(bodies):
        offsets[obj_id] = len(out)
        out += b"%d 0 obj\n" % obj_id + bodies[obj_id] + b"\nendobj\n"
    xref_position = len(out)
    size = max(bodies) + 1
    out += b"xref\n0 %d\n" % size
    out += b"0000000000 65535 f \n"
    for obj_id in range(1, size):
        out += b"%010d 00000 n \n" % offsets[obj_id]
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        size,
        xref_position,
    )
    return bytes(out)


@pytest.fixture()
def make_pdf() -> Callable[[Path, Sequence[Sequence[str]]], Path]:
    def _make(path: Path, pages: Sequence[Sequence[str]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(build_pdf(pages))
        return path

    return _make


@pytest.fixture()
def retro_folder(tmp_path: Path, make_pdf: Callable[..., Path]) -> Path:
    root = tmp_path / "retros"
    make_pdf(
        root / "sprint-12" / "Team Alpha Retro.pdf",
        [["Retro A"], ["What went well?"], ["Good pace"], ["Team agreements"], ["Keep weekly sync"]],
    )
    make_pdf(
        root / "Team Beta Retro.pdf",
        [["Retro B"], ["Notes from the meeting"], ["Nothing structured here"]],
    )
    return root
