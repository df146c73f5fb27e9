"""Rendering utilities for the compilation report."""
from __future__ import annotations

import json
from collections.abc import Iterable, Sequence

from .aggregate import CompilationRecord

OUTPUT_FORMATS = ("md", "json")

REPORT_FILENAMES = {
    "md": "teamretro-compilation.md",
    "json": "teamretro-compilation.json",
}


def render_markdown(records: Sequence[CompilationRecord]) -> str:
    lines = ["# TeamRetro Compilation", ""]
    lines.append("## Summary Table")
    lines.append("")
    lines.append("| File Name | Title | Sections Found |")
    lines.append("|-----------|-------|----------------|")
    for record in records:
        lines.append(format_record_row(record))
    lines.append("")
    lines.append("---")
    lines.append("")
    for record in records:
        lines.extend(format_record_detail(record))
    return "\n".join(lines)


def format_record_row(record: CompilationRecord) -> str:
    section_names = ", ".join(record.sections)
    return (
        f"| {escape_cell(record.file)} | {escape_cell(record.title)} | "
        f"{escape_cell(section_names)} |"
    )


def format_record_detail(record: CompilationRecord) -> list[str]:
    lines = [f"## {record.file}", "", f"_Title:_ {record.title}", ""]
    for name, content in record.sections.items():
        lines.append(f"### {name}")
        lines.append("")
        lines.extend(f"* {line}" for line in bullet_lines(content))
        lines.append("")
    lines.append("")
    return lines


def bullet_lines(content: str) -> Iterable[str]:
    for line in content.split("\n"):
        if line.strip():
            yield line.strip()


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|")


def render_json(records: Sequence[CompilationRecord]) -> str:
    return json.dumps([record.to_dict() for record in records], indent=2, ensure_ascii=False)


def render_report(records: Sequence[CompilationRecord], output_format: str) -> str:
    if output_format == "md":
        return render_markdown(records)
    if output_format == "json":
        return render_json(records)
    raise ValueError(f"Unsupported output format: {output_format}")
