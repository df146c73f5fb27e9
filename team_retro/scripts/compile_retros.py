#!/usr/bin/env python3
"""CLI entrypoint for the TeamRetro PDF compiler."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from team_retro.retro_compiler import aggregate, extract, locator, publish, renderer

DEFAULT_OUT = Path("./compilado")

logger = logging.getLogger("team_retro.retro_compiler.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def parse_backend_list(value: str | None) -> list[str] | None:
    if not value:
        return None
    parts = [entry.strip() for entry in value.split(",") if entry.strip()]
    return parts or None


def command_compile(args: argparse.Namespace) -> int:
    folder = Path(args.folder).expanduser()
    out_dir = Path(args.out).expanduser()
    pdf_backends = parse_backend_list(args.pdf_backends)

    logger.info("Scanning for PDFs in: %s", folder)
    if args.name_contains:
        logger.info("Filtering by name contains: %s", args.name_contains)
    pdf_files = locator.find_pdfs(folder, args.name_contains)
    logger.info("Found %d PDF files", len(pdf_files))
    if not pdf_files:
        logger.info("No PDF files found matching criteria")
        return 0

    try:
        publish.ensure_output_dir(out_dir)
    except publish.PublishError as exc:
        raise SystemExit(str(exc)) from exc

    def extractor(path: Path) -> str:
        return extract.extract_pdf_text(path, prefer_backends=pdf_backends)

    result = aggregate.compile_documents(pdf_files, extractor=extractor)
    if not result.records:
        logger.error("No PDFs were successfully processed")
        return 1

    content = renderer.render_report(result.records, args.format)
    try:
        report = publish.write_report(out_dir, content, args.format)
    except publish.PublishError as exc:
        raise SystemExit(str(exc)) from exc
    copied = publish.copy_pdfs(pdf_files, out_dir)
    label = "Markdown" if args.format == "md" else "JSON"
    logger.info("%s compilation written to: %s", label, report)
    logger.info("Copied %d PDF files to: %s", len(copied), out_dir)
    logger.info("Compilation complete!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(
        prog="compile-retros",
        description="Compile TeamRetro PDF exports into a single report",
    )
    parser_obj.add_argument("folder", help="Root folder to scan recursively for PDF files")
    parser_obj.add_argument(
        "--name-contains",
        help="Only process PDFs whose filename contains this text (case-insensitive)",
    )
    parser_obj.add_argument(
        "--out",
        default=str(DEFAULT_OUT),
        help="Output directory (default: ./compilado)",
    )
    parser_obj.add_argument(
        "--format",
        choices=renderer.OUTPUT_FORMATS,
        default="md",
        help="Output format (default: md)",
    )
    parser_obj.add_argument(
        "--pdf-backends",
        help="Comma-separated PDF extraction backend order (overrides RETRO_PDF_BACKENDS)",
    )
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser_obj


def main(argv: list[str] | None = None) -> int:
    parser_obj = build_parser()
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        parser_obj.print_help()
        return 0
    args = parser_obj.parse_args(argv)
    configure_logging(args.verbose)
    return command_compile(args)


if __name__ == "__main__":
    raise SystemExit(main())
