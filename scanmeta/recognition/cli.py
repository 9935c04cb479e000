# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Command-line entry for document metadata inference.

Pages come either from image files (recognized with Tesseract) or from a JSON
document of observations produced by another OCR engine. The scan result is
printed as JSON; ``--write-metadata`` additionally stores one
``<stem>-metadata.json`` file per successful page.
"""
from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional, Sequence

from pydantic import ValidationError

from scanmeta._logging import configure_logging, log_event

from .exporter import metadata_from_json, metadata_path_for, scan_result_to_json, write_metadata_json
from .input_handler import BasicInputHandler
from .models import PageInput, ScanResult
from .options import ScanOptions, default_languages, default_max_workers
from .pipeline import ScanPipeline, build_page_pipeline

logger = logging.getLogger("scanmeta.cli")

EXIT_OK = 0
EXIT_PAGE_FAILED = 2


def build_scan_pipeline(*, use_tesseract: bool, max_workers: Optional[int] = None, psm: int = 3) -> ScanPipeline:
    recognizer = None
    if use_tesseract:
        from .tesseract import TesseractTextRecognizer

        try:
            recognizer = TesseractTextRecognizer(psm=psm)
        except RuntimeError as exc:
            raise SystemExit(f"cannot recognize images: {exc}") from exc
    return ScanPipeline(
        page_pipeline=build_page_pipeline(recognizer),
        max_workers=max_workers or default_max_workers(),
    )


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="scanmeta analyze", description="Infer document metadata from scanned pages")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--images", nargs="+", help="Page images to recognize, in page order")
    source.add_argument("--observations", help='JSON file shaped like {"pages": [{"image"?, "observations": [...]}]}')
    parser.add_argument(
        "--language",
        action="append",
        dest="languages",
        help="Recognition language (repeatable, first one wins for metadata); defaults to SCANMETA_LANGUAGES",
    )
    parser.add_argument("--no-tables", action="store_true", help="Skip table detection")
    parser.add_argument("--no-lists", action="store_true", help="Skip list detection")
    parser.add_argument("--no-data", action="store_true", help="Skip detected-data classification")
    parser.add_argument("--write-metadata", action="store_true", help="Write <stem>-metadata.json per page")
    parser.add_argument("--metadata-dir", help="Directory for metadata files (defaults to each image's directory)")
    parser.add_argument("--max-workers", type=int, default=None, help="Pages processed concurrently")
    parser.add_argument("--psm", type=int, default=3, help="Tesseract page segmentation mode")
    parser.add_argument("--out", default="-", help="Output file path or '-' for stdout")
    return parser.parse_args(list(argv) if argv is not None else None)


def _options_from_args(args: argparse.Namespace) -> ScanOptions:
    return ScanOptions(
        use_recognize_documents_request=True,
        recognition_languages=args.languages or default_languages(),
        enable_table_detection=not args.no_tables,
        enable_list_detection=not args.no_lists,
        enable_data_detection=not args.no_data,
    )


def _load_pages(args: argparse.Namespace) -> List[PageInput]:
    handler = BasicInputHandler()
    if args.images:
        return handler.from_images(args.images)
    try:
        return handler.load_observations_file(args.observations)
    except (OSError, json.JSONDecodeError, ValueError, ValidationError) as exc:
        raise SystemExit(f"cannot read observations from {args.observations}: {exc}") from exc


def _write_metadata_files(pages: Sequence[PageInput], result: ScanResult, out_dir: Optional[str]) -> List[Path]:
    failed = {error.page_index for error in result.errors}
    succeeded = [page for page in sorted(pages, key=lambda p: p.page_index) if page.page_index not in failed]
    written: List[Path] = []
    for page, payload in zip(succeeded, result.metadata):
        source = page.image_path or f"page-{page.page_index}"
        target_dir = out_dir if out_dir is not None or page.image_path else "."
        path = write_metadata_json(metadata_from_json(payload), metadata_path_for(source, target_dir))
        log_event(logger, "metadata_written", {"page_index": page.page_index, "path": path.as_posix()})
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging()

    pages = _load_pages(args)
    pipeline = build_scan_pipeline(use_tesseract=bool(args.images), max_workers=args.max_workers, psm=args.psm)
    result = pipeline.process(pages, _options_from_args(args))

    if args.write_metadata:
        _write_metadata_files(pages, result, args.metadata_dir)

    text = json.dumps(scan_result_to_json(result), ensure_ascii=False, indent=2)
    if args.out == "-":
        print(text)
    else:
        Path(args.out).write_text(text + "\n", encoding="utf-8")

    return EXIT_OK if result.ok else EXIT_PAGE_FAILED


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
