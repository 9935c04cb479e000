# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Composable page and scan pipelines.

``PagePipeline`` is a single synchronous forward pass over one page. Its
components hold configuration only, so one instance can serve every page of a
scan from any thread. ``ScanPipeline`` fans pages out to a thread pool, waits
for every submitted page, and reports each failure against its own page.
"""
from __future__ import annotations

import concurrent.futures
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union

from scanmeta._logging import log_event

from .assembler import SimpleMetadataAssembler
from .detectors import PatternDataClassifier
from .errors import NoObservationsError, ProcessingError, RecognitionError
from .exporter import metadata_to_json
from .interfaces import (
    DataClassifier,
    ListDetector,
    MetadataAssembler,
    RowClusterer,
    TableAssembler,
    TextRecognizer,
)
from .lists import PatternListDetector
from .models import DocumentMetadata, PageError, PageInput, ScanResult, TextObservation
from .options import ScanOptions, default_max_workers
from .rows import ToleranceRowClusterer
from .tables import GridTableAssembler

logger = logging.getLogger("scanmeta.pipeline")


@dataclass
class PagePipeline:
    recognizer: Optional[TextRecognizer] = None
    row_clusterer: RowClusterer = field(default_factory=ToleranceRowClusterer)
    table_assembler: TableAssembler = field(default_factory=GridTableAssembler)
    list_detector: ListDetector = field(default_factory=PatternListDetector)
    data_classifier: DataClassifier = field(default_factory=PatternDataClassifier)
    assembler: MetadataAssembler = field(default_factory=SimpleMetadataAssembler)

    def observations_for(self, page: PageInput, options: ScanOptions) -> List[TextObservation]:
        if page.observations is not None:
            return list(page.observations)
        if self.recognizer is None:
            raise ProcessingError(f"page {page.page_index} has no observations and no recognizer is configured")
        return list(self.recognizer.recognize(page, options.recognition_languages))

    def infer(self, observations: Sequence[TextObservation], options: ScanOptions) -> DocumentMetadata:
        if not observations:
            raise NoObservationsError()
        try:
            tables = []
            if options.enable_table_detection:
                rows = self.row_clusterer.cluster(observations)
                tables = self.table_assembler.assemble(rows, len(observations))

            lists = self.list_detector.detect(observations) if options.enable_list_detection else []

            detected = []
            if options.enable_data_detection:
                detected = self.data_classifier.classify_all(obs.top_text for obs in observations)

            return self.assembler.assemble(
                observations, tables, lists, detected, options.recognition_languages
            )
        except RecognitionError:
            raise
        except Exception as exc:
            raise ProcessingError(f"{type(exc).__name__}: {exc}") from exc

    def process(self, page: PageInput, options: Optional[ScanOptions] = None) -> DocumentMetadata:
        options = options or ScanOptions(use_recognize_documents_request=True)
        return self.infer(self.observations_for(page, options), options)


@dataclass
class ScanPipeline:
    page_pipeline: PagePipeline = field(default_factory=PagePipeline)
    max_workers: int = field(default_factory=default_max_workers)

    def _run_page(self, page: PageInput, options: ScanOptions) -> Union[DocumentMetadata, PageError]:
        try:
            metadata = self.page_pipeline.process(page, options)
        except RecognitionError as exc:
            error = PageError(page_index=page.page_index, code=exc.code, reason=exc.reason)
        except Exception as exc:
            error = PageError(
                page_index=page.page_index,
                code=ProcessingError.code,
                reason=f"{type(exc).__name__}: {exc}",
            )
        else:
            log_event(
                logger,
                "page_inference_completed",
                {
                    "page_index": page.page_index,
                    "tables": len(metadata.tables),
                    "lists": len(metadata.lists),
                    "detected_data": len(metadata.detected_data),
                },
                level="debug",
            )
            return metadata

        log_event(
            logger,
            "page_inference_failed",
            {"page_index": page.page_index, "code": error.code, "reason": error.reason},
            level="warning",
        )
        return error

    def run_pages(self, pages: Sequence[PageInput], options: ScanOptions) -> List[Union[DocumentMetadata, PageError]]:
        """Run every page and return one outcome per page, in input order, once all have finished."""

        if not pages:
            return []
        workers = max(1, min(self.max_workers, len(pages)))
        with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [pool.submit(self._run_page, page, options) for page in pages]
            concurrent.futures.wait(futures)
        return [fut.result() for fut in futures]

    def process(self, pages: Sequence[PageInput], options: Optional[ScanOptions] = None) -> ScanResult:
        options = options or ScanOptions()
        ordered = sorted(pages, key=lambda p: p.page_index)
        images = [page.image_path for page in ordered]
        if not options.use_recognize_documents_request:
            return ScanResult(images=images, metadata=[], errors=[])

        metadata: List[dict] = []
        errors: List[PageError] = []
        for outcome in self.run_pages(ordered, options):
            if isinstance(outcome, PageError):
                errors.append(outcome)
            else:
                metadata.append(metadata_to_json(outcome))

        log_event(
            logger,
            "scan_completed",
            {
                "pages": len(ordered),
                "succeeded": len(metadata),
                "failed": len(errors),
                "language": options.primary_language,
            },
        )
        return ScanResult(images=images, metadata=metadata, errors=errors)


def build_page_pipeline(recognizer: Optional[TextRecognizer] = None) -> PagePipeline:
    classifier = PatternDataClassifier()
    return PagePipeline(
        recognizer=recognizer,
        row_clusterer=ToleranceRowClusterer(),
        table_assembler=GridTableAssembler(classifier=classifier),
        list_detector=PatternListDetector(),
        data_classifier=classifier,
        assembler=SimpleMetadataAssembler(),
    )


_DEFAULT_PIPELINE = build_page_pipeline()


def infer_document_metadata(
    observations: Sequence[TextObservation],
    languages: Optional[Sequence[str]] = None,
    options: Optional[ScanOptions] = None,
) -> DocumentMetadata:
    """Run the default inference pass over one page of observations."""

    if options is None:
        options = ScanOptions(
            use_recognize_documents_request=True,
            recognition_languages=list(languages) if languages is not None else [],
        )
    elif languages is not None:
        options = options.model_copy(update={"recognition_languages": list(languages)})
    return _DEFAULT_PIPELINE.infer(observations, options)


__all__ = ["PagePipeline", "ScanPipeline", "build_page_pipeline", "infer_document_metadata"]
