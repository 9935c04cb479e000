# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Document metadata inference over OCR text observations."""

from .assembler import SimpleMetadataAssembler, build_transcript
from .detectors import DEFAULT_MATCHERS, PatternDataClassifier, PatternMatcher
from .errors import ImageDecodeError, NoObservationsError, ProcessingError, RecognitionError
from .exporter import (
    dumps_metadata,
    metadata_from_json,
    metadata_path_for,
    metadata_to_json,
    scan_result_to_json,
    write_metadata_json,
)
from .input_handler import BasicInputHandler
from .interfaces import (
    DataClassifier,
    ListDetector,
    MetadataAssembler,
    RowClusterer,
    TableAssembler,
    TextRecognizer,
)
from .lists import PatternListDetector
from .mocks import FailingTextRecognizer, MockTextRecognizer
from .models import (
    BoundingBox,
    CellData,
    DetectedDataItem,
    DetectedDataType,
    DocumentMetadata,
    ListData,
    ListItemData,
    PageError,
    PageInput,
    Row,
    ScanResult,
    TableData,
    TextCandidate,
    TextObservation,
)
from .options import ScanOptions
from .pipeline import PagePipeline, ScanPipeline, build_page_pipeline, infer_document_metadata
from .rows import ToleranceRowClusterer, cluster_rows
from .tables import GridTableAssembler

__all__ = [
    "BasicInputHandler",
    "BoundingBox",
    "CellData",
    "DEFAULT_MATCHERS",
    "DataClassifier",
    "DetectedDataItem",
    "DetectedDataType",
    "DocumentMetadata",
    "FailingTextRecognizer",
    "GridTableAssembler",
    "ImageDecodeError",
    "ListData",
    "ListDetector",
    "ListItemData",
    "MetadataAssembler",
    "MockTextRecognizer",
    "NoObservationsError",
    "PageError",
    "PageInput",
    "PagePipeline",
    "PatternDataClassifier",
    "PatternListDetector",
    "PatternMatcher",
    "ProcessingError",
    "RecognitionError",
    "Row",
    "RowClusterer",
    "ScanOptions",
    "ScanPipeline",
    "ScanResult",
    "SimpleMetadataAssembler",
    "TableAssembler",
    "TableData",
    "TextCandidate",
    "TextObservation",
    "TextRecognizer",
    "ToleranceRowClusterer",
    "build_page_pipeline",
    "build_transcript",
    "cluster_rows",
    "dumps_metadata",
    "infer_document_metadata",
    "metadata_from_json",
    "metadata_path_for",
    "metadata_to_json",
    "scan_result_to_json",
    "write_metadata_json",
]
