# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""scanmeta: structured metadata from scanned document pages."""
from __future__ import annotations

from ._version import __version__
from .recognition import (
    DocumentMetadata,
    ScanOptions,
    ScanPipeline,
    TextObservation,
    infer_document_metadata,
    metadata_to_json,
)

__all__ = [
    "DocumentMetadata",
    "ScanOptions",
    "ScanPipeline",
    "TextObservation",
    "__version__",
    "infer_document_metadata",
    "metadata_to_json",
]
