# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Failure kinds raised while turning a page into document metadata."""
from __future__ import annotations


class RecognitionError(RuntimeError):
    """Base class for page-level failures. ``code`` is stable for callers."""

    code = "RECOGNITION_FAILED"

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class NoObservationsError(RecognitionError):
    """The OCR collaborator returned no text observations for the page."""

    code = "NO_OBSERVATIONS"

    def __init__(self, reason: str = "OCR returned no text observations") -> None:
        super().__init__(reason)


class ImageDecodeError(RecognitionError):
    """The page image could not be opened or decoded."""

    code = "IMAGE_DECODE_FAILED"


class ProcessingError(RecognitionError):
    """Unexpected failure during clustering or classification."""

    code = "PROCESSING_FAILED"


__all__ = ["ImageDecodeError", "NoObservationsError", "ProcessingError", "RecognitionError"]
