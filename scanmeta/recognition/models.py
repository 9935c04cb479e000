# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Data models for the document inference layer.

Every value handed from one stage to the next is a frozen pydantic model so
stages can be swapped without changing the data exchange format, and so no
stage can mutate what an earlier stage produced. Coordinates are normalized
page fractions with the origin at the bottom-left corner.
"""
from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


class BoundingBox(_Frozen):
    """Axis-aligned box in normalized page coordinates (y grows upwards)."""

    x: float = Field(..., ge=0.0, le=1.0)
    y: float = Field(..., ge=0.0, le=1.0)
    width: float = Field(..., ge=0.0, le=1.0)
    height: float = Field(..., ge=0.0, le=1.0)


class TextCandidate(_Frozen):
    text: str = Field(..., alias="string")
    confidence: float = Field(1.0, ge=0.0, le=1.0)


class TextObservation(_Frozen):
    """One recognized line with its ranked candidates, best first."""

    candidates: List[TextCandidate] = Field(..., min_length=1)
    bounding_box: BoundingBox = Field(..., alias="boundingBox")

    @property
    def top_text(self) -> str:
        return self.candidates[0].text

    @classmethod
    def from_text(cls, text: str, x: float, y: float, width: float = 0.1, height: float = 0.02,
                  confidence: float = 1.0) -> "TextObservation":
        return cls(
            candidates=[TextCandidate(text=text, confidence=confidence)],
            bounding_box=BoundingBox(x=x, y=y, width=width, height=height),
        )


Row = List[TextObservation]


class DetectedDataType(str, Enum):
    EMAIL_ADDRESS = "emailAddress"
    PHONE_NUMBER = "phoneNumber"
    URL = "url"
    DATE = "date"
    ADDRESS = "address"
    UNKNOWN = "unknown"


class DetectedDataItem(_Frozen):
    text: str
    type: DetectedDataType


class CellData(_Frozen):
    text: str
    row_index: int = Field(..., ge=0)
    column_index: int = Field(..., ge=0)
    detected_data: List[DetectedDataItem] = Field(default_factory=list)


class TableData(_Frozen):
    """Row-major cell grid. Rows may differ in length and are kept as-is."""

    row_count: int = Field(..., ge=0)
    column_count: int = Field(..., ge=0)
    cells: List[List[CellData]]


class ListItemData(_Frozen):
    text: str
    level: int = Field(0, ge=0)


class ListData(_Frozen):
    items: List[ListItemData]


class DocumentMetadata(_Frozen):
    transcript: str
    tables: List[TableData] = Field(default_factory=list)
    lists: List[ListData] = Field(default_factory=list)
    detected_data: List[DetectedDataItem] = Field(default_factory=list)
    language: Optional[str] = None


class PageInput(_Frozen):
    """Single scanned page.

    ``observations`` short-circuits recognition when the OCR collaborator ran
    elsewhere; otherwise the page ``image`` (or ``image_path``) is handed to a
    :class:`~scanmeta.recognition.interfaces.TextRecognizer`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    page_index: int = Field(..., ge=0)
    image: object = None
    image_path: Optional[str] = None
    observations: Optional[List[TextObservation]] = None


class PageError(_Frozen):
    page_index: int = Field(..., ge=0)
    code: str
    reason: str


class ScanResult(_Frozen):
    """Multi-page response: every page image plus metadata for pages that succeeded."""

    images: List[Optional[str]]
    metadata: List[dict]
    errors: List[PageError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
