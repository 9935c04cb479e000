# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Interfaces for document inference components."""
from __future__ import annotations

from typing import Iterable, List, Optional, Protocol, Sequence

from .models import (
    DetectedDataItem,
    DocumentMetadata,
    ListData,
    PageInput,
    Row,
    TableData,
    TextObservation,
)


class TextRecognizer(Protocol):
    def recognize(self, page: PageInput, languages: Sequence[str]) -> List[TextObservation]:
        ...


class RowClusterer(Protocol):
    def cluster(self, observations: Sequence[TextObservation]) -> List[Row]:
        ...


class DataClassifier(Protocol):
    def classify(self, text: str) -> Optional[DetectedDataItem]:
        ...

    def classify_all(self, texts: Iterable[str]) -> List[DetectedDataItem]:
        ...


class TableAssembler(Protocol):
    def assemble(self, rows: Sequence[Row], observation_count: int) -> List[TableData]:
        ...


class ListDetector(Protocol):
    def detect(self, observations: Sequence[TextObservation]) -> List[ListData]:
        ...


class MetadataAssembler(Protocol):
    def assemble(
        self,
        observations: Sequence[TextObservation],
        tables: List[TableData],
        lists: List[ListData],
        detected_data: List[DetectedDataItem],
        languages: Optional[Sequence[str]],
    ) -> DocumentMetadata:
        ...
