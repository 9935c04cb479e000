# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Merge per-analysis results into a single :class:`DocumentMetadata`."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .interfaces import MetadataAssembler
from .models import DetectedDataItem, DocumentMetadata, ListData, TableData, TextObservation

DEFAULT_LANGUAGE = "en-US"


def build_transcript(observations: Sequence[TextObservation]) -> str:
    return "\n".join(obs.top_text for obs in observations).strip()


class SimpleMetadataAssembler(MetadataAssembler):
    """Transcript in OCR order plus the first requested language."""

    def __init__(self, default_language: str = DEFAULT_LANGUAGE) -> None:
        self.default_language = default_language

    def primary_language(self, languages: Optional[Sequence[str]]) -> str:
        if languages:
            return languages[0]
        return self.default_language

    def assemble(
        self,
        observations: Sequence[TextObservation],
        tables: List[TableData],
        lists: List[ListData],
        detected_data: List[DetectedDataItem],
        languages: Optional[Sequence[str]],
    ) -> DocumentMetadata:
        return DocumentMetadata(
            transcript=build_transcript(observations),
            tables=tables,
            lists=lists,
            detected_data=detected_data,
            language=self.primary_language(languages),
        )


__all__ = ["DEFAULT_LANGUAGE", "SimpleMetadataAssembler", "build_transcript"]
