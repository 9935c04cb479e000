# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Mock text recognizers for exercising the pipelines without Tesseract."""
from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from .errors import ImageDecodeError, RecognitionError
from .interfaces import TextRecognizer
from .models import PageInput, TextObservation


class MockTextRecognizer(TextRecognizer):
    """Return canned observations per page index.

    Pages without an entry get a single ``"page <n>"`` line so every page
    produces metadata unless the test says otherwise.
    """

    def __init__(self, pages: Optional[Dict[int, List[TextObservation]]] = None) -> None:
        self.pages = dict(pages or {})
        self.calls: List[PageInput] = []

    def recognize(self, page: PageInput, languages: Sequence[str]) -> List[TextObservation]:
        self.calls.append(page)
        if page.page_index in self.pages:
            return list(self.pages[page.page_index])
        return [TextObservation.from_text(f"page {page.page_index}", x=0.1, y=0.9)]


class FailingTextRecognizer(TextRecognizer):
    """Raise ``error`` for the listed page indices and delegate the rest."""

    def __init__(
        self,
        failing_pages: Sequence[int],
        error: Optional[RecognitionError] = None,
        fallback: Optional[TextRecognizer] = None,
    ) -> None:
        self.failing_pages = set(failing_pages)
        self.error = error or ImageDecodeError("mock decode failure")
        self.fallback = fallback or MockTextRecognizer()
        self.calls: List[PageInput] = []

    def recognize(self, page: PageInput, languages: Sequence[str]) -> List[TextObservation]:
        self.calls.append(page)
        if page.page_index in self.failing_pages:
            raise self.error
        return self.fallback.recognize(page, languages)
