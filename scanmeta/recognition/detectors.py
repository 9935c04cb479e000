# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Regex classification of single lines into detected-data kinds.

Matchers run in order and the first hit wins. Each matcher states whether the
whole line must conform (``full_match``) or whether containing a match is
enough: email and phone numbers require the full line, URLs are found
anywhere in it.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Optional, Pattern, Sequence

from .interfaces import DataClassifier
from .models import DetectedDataItem, DetectedDataType

EMAIL_PATTERN = r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}"
PHONE_PATTERN = r"^[+]?[(]?[0-9]{1,4}[)]?[-\s.]?[(]?[0-9]{1,4}[)]?[-\s.]?[0-9]{1,9}$"
URL_PATTERN = r"(http|https)://[A-Za-z0-9\-.]+\.[A-Za-z]{2,}(/\S*)?"


@dataclass(frozen=True)
class PatternMatcher:
    kind: DetectedDataType
    pattern: Pattern[str]
    full_match: bool

    @classmethod
    def compile(cls, kind: DetectedDataType, pattern: str, *, full_match: bool) -> "PatternMatcher":
        return cls(kind=kind, pattern=re.compile(pattern), full_match=full_match)

    def matches(self, text: str) -> bool:
        if self.full_match:
            return self.pattern.fullmatch(text) is not None
        return self.pattern.search(text) is not None


DEFAULT_MATCHERS: tuple[PatternMatcher, ...] = (
    PatternMatcher.compile(DetectedDataType.EMAIL_ADDRESS, EMAIL_PATTERN, full_match=True),
    PatternMatcher.compile(DetectedDataType.PHONE_NUMBER, PHONE_PATTERN, full_match=True),
    PatternMatcher.compile(DetectedDataType.URL, URL_PATTERN, full_match=False),
)


class PatternDataClassifier(DataClassifier):
    """Attribute at most one :class:`DetectedDataType` to a line of text."""

    def __init__(self, matchers: Sequence[PatternMatcher] = DEFAULT_MATCHERS) -> None:
        self.matchers = tuple(matchers)

    def classify(self, text: str) -> Optional[DetectedDataItem]:
        for matcher in self.matchers:
            if matcher.matches(text):
                return DetectedDataItem(text=text, type=matcher.kind)
        return None

    def classify_all(self, texts: Iterable[str]) -> List[DetectedDataItem]:
        found: List[DetectedDataItem] = []
        for text in texts:
            item = self.classify(text)
            if item is not None:
                found.append(item)
        return found


__all__ = [
    "DEFAULT_MATCHERS",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "PatternDataClassifier",
    "PatternMatcher",
    "URL_PATTERN",
]
