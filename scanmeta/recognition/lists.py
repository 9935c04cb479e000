# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Lexical list-item detection."""
from __future__ import annotations

import re
from typing import List, Sequence

from .interfaces import ListDetector
from .models import ListData, ListItemData, TextObservation

BULLET_GLYPHS = "•◦▪●"
LIST_ITEM_PATTERN = re.compile(rf"^(?:[{BULLET_GLYPHS}\-*]|\d+\.)\s+")


class PatternListDetector(ListDetector):
    """Collect every line that opens with a bullet, dash, asterisk or ``N.`` marker.

    All matching lines on a page form a single flat list in OCR order.
    """

    def __init__(self, pattern: re.Pattern[str] = LIST_ITEM_PATTERN) -> None:
        self.pattern = pattern

    def is_list_item(self, text: str) -> bool:
        return self.pattern.match(text) is not None

    def detect(self, observations: Sequence[TextObservation]) -> List[ListData]:
        items = [
            ListItemData(text=obs.top_text, level=0)
            for obs in observations
            if self.is_list_item(obs.top_text)
        ]
        if not items:
            return []
        return [ListData(items=items)]


__all__ = ["BULLET_GLYPHS", "LIST_ITEM_PATTERN", "PatternListDetector"]
