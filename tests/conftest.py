# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Pytest configuration shared across the suite."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from scanmeta.recognition.models import TextObservation  # noqa: E402


def obs(text, x, y, width=0.1, height=0.02):
    return TextObservation.from_text(text, x=x, y=y, width=width, height=height)


def obs_json(text, x, y, width=0.1, height=0.02):
    return {
        "candidates": [{"string": text, "confidence": 0.9}],
        "boundingBox": {"x": x, "y": y, "width": width, "height": height},
    }


@pytest.fixture
def grid_observations():
    """Four rows of two cells, left column first in OCR order."""

    return [
        obs("Name", 0.1, 0.9),
        obs("Email", 0.5, 0.9),
        obs("Jane", 0.1, 0.8),
        obs("jane@example.com", 0.5, 0.8),
        obs("Bob", 0.1, 0.7),
        obs("555-123-4567", 0.5, 0.7),
        obs("Site", 0.1, 0.6),
        obs("https://example.com", 0.5, 0.6),
    ]
