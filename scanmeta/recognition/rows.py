# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Horizontal banding of observations by vertical position."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .interfaces import RowClusterer
from .models import Row, TextObservation

DEFAULT_ROW_TOLERANCE = 0.05


class ToleranceRowClusterer(RowClusterer):
    """Group observations into rows, top of the page first.

    Observations are walked in descending ``y`` and each one is compared with
    the previous observation rather than with the first member of its row, so
    a run of small steps can stretch a row past ``tolerance`` overall.
    Ties in ``y`` keep their OCR order.
    """

    def __init__(self, tolerance: float = DEFAULT_ROW_TOLERANCE) -> None:
        if tolerance < 0:
            raise ValueError("tolerance must be >= 0")
        self.tolerance = tolerance

    def cluster(self, observations: Sequence[TextObservation]) -> List[Row]:
        ordered = sorted(observations, key=lambda obs: -obs.bounding_box.y)

        rows: List[Row] = []
        current: Row = []
        last_y: Optional[float] = None
        for obs in ordered:
            y = obs.bounding_box.y
            if last_y is None or abs(y - last_y) < self.tolerance:
                current.append(obs)
            else:
                rows.append(current)
                current = [obs]
            last_y = y

        if current:
            rows.append(current)
        return rows


def cluster_rows(observations: Sequence[TextObservation], tolerance: float = DEFAULT_ROW_TOLERANCE) -> List[Row]:
    return ToleranceRowClusterer(tolerance).cluster(observations)


__all__ = ["DEFAULT_ROW_TOLERANCE", "ToleranceRowClusterer", "cluster_rows"]
