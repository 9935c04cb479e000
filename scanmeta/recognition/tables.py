# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Table detection over clustered rows."""
from __future__ import annotations

from typing import List, Optional, Sequence

from .detectors import PatternDataClassifier
from .interfaces import DataClassifier, TableAssembler
from .models import CellData, Row, TableData


class GridTableAssembler(TableAssembler):
    """Treat the row bands of a page as one table when the geometry allows it.

    A page qualifies when it has at least ``min_observations`` observations,
    clusters into at least ``min_rows`` rows, and the mean row length (integer
    division) reaches ``min_mean_row_length``. Cells within a row are ordered
    left to right; rows are never padded, so the grid may be ragged and
    ``column_count`` reflects the first row only.
    """

    def __init__(
        self,
        classifier: Optional[DataClassifier] = None,
        min_observations: int = 6,
        min_rows: int = 2,
        min_mean_row_length: int = 2,
    ) -> None:
        self.classifier = classifier or PatternDataClassifier()
        self.min_observations = min_observations
        self.min_rows = min_rows
        self.min_mean_row_length = min_mean_row_length

    def qualifies(self, rows: Sequence[Row], observation_count: int) -> bool:
        if observation_count < self.min_observations or len(rows) < self.min_rows:
            return False
        mean_row_length = sum(len(row) for row in rows) // len(rows)
        return mean_row_length >= self.min_mean_row_length

    def assemble(self, rows: Sequence[Row], observation_count: int) -> List[TableData]:
        if not self.qualifies(rows, observation_count):
            return []

        cells: List[List[CellData]] = []
        for row_index, row in enumerate(rows):
            ordered = sorted(row, key=lambda obs: obs.bounding_box.x)
            row_cells: List[CellData] = []
            for column_index, obs in enumerate(ordered):
                text = obs.top_text
                item = self.classifier.classify(text)
                row_cells.append(
                    CellData(
                        text=text,
                        row_index=row_index,
                        column_index=column_index,
                        detected_data=[item] if item is not None else [],
                    )
                )
            cells.append(row_cells)

        return [
            TableData(
                row_count=len(cells),
                column_count=len(cells[0]) if cells else 0,
                cells=cells,
            )
        ]


__all__ = ["GridTableAssembler"]
