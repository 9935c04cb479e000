# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Turn scanner output into :class:`PageInput` values for the pipelines."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Union

from .models import PageInput, TextObservation


class BasicInputHandler:
    """Build pages either from image files or from pre-recognized observations.

    * ``from_images`` keeps only the path on each page. Images are opened by
      the recognizer when the page is processed, so a long scan does not hold
      every decoded page in memory.
    * ``from_observations`` accepts the ``{"pages": [...]}`` document used by
      the HTTP surface and the CLI, where each page carries the observations
      an external OCR engine already produced.
    """

    def from_images(self, paths: Iterable[Union[str, Path]]) -> List[PageInput]:
        return [
            PageInput(page_index=idx, image_path=Path(path).as_posix())
            for idx, path in enumerate(paths)
        ]

    def from_observations(self, payload: Mapping[str, Any]) -> List[PageInput]:
        pages = payload.get("pages") if isinstance(payload, Mapping) else None
        if not isinstance(pages, list):
            raise ValueError("observation payload requires a 'pages' list")

        result: List[PageInput] = []
        for idx, page in enumerate(pages):
            if not isinstance(page, Mapping):
                raise ValueError(f"page {idx} must be an object")
            observations = [TextObservation.model_validate(obs) for obs in page.get("observations") or []]
            result.append(
                PageInput(page_index=idx, image_path=page.get("image"), observations=observations)
            )
        return result

    def load_observations_file(self, path: Union[str, Path]) -> List[PageInput]:
        with Path(path).open("r", encoding="utf-8") as fh:
            return self.from_observations(json.load(fh))


__all__ = ["BasicInputHandler"]
