# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Text recognition backed by pytesseract.

Tesseract reports words in pixel coordinates with a top-left origin. Words
are grouped back into lines using Tesseract's own ``(block, paragraph,
line)`` numbering, and each line box is converted to the normalized,
bottom-left-origin coordinates the inference layer expects. Tesseract yields
a single hypothesis per line, so each observation carries one candidate.
"""
from __future__ import annotations

from statistics import mean
from typing import Dict, List, Sequence, Tuple

import pytesseract
from PIL import Image, UnidentifiedImageError
from pytesseract import Output

from .errors import ImageDecodeError
from .interfaces import TextRecognizer
from .models import BoundingBox, PageInput, TextCandidate, TextObservation
from .options import _env_truthy

_TESSERACT_LANGS = {
    "ar": "ara",
    "de": "deu",
    "en": "eng",
    "es": "spa",
    "fr": "fra",
    "hi": "hin",
    "it": "ita",
    "ja": "jpn",
    "ko": "kor",
    "pt": "por",
    "ru": "rus",
    "zh": "chi_sim",
}


def _pytesseract_allowed() -> bool:
    return _env_truthy("SCANMETA_ALLOW_PYTESSERACT", True)


def tesseract_languages(languages: Sequence[str], default: str = "eng") -> str:
    """Map BCP-47 style codes (``en-US``) onto a Tesseract ``lang`` string (``eng``)."""

    codes: List[str] = []
    for code in languages:
        base = code.replace("_", "-").split("-")[0].lower()
        mapped = _TESSERACT_LANGS.get(base)
        if mapped and mapped not in codes:
            codes.append(mapped)
    return "+".join(codes) if codes else default


def _clamp(value: float) -> float:
    return 0.0 if value < 0.0 else 1.0 if value > 1.0 else value


class TesseractTextRecognizer(TextRecognizer):
    """Run line-level OCR on a page image.

    Args:
        oem: OCR Engine Mode. ``3`` lets Tesseract pick its LSTM engine.
        psm: Page segmentation mode. ``3`` is fully automatic segmentation,
            which keeps separate lines for table cells and list items.
        extra_config: Additional flags forwarded to pytesseract.
    """

    def __init__(self, oem: int = 3, psm: int = 3, extra_config: str = "") -> None:
        if not _pytesseract_allowed():
            raise RuntimeError(
                "pytesseract is disabled by SCANMETA_ALLOW_PYTESSERACT; set it to 1/true to enable"
            )
        self.config = f"--oem {oem} --psm {psm} {extra_config}".strip()

    def _load_image(self, page: PageInput) -> Image.Image:
        if isinstance(page.image, Image.Image):
            return page.image
        if page.image is not None:
            raise ImageDecodeError(f"page {page.page_index}: unsupported image object {type(page.image).__name__}")
        if not page.image_path:
            raise ImageDecodeError(f"page {page.page_index}: no image provided")
        try:
            with Image.open(page.image_path) as img:
                img.load()
                return img.copy()
        except (FileNotFoundError, UnidentifiedImageError, OSError) as exc:
            raise ImageDecodeError(f"page {page.page_index}: cannot decode {page.image_path}: {exc}") from exc

    def recognize(self, page: PageInput, languages: Sequence[str]) -> List[TextObservation]:
        image = self._load_image(page)
        width, height = image.size
        if width <= 0 or height <= 0:
            raise ImageDecodeError(f"page {page.page_index}: image has no pixels")

        data = pytesseract.image_to_data(
            image,
            lang=tesseract_languages(languages),
            config=self.config,
            output_type=Output.DICT,
        )

        lines: Dict[Tuple[int, int, int], Dict[str, list]] = {}
        for text, conf, block, par, line, left, top, w, h in zip(
            data.get("text", []),
            data.get("conf", []),
            data.get("block_num", []),
            data.get("par_num", []),
            data.get("line_num", []),
            data.get("left", []),
            data.get("top", []),
            data.get("width", []),
            data.get("height", []),
        ):
            if not text or not str(text).strip() or conf is None or float(conf) < 0:
                continue
            entry = lines.setdefault((int(block), int(par), int(line)), {"words": [], "confs": [], "boxes": []})
            entry["words"].append(str(text).strip())
            entry["confs"].append(float(conf) / 100.0)
            entry["boxes"].append((int(left), int(top), int(left) + int(w), int(top) + int(h)))

        observations: List[TextObservation] = []
        for entry in lines.values():
            x0 = min(b[0] for b in entry["boxes"])
            y0 = min(b[1] for b in entry["boxes"])
            x1 = max(b[2] for b in entry["boxes"])
            y1 = max(b[3] for b in entry["boxes"])
            box = BoundingBox(
                x=_clamp(x0 / width),
                y=_clamp((height - y1) / height),
                width=_clamp((x1 - x0) / width),
                height=_clamp((y1 - y0) / height),
            )
            candidate = TextCandidate(text=" ".join(entry["words"]), confidence=_clamp(mean(entry["confs"])))
            observations.append(TextObservation(candidates=[candidate], bounding_box=box))
        return observations


__all__ = ["TesseractTextRecognizer", "tesseract_languages"]
