# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Scanner options consumed by the inference layer.

``ScanOptions.from_arguments`` accepts the argument map the mobile plugin
sends over its method channel (``{"iosScannerOptions": {...}}`` with
camelCase keys). Missing or mistyped entries fall back to defaults one key at
a time; an absent or malformed options map yields the defaults wholesale.
Image encoding options in that map are ignored here.
"""
from __future__ import annotations

import os
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

_ARGUMENTS_KEY = "iosScannerOptions"


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_truthy(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no", "off", ""}


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.environ.get(name)
    if raw is None:
        return list(default)
    items = [part.strip() for part in raw.split(",") if part.strip()]
    return items or list(default)


def default_languages() -> List[str]:
    return _env_list("SCANMETA_LANGUAGES", ["en-US"])


def default_max_workers() -> int:
    return max(1, _env_int("SCANMETA_MAX_WORKERS", 4))


class ScanOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    use_recognize_documents_request: bool = False
    recognition_languages: List[str] = Field(default_factory=default_languages)
    enable_table_detection: bool = True
    enable_list_detection: bool = True
    enable_data_detection: bool = True

    @property
    def primary_language(self) -> Optional[str]:
        return self.recognition_languages[0] if self.recognition_languages else None

    @classmethod
    def from_arguments(cls, args: Any) -> "ScanOptions":
        if not isinstance(args, Mapping):
            return cls()
        raw = args.get(_ARGUMENTS_KEY)
        if not isinstance(raw, Mapping):
            return cls()

        defaults = cls()

        def _bool(key: str, default: bool) -> bool:
            value = raw.get(key)
            return value if isinstance(value, bool) else default

        languages = raw.get("recognitionLanguages")
        if not (isinstance(languages, list) and all(isinstance(code, str) for code in languages)):
            languages = defaults.recognition_languages

        return cls(
            use_recognize_documents_request=_bool(
                "useRecognizeDocumentsRequest", defaults.use_recognize_documents_request
            ),
            recognition_languages=list(languages),
            enable_table_detection=_bool("enableTableDetection", defaults.enable_table_detection),
            enable_list_detection=_bool("enableListDetection", defaults.enable_list_detection),
            enable_data_detection=_bool("enableDataDetection", defaults.enable_data_detection),
        )

    def to_map(self) -> dict:
        return {
            "useRecognizeDocumentsRequest": self.use_recognize_documents_request,
            "recognitionLanguages": list(self.recognition_languages),
            "enableTableDetection": self.enable_table_detection,
            "enableListDetection": self.enable_list_detection,
            "enableDataDetection": self.enable_data_detection,
        }


__all__ = ["ScanOptions", "default_languages", "default_max_workers"]
