# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Wire contract for document metadata and the analyze surface.

The schemas follow Draft 2020-12 and keep ``additionalProperties`` disabled so
the exported metadata document cannot silently grow or lose keys. Field names
mirror the JSON consumed by the mobile scanner plugin and must not change.
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Dict

__all__ = [
    "ANALYZE_REQUEST_SCHEMA_V1",
    "DETECTED_DATA_TYPES",
    "DOCUMENT_METADATA_SCHEMA_V1",
    "SCAN_RESPONSE_SCHEMA_V1",
    "get_api_schemas_v1",
]

DETECTED_DATA_TYPES = ["emailAddress", "phoneNumber", "url", "date", "address", "unknown"]

_DETECTED_DATA_ITEM: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": False,
    "required": ["text", "type"],
    "properties": {
        "text": {"type": "string"},
        "type": {"type": "string", "enum": DETECTED_DATA_TYPES},
    },
}

_DOCUMENT_METADATA: Dict[str, Any] = {
    "title": "DocumentMetadata",
    "type": "object",
    "additionalProperties": False,
    "required": ["transcript", "language", "tables", "lists", "detectedData"],
    "properties": {
        "transcript": {"type": "string"},
        "language": {"type": "string", "description": "Primary recognition language or 'unknown'"},
        "tables": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["rowCount", "columnCount", "cells"],
                "properties": {
                    "rowCount": {"type": "integer", "minimum": 0},
                    "columnCount": {"type": "integer", "minimum": 0},
                    "cells": {
                        "type": "array",
                        "description": "Row-major grid; rows may be ragged",
                        "items": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "additionalProperties": False,
                                "required": ["text", "row", "column", "detectedData"],
                                "properties": {
                                    "text": {"type": "string"},
                                    "row": {"type": "integer", "minimum": 0},
                                    "column": {"type": "integer", "minimum": 0},
                                    "detectedData": {"type": "array", "items": _DETECTED_DATA_ITEM},
                                },
                            },
                        },
                    },
                },
            },
        },
        "lists": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["items"],
                "properties": {
                    "items": {
                        "type": "array",
                        "items": {
                            "type": "object",
                            "additionalProperties": False,
                            "required": ["text", "level"],
                            "properties": {
                                "text": {"type": "string"},
                                "level": {"type": "integer", "minimum": 0},
                            },
                        },
                    }
                },
            },
        },
        "detectedData": {"type": "array", "items": _DETECTED_DATA_ITEM},
    },
}

DOCUMENT_METADATA_SCHEMA_V1: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    **_DOCUMENT_METADATA,
}

_BOUNDING_BOX: Dict[str, Any] = {
    "type": "object",
    "required": ["x", "y", "width", "height"],
    "properties": {
        "x": {"type": "number", "minimum": 0, "maximum": 1},
        "y": {"type": "number", "minimum": 0, "maximum": 1},
        "width": {"type": "number", "minimum": 0, "maximum": 1},
        "height": {"type": "number", "minimum": 0, "maximum": 1},
    },
}

_OBSERVATION: Dict[str, Any] = {
    "type": "object",
    "required": ["candidates", "boundingBox"],
    "properties": {
        "candidates": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["string"],
                "properties": {
                    "string": {"type": "string"},
                    "confidence": {"type": "number", "minimum": 0, "maximum": 1},
                },
            },
        },
        "boundingBox": _BOUNDING_BOX,
    },
}

ANALYZE_REQUEST_SCHEMA_V1: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "AnalyzeRequest",
    "type": "object",
    "additionalProperties": False,
    "required": ["pages"],
    "properties": {
        "pages": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["observations"],
                "properties": {
                    "image": {"type": "string", "description": "Client-side reference to the page image"},
                    "observations": {"type": "array", "items": _OBSERVATION},
                },
            },
        },
        "iosScannerOptions": {
            "type": "object",
            "properties": {
                "recognitionLanguages": {"type": "array", "items": {"type": "string"}},
                "enableTableDetection": {"type": "boolean"},
                "enableListDetection": {"type": "boolean"},
                "enableDataDetection": {"type": "boolean"},
            },
        },
    },
}

SCAN_RESPONSE_SCHEMA_V1: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "ScanResponse",
    "type": "object",
    "additionalProperties": False,
    "required": ["images", "metadata", "errors"],
    "properties": {
        "images": {"type": "array", "items": {"type": ["string", "null"]}},
        "metadata": {"type": "array", "items": _DOCUMENT_METADATA},
        "errors": {
            "type": "array",
            "items": {
                "type": "object",
                "additionalProperties": False,
                "required": ["page", "code", "reason"],
                "properties": {
                    "page": {"type": "integer", "minimum": 0},
                    "code": {"type": "string"},
                    "reason": {"type": "string"},
                },
            },
        },
    },
}


def get_api_schemas_v1() -> Dict[str, Dict[str, Any]]:
    """Return deep copies so callers can annotate schemas without side effects."""

    return {
        "document_metadata": deepcopy(DOCUMENT_METADATA_SCHEMA_V1),
        "analyze_request": deepcopy(ANALYZE_REQUEST_SCHEMA_V1),
        "scan_response": deepcopy(SCAN_RESPONSE_SCHEMA_V1),
    }
