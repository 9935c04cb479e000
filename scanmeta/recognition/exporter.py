# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Canonical JSON form of :class:`DocumentMetadata`.

Key names and nesting are the external contract shared with the scanner
plugin, so the mapping is written out by hand instead of relying on model
aliases. Empty sequences are always emitted as ``[]``.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from jsonschema import Draft202012Validator

from scanmeta.api_spec import DOCUMENT_METADATA_SCHEMA_V1, SCAN_RESPONSE_SCHEMA_V1

from .models import (
    CellData,
    DetectedDataItem,
    DetectedDataType,
    DocumentMetadata,
    ListData,
    ListItemData,
    ScanResult,
    TableData,
)

__all__ = [
    "UNKNOWN_LANGUAGE",
    "dumps_metadata",
    "metadata_from_json",
    "metadata_path_for",
    "metadata_to_json",
    "scan_result_to_json",
    "validate_metadata_payload",
    "validate_scan_payload",
    "write_metadata_json",
]

UNKNOWN_LANGUAGE = "unknown"


def _detected_to_json(item: DetectedDataItem) -> Dict[str, Any]:
    return {"text": item.text, "type": item.type.value}


def _cell_to_json(cell: CellData) -> Dict[str, Any]:
    return {
        "text": cell.text,
        "row": cell.row_index,
        "column": cell.column_index,
        "detectedData": [_detected_to_json(item) for item in cell.detected_data],
    }


def _table_to_json(table: TableData) -> Dict[str, Any]:
    return {
        "rowCount": table.row_count,
        "columnCount": table.column_count,
        "cells": [[_cell_to_json(cell) for cell in row] for row in table.cells],
    }


def _list_to_json(data: ListData) -> Dict[str, Any]:
    return {"items": [{"text": item.text, "level": item.level} for item in data.items]}


def metadata_to_json(metadata: DocumentMetadata) -> Dict[str, Any]:
    return {
        "transcript": metadata.transcript,
        "language": metadata.language if metadata.language is not None else UNKNOWN_LANGUAGE,
        "tables": [_table_to_json(table) for table in metadata.tables],
        "lists": [_list_to_json(data) for data in metadata.lists],
        "detectedData": [_detected_to_json(item) for item in metadata.detected_data],
    }


def _detected_from_json(payload: Dict[str, Any]) -> DetectedDataItem:
    return DetectedDataItem(text=payload["text"], type=DetectedDataType(payload["type"]))


def metadata_from_json(payload: Dict[str, Any]) -> DocumentMetadata:
    """Rebuild :class:`DocumentMetadata` from :func:`metadata_to_json` output.

    ``"unknown"`` is read back as ``language=None``, the value it was written from.
    """

    tables: List[TableData] = []
    for table in payload.get("tables") or []:
        cells = [
            [
                CellData(
                    text=cell["text"],
                    row_index=cell["row"],
                    column_index=cell["column"],
                    detected_data=[_detected_from_json(d) for d in cell.get("detectedData") or []],
                )
                for cell in row
            ]
            for row in table.get("cells") or []
        ]
        tables.append(TableData(row_count=table["rowCount"], column_count=table["columnCount"], cells=cells))

    lists = [
        ListData(items=[ListItemData(text=item["text"], level=item["level"]) for item in data.get("items") or []])
        for data in payload.get("lists") or []
    ]

    language = payload.get("language")
    return DocumentMetadata(
        transcript=payload["transcript"],
        tables=tables,
        lists=lists,
        detected_data=[_detected_from_json(d) for d in payload.get("detectedData") or []],
        language=None if language == UNKNOWN_LANGUAGE else language,
    )


def dumps_metadata(metadata: DocumentMetadata) -> str:
    return json.dumps(metadata_to_json(metadata), ensure_ascii=False, indent=2) + "\n"


def metadata_path_for(image_path: Union[str, Path], out_dir: Union[str, Path, None] = None) -> Path:
    """``scan-0.png`` -> ``scan-0-metadata.json``, next to the image unless ``out_dir`` is given."""

    image = Path(image_path)
    parent = Path(out_dir) if out_dir is not None else image.parent
    return parent / f"{image.stem}-metadata.json"


def write_metadata_json(metadata: DocumentMetadata, path: Union[str, Path]) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = target.with_name(target.name + ".tmp")
    tmp.write_text(dumps_metadata(metadata), encoding="utf-8")
    tmp.replace(target)
    return target


def scan_result_to_json(result: ScanResult) -> Dict[str, Any]:
    return {
        "images": list(result.images),
        "metadata": list(result.metadata),
        "errors": [{"page": e.page_index, "code": e.code, "reason": e.reason} for e in result.errors],
    }


def validate_metadata_payload(payload: Dict[str, Any]) -> None:
    """Validate an exported metadata document against the v1 schema."""

    Draft202012Validator(DOCUMENT_METADATA_SCHEMA_V1).validate(payload)


def validate_scan_payload(payload: Dict[str, Any]) -> None:
    Draft202012Validator(SCAN_RESPONSE_SCHEMA_V1).validate(payload)
