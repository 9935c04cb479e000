# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""FastAPI application exposing metadata inference over HTTP.

Clients post the observations their own OCR engine produced, so the server
never touches page images. Requests are validated against
:data:`scanmeta.api_spec.ANALYZE_REQUEST_SCHEMA_V1` before any page runs.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, HTTPException
from jsonschema import Draft202012Validator, ValidationError
from pydantic import ValidationError as ModelValidationError

from scanmeta._logging import configure_logging, log_event
from scanmeta._version import __version__
from scanmeta.api_spec import ANALYZE_REQUEST_SCHEMA_V1
from scanmeta.recognition.exporter import scan_result_to_json
from scanmeta.recognition.input_handler import BasicInputHandler
from scanmeta.recognition.options import ScanOptions, default_max_workers
from scanmeta.recognition.pipeline import PagePipeline, ScanPipeline, build_page_pipeline

__all__ = ["create_app"]

logger = logging.getLogger("scanmeta.api")


def create_app(
    *,
    page_pipeline: Optional[PagePipeline] = None,
    max_workers: Optional[int] = None,
) -> FastAPI:
    """Return a FastAPI instance exposing ``/healthz`` and ``/v1/analyze``.

    ``page_pipeline`` lets callers swap components (for example a different
    data classifier) while keeping the HTTP contract stable.
    """

    configure_logging()
    scan = ScanPipeline(
        page_pipeline=page_pipeline or build_page_pipeline(),
        max_workers=max_workers or default_max_workers(),
    )
    validator = Draft202012Validator(ANALYZE_REQUEST_SCHEMA_V1)
    handler = BasicInputHandler()

    app = FastAPI(title="scanmeta API", version=__version__)

    @app.get("/healthz")
    def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/v1/analyze")
    def analyze(payload: Dict[str, Any]):
        try:
            validator.validate(payload)
            pages = handler.from_observations(payload)
        except (ValidationError, ModelValidationError, ValueError) as exc:
            log_event(logger, "analyze_rejected", {"reason": str(exc).splitlines()[0]}, level="warning")
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        options = ScanOptions.from_arguments(payload).model_copy(update={"use_recognize_documents_request": True})
        result = scan.process(pages, options)
        return scan_result_to_json(result)

    return app
