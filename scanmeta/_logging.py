# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Logger setup shared by the CLI and the HTTP surface.

Records are emitted one per line. With ``SCANMETA_LOG_FORMAT=json`` (the
default) each line is a JSON object carrying ``ts`` and ``event`` plus the
event payload; ``text`` keeps a compact human-readable form.
"""
from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict

_ROOT_LOGGER = "scanmeta"


def _log_format() -> str:
    return (os.environ.get("SCANMETA_LOG_FORMAT") or "json").strip().lower()


def _log_level() -> str:
    return (os.environ.get("SCANMETA_LOG_LEVEL") or "INFO").strip().upper()


class _StderrHandler(logging.StreamHandler):
    """Write to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(sys.stderr)

    @property
    def stream(self):
        return sys.stderr

    @stream.setter
    def stream(self, value) -> None:
        pass


def configure_logging() -> logging.Logger:
    logger = logging.getLogger(_ROOT_LOGGER)
    if not logger.handlers:
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)
    logger.setLevel(getattr(logging, _log_level(), logging.INFO))
    logger.propagate = False
    return logger


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).replace(microsecond=0).isoformat()


def log_event(logger: logging.Logger, event: str, payload: Dict[str, Any], *, level: str = "info") -> None:
    record = {"ts": _utc_now_iso(), "event": event, **payload}
    if _log_format() == "json":
        msg = json.dumps(record, ensure_ascii=False, default=str)
    else:
        msg = f"{record.get('ts')} {event} {payload}"
    fn = getattr(logger, level, logger.info)
    fn(msg)


__all__ = ["configure_logging", "log_event"]
