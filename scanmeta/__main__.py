#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# SPDX-License-Identifier: AGPL-3.0-or-later
# Copyright (C) 2024 scanmeta contributors

"""Unified CLI entry point for scanmeta."""
from __future__ import annotations

import sys
from textwrap import dedent
from typing import Callable, Dict, List, Optional


def _analyze(argv: List[str]) -> int:
    from scanmeta.recognition.cli import main as analyze_main

    return analyze_main(argv)


def _serve(argv: List[str]) -> int:
    import argparse

    try:
        import uvicorn  # type: ignore
    except ImportError as exc:  # pragma: no cover
        raise SystemExit("uvicorn is not installed. Install with `pip install -e '.[api]'`.") from exc

    from scanmeta.api_app import create_app

    parser = argparse.ArgumentParser(prog="scanmeta serve", description="Serve the analyze API")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--max-workers", type=int, default=None)
    args = parser.parse_args(argv)
    uvicorn.run(create_app(max_workers=args.max_workers), host=args.host, port=args.port)
    return 0


_COMMANDS: Dict[str, Callable[[List[str]], int]] = {
    "analyze": _analyze,
    "serve": _serve,
}


def _print_help() -> None:
    msg = dedent(
        """
        Usage:
          python -m scanmeta <command> [args...]

        Commands:
          analyze     Infer document metadata from page images or observations
          serve       Run the HTTP analyze API (requires the 'api' extra)
          help        Show this message

        Examples:
          python -m scanmeta analyze --images scan-0.png scan-1.png --write-metadata
          python -m scanmeta analyze --observations pages.json --language en-US --out result.json
        """
    ).strip()
    print(msg)


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv or argv[0] in {"-h", "--help", "help"}:
        _print_help()
        return 0
    cmd, rest = argv[0], list(argv[1:])
    runner = _COMMANDS.get(cmd)
    if runner is None:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        _print_help()
        return 2
    return runner(rest)


if __name__ == "__main__":
    sys.exit(main())
