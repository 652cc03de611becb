"""Entry point for running PerfectXO via ``python -m perfectxo``."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

import uvicorn


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perfectxo", description="Tic-tac-toe against a perfect opponent"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="cmd")
    sub.add_parser("serve", help="Start the web server (default)")
    console = sub.add_parser("console", help="Play in the terminal")
    console.add_argument(
        "--no-color", action="store_true", help="Disable coloured marks"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Start the FastAPI-powered PerfectXO web server or the console game."""

    args = build_parser().parse_args(argv)
    level = "DEBUG" if args.verbose else os.environ.get("PERFECTXO_LOG_LEVEL", "INFO")
    logging.basicConfig(
        level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    if args.cmd == "console":
        from .console import run

        run(color=not args.no_color)
        return 0

    host = os.environ.get("PERFECTXO_HOST", "0.0.0.0")
    port = int(os.environ.get("PERFECTXO_PORT", "8000"))
    uvicorn.run("perfectxo.ui:app", host=host, port=port, reload=False)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
