# src/taskboard/cli/main.py

"""
CLI entrypoint.

Initializes logging, then runs one of:
- `taskboard serve`: the todo HTTP API (uvicorn),
- `taskboard board`: the local console board.
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from ..board.console_connector import run_console_loop
from ..cli.bootstrap import create_api, create_board
from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Todo API and console board.")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the todo HTTP API.")
    serve.add_argument("--host", default=None, help="Bind host (default: TODO_HOST).")
    serve.add_argument("--port", type=int, default=None, help="Bind port (default: TODO_PORT).")

    sub.add_parser("board", help="Run the local console board (not connected to the API).")
    return parser


def serve(settings, *, host: str | None = None, port: int | None = None) -> None:
    app = create_api(settings=settings)
    bind_host = host or settings.host
    bind_port = port or settings.port
    logger.info(
        "Starting %s API on %s:%s (env=%s, storage=%s)",
        settings.app_name,
        bind_host,
        bind_port,
        settings.environment,
        settings.storage,
    )
    # log_config=None: uvicorn logs flow through our handlers.
    uvicorn.run(app, host=bind_host, port=bind_port, log_config=None)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    settings = get_settings()

    console_level = level_from_name(settings.log_level)
    if args.command == "board":
        # The board owns the terminal; keep the console to warnings.
        console_level = max(console_level, logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    if args.command == "board":
        run_console_loop(create_board(settings=settings), app_name=settings.app_name)
    else:
        serve(settings, host=getattr(args, "host", None), port=getattr(args, "port", None))

    logger.info("Bye.")


if __name__ == "__main__":
    main()
