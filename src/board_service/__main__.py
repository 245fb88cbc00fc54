"""Entrypoint: python -m board_service"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

import uvicorn

from board_service.app import create_app
from board_service.application.exceptions import StartupError
from board_service.config import LOG_LEVELS, Settings, settings as default_settings
from board_service.infrastructure.factory import open_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="board_service",
        description="Serve a single message board over HTTP.",
    )
    parser.add_argument("--host", help="Address to listen on")
    parser.add_argument("--port", "-p", type=int, help="Port to listen on")
    parser.add_argument("--title", "-t", help="Title of the board")
    parser.add_argument(
        "--store",
        choices=["memory", "database"],
        help="Where messages are kept",
    )
    parser.add_argument(
        "--database",
        "-d",
        help="Database URL; falls back to the DB_CONN_STRING environment variable",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Root logging level",
    )
    return parser


def resolve_settings(
    argv: Sequence[str] | None = None,
    base: Settings | None = None,
) -> Settings:
    """Overlay command-line flags on the environment-derived settings."""
    args = build_parser().parse_args(argv)
    base = base or default_settings
    overrides = {
        "HOST": args.host,
        "PORT": args.port,
        "BOARD_TITLE": args.title,
        "BOARD_STORE": args.store,
        "DB_CONN_STRING": args.database,
        "LOG_LEVEL": args.log_level,
    }
    resolved = base.model_copy(
        update={k: v for k, v in overrides.items() if v is not None},
    )
    if args.database and args.store is None:
        resolved = resolved.model_copy(update={"BOARD_STORE": "database"})
    return resolved


async def check_startup(settings: Settings) -> None:
    """Fail fast on configuration or database problems before binding."""
    async with open_store(settings):
        pass


def main(argv: Sequence[str] | None = None) -> int:
    settings = resolve_settings(argv)
    logging.basicConfig(level=settings.LOG_LEVEL, format=LOG_FORMAT)

    try:
        asyncio.run(check_startup(settings))
    except StartupError as exc:
        logger.error("Cannot start: %s", exc.detail)
        return 1

    uvicorn.run(
        create_app(settings),
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
