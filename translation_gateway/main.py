from __future__ import annotations

import argparse
import logging
from collections.abc import Sequence

import uvicorn

from translation_gateway.core.app import create_app
from translation_gateway.core.config import get_settings

logger = logging.getLogger(__name__)

app = create_app()


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="translation-gateway",
        description="Serve the translation dispatch API.",
    )
    parser.add_argument("--host", default=settings.api_host, help="Interface to bind.")
    parser.add_argument("--port", type=int, default=settings.api_port, help="Port to listen on.")
    parser.add_argument(
        "--reload",
        action=argparse.BooleanOptionalAction,
        default=settings.debug,
        help="Restart the server when source files change (defaults to APP_DEBUG).",
    )
    return parser


def run(argv: Sequence[str] | None = None) -> None:
    """Entrypoint for the `translation-gateway` script."""
    args = build_parser().parse_args(argv)
    settings = get_settings()
    logger.info(
        "Starting %s on %s:%d using the %s backend",
        settings.app_name,
        args.host,
        args.port,
        settings.translation_service,
    )
    uvicorn.run(
        "translation_gateway.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
