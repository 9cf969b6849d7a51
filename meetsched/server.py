"""Command that runs the scheduler API with in-memory storage."""

from __future__ import annotations

import argparse
import logging

from flask import Flask

from .handler import create_app
from .repository import (
    InMemoryAvailabilityRepository,
    InMemoryEventRepository,
    InMemoryUserRepository,
)
from .service import SchedulerService

_DEFAULT_HOST = "0.0.0.0"
_DEFAULT_PORT = 8080

logger = logging.getLogger(__name__)


def build_app() -> Flask:
    """Wire fresh in-memory stores into a service and return the application."""
    service = SchedulerService(
        InMemoryUserRepository(),
        InMemoryEventRepository(),
        InMemoryAvailabilityRepository(),
    )
    return create_app(service)


def main(argv: list[str] | None = None) -> None:
    """Start the HTTP server."""
    parser = argparse.ArgumentParser(
        prog="meetsched", description="Run the meeting scheduler HTTP API."
    )
    parser.add_argument("--host", default=_DEFAULT_HOST, help="address to bind")
    parser.add_argument(
        "--port", type=int, default=_DEFAULT_PORT, help="port to listen on"
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    app = build_app()
    logger.info("Server running on %s:%d", args.host, args.port)
    app.run(host=args.host, port=args.port)


if __name__ == "__main__":
    main()