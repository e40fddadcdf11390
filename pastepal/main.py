"""
PastePal - server entry point.

Run with `pastepal` (console script) or `python -m pastepal.main`.
"""

from __future__ import annotations

import logging
import socket

import uvicorn
from dotenv import load_dotenv

from pastepal.config import configure_logging, get_settings

logger = logging.getLogger(__name__)

PORT_SEARCH_RANGE = 100


def find_available_port(host: str, start_port: int) -> int:
    """
    First port in [start_port, start_port + 100) that can be bound.

    Falls back to start_port when none is free.
    """
    for port in range(start_port, start_port + PORT_SEARCH_RANGE):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            try:
                sock.bind((host, port))
            except OSError:
                continue
            return port
    return start_port


def main():
    """Main entry point."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings)

    port = settings.api_port
    if settings.auto_port:
        port = find_available_port(settings.api_host, port)
        if port != settings.api_port:
            logger.warning(f"Port {settings.api_port} in use, using {port}")

    logger.info(f"Server starting on {settings.api_host}:{port}")
    uvicorn.run(
        "pastepal.api.app:app",
        host=settings.api_host,
        port=port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
