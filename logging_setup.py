"""Structured logging setup shared by the CLI and the MCP server."""

import logging
import sys

import structlog


def configure_logging(debug: bool = False, colors: bool = True) -> None:
    """Route structlog through stdlib logging to stderr.

    stdout is reserved for results (CLI) and protocol messages (MCP server).
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        stream=sys.stderr,
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=colors)
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
