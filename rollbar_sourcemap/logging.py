"""Structured logging via structlog.

Configures structlog once when the command-line tool starts. Library
modules keep using `logging.getLogger(__name__)`; the stdlib bridge at
the bottom of `configure_structlog()` routes them to the same stream.

Renderer selection:
  debug=True:  `ConsoleRenderer` with colours for local builds.
  debug=False: `JSONRenderer` for CI logs.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = False) -> None:
    """Route structlog and stdlib records to stdout at the CLI log level."""
    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if debug:
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.DEBUG if debug else logging.INFO),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    # Bridge stdlib logging so plugin modules and httpx share the stream.
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if debug else logging.INFO,
    )
    if not debug:
        logging.getLogger("httpx").setLevel(logging.WARNING)
