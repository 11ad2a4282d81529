"""structlog configuration for greetctl.

Log lines always go to stderr so they never interleave with the
prompts and greeting written to stdout.

Two output modes:
- Human (default): colored console renderer when stderr is a TTY
- JSON (--log-json): one JSON object per line
"""

from __future__ import annotations

import logging
import sys

import structlog

APP_LOGGER = "greetctl"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    no_color: bool = False,
) -> None:
    """Configure structlog processors and route stdlib records through them.

    Args:
        verbose: Enable DEBUG for greetctl loggers (shows published events).
        log_json: Use the JSON renderer instead of the console renderer.
        no_color: Force plain console output even on a TTY.
    """
    app_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        colors = sys.stderr.isatty() and not no_color
        renderer = structlog.dev.ConsoleRenderer(colors=colors)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(APP_LOGGER).setLevel(app_level)
    # asyncio reports slow callbacks and unclosed transports at DEBUG.
    logging.getLogger("asyncio").setLevel(logging.WARNING)
