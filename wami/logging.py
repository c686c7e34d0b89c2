"""Log output setup for the wami CLI via structlog.

Library modules log through `logging.getLogger(__name__)` and never
configure handlers. The CLI calls `configure_structlog()` once before
detecting anything.

Renderer selection:
  debug=True:  `ConsoleRenderer` with colours, stdlib level DEBUG.
  debug=False: `JSONRenderer`, stdlib level WARNING.

Everything goes to stderr; stdout is reserved for command output so
`wami --json` stays pipeable.
"""

from __future__ import annotations

import logging
import sys

import structlog


def configure_structlog(debug: bool = False) -> None:
    """Configure structlog and stdlib logging for a CLI run.

    Calling multiple times is safe; the last call wins.
    """
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

    level = logging.DEBUG if debug else logging.WARNING

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    logging.basicConfig(
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=level,
        force=True,
    )
