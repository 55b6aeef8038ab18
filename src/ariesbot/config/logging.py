"""structlog configuration for ariesbot.

Every log line goes to stderr, either as colored console text or, with
``--log-json``, as one JSON object per line. Records emitted while the
router dispatches a command carry the invocation fields bound through
``structlog.contextvars``: ``command``, ``caller_id``, and ``scope_id``.
Stdlib loggers (the whole ``ariesbot`` package logs through
``logging.getLogger``) are rendered by the same processor chain.
"""

from __future__ import annotations

import logging
import sys

import structlog

# Third-party loggers that stay at WARNING even with --verbose.
_QUIET_LOGGERS = ("alembic", "sqlalchemy")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route structlog and stdlib logging through one stderr handler.

    Args:
        verbose: Log the ``ariesbot`` namespace at DEBUG (per-dispatch
            lines included). Otherwise only WARNING and above.
        log_json: Render JSON lines instead of console text.
    """
    shared = _shared_processors()
    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("ariesbot").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
