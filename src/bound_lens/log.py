"""
LOGGING: structlog setup for applications built on bound_lens

The library logs through ``logging.getLogger(__name__)`` and only at
derivation time; it never installs handlers itself. Applications call
``configure_logging`` once, and may report law-check results with
``log_violations``.
"""

from __future__ import annotations

import logging
import sys
from typing import Iterable, Optional, TextIO

import structlog

from .laws import LawViolation

PACKAGE_LOGGER = "bound_lens"


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: Optional[TextIO] = None,
) -> None:
    """Route bound_lens records through structlog renderers.

    Args:
        verbose: Show derivation DEBUG records. When False, only WARNING+.
        log_json: JSON lines instead of console rendering.
        stream: Output stream, stderr by default.
    """
    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    stream = stream if stream is not None else sys.stderr

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.handlers[:] = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger; names under ``bound_lens.`` share its handler."""
    return structlog.get_logger(name)


def log_violations(
    log: structlog.stdlib.BoundLogger,
    violations: Iterable[LawViolation],
) -> int:
    """Emit one WARNING per law violation with its fields bound. Returns the count."""
    count = 0
    for violation in violations:
        log.warning(
            "lens law violated",
            law=violation.law.value,
            lens=violation.lens,
            expected=repr(violation.expected),
            actual=repr(violation.actual),
        )
        count += 1
    return count
