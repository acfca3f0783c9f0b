"""Diagnostic logging for bitctl, built on structlog.

Converted values are meant to be piped (``bitctl -q encode 1 | xclip``),
so nothing diagnostic may reach stdout. Every record, whether it comes
from structlog or from a plain ``logging.getLogger`` call, is rendered by
a single stderr handler. ``--log-json`` swaps the human console layout for
one JSON object per record.
"""

from __future__ import annotations

import logging
import sys

import structlog

_PACKAGE_LOGGER = "bitctl"


def _pre_chain() -> list[structlog.types.Processor]:
    # Applied to structlog events and foreign stdlib records alike.
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


def _stderr_handler(pre_chain: list[structlog.types.Processor], log_json: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )
    return handler


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Install the stderr handler and set bitctl's log level.

    Safe to call more than once; the root logger ends up with exactly one
    handler. Third-party loggers stay at WARNING whatever *verbose* says.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(pre_chain, log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
