"""structlog configuration for timectl.

Everything goes to stderr so stdout carries only results.
- Human (default): console renderer with a short clock and package-relative
  logger names (``domain.resolver``), colored on a TTY
- JSON (--log-json): one object per line, UTC ISO timestamps, full logger
  names, tracebacks as structured data
"""

from __future__ import annotations

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

_PACKAGE_PREFIX = "timectl."


def _relative_logger_name(
    _: Any, __: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Strip the package prefix from ``logger`` for console output."""
    name = event_dict.get("logger")
    if isinstance(name, str) and name.startswith(_PACKAGE_PREFIX):
        event_dict["logger"] = name[len(_PACKAGE_PREFIX) :]
    return event_dict


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route stdlib logging through them.

    Args:
        verbose: Enable DEBUG output from ``timectl.*`` loggers. When
            False, only WARNING and above.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    render_processors: list[structlog.types.Processor]
    if log_json:
        shared_processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
        render_processors = [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        shared_processors.append(structlog.processors.TimeStamper(fmt="%H:%M:%S", utc=False))
        render_processors = [
            _relative_logger_name,
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

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
            *render_processors,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("timectl").setLevel(level)
    # The MCP SDK logs every request at INFO.
    logging.getLogger("mcp").setLevel(logging.WARNING)
