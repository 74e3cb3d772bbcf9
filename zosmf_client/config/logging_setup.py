"""structlog configuration for client runtime surfaces."""

from __future__ import annotations

import logging
import sys

import structlog


def config_configure_logging(log_level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog processors, level filtering and rendering.

    Args:
        log_level: Minimum level name (`DEBUG`, `INFO`, `WARNING`, `ERROR`).
        json_output: Render events as JSON lines instead of console text.

    Returns:
        None: Configures structlog globally as side effect.

    Raises:
        ValueError: Raised when log level name is unknown.
    """

    normalized_level = log_level.strip().upper()
    level_value = logging.getLevelName(normalized_level)
    if not isinstance(level_value, int):
        raise ValueError(f"unknown log_level={log_level}")

    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level_value),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
