"""
Centralized logging configuration for the PalSetup pipeline.

This module provides standardized logging configuration using structlog
for all components. All logging throughout the system should use this
configuration to ensure consistent formatting and structured logging.
"""
import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import FilteringBoundLogger


def configure_logging(
    level: str = "INFO",
    format_json: bool = False,
    include_timestamp: bool = True,
    include_caller: bool = False,
    extra_processors: Optional[list] = None
) -> None:
    """
    Configure structlog for the entire application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_json: If True, output JSON format; otherwise human-readable
        include_timestamp: Include timestamp in log output
        include_caller: Include caller information (filename, line number)
        extra_processors: Additional structlog processors to include
    """
    log_level = getattr(logging, level.upper())

    logging.basicConfig(
        level=log_level,
        stream=sys.stderr,
        format="%(message)s",  # structlog will handle formatting
        force=True
    )

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        processors.append(structlog.processors.TimeStamper(fmt="iso"))

    if include_caller:
        processors.append(structlog.processors.CallsiteParameterAdder(
            parameters=[structlog.processors.CallsiteParameter.FILENAME,
                       structlog.processors.CallsiteParameter.LINENO]
        ))

    if extra_processors:
        processors.extend(extra_processors)

    if format_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """
    Get a configured structlog logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured structlog logger instance
    """
    return structlog.get_logger(name)


def get_pipeline_logger(name: str, **context: Any) -> FilteringBoundLogger:
    """
    Get a logger bound to the pipeline subsystem.

    Args:
        name: Logger name (typically __name__)
        **context: Extra key/value pairs bound to every event (symbol, source file)

    Returns:
        Configured structlog logger for pipeline runs
    """
    return get_logger(name).bind(subsystem="pipeline", **context)


def log_statistic(
    logger: FilteringBoundLogger,
    statistic: str,
    value: Any,
    sample_size: int,
    context: Optional[dict[str, Any]] = None
) -> None:
    """
    Log a computed statistic with standardized format.

    Args:
        logger: Structlog logger instance
        statistic: Name of the statistic (median, qn, mad, std_dev)
        value: Computed value
        sample_size: Number of values it was computed from
        context: Additional context data
    """
    bound_logger = logger.bind(
        statistic=statistic,
        value=str(value),
        sample_size=sample_size
    )

    if context:
        bound_logger = bound_logger.bind(context=context)

    bound_logger.info("Statistic computed")
