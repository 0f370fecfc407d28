# logging.py

import logging

import structlog
from structlog.contextvars import merge_contextvars

from mcp_dice_notation.config import Settings


def setup_logging(settings: Settings | None = None) -> None:
    """Initialize structlog + stdlib logging.

    Everything goes to a single stderr handler: stdout belongs to the MCP
    stdio transport. Defaults: INFO level, JSON lines.
    """
    level_name = (settings.logging_level if settings else "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    renderer_name = settings.logging_renderer if settings else "json"

    renderer = (
        structlog.dev.ConsoleRenderer()
        if renderer_name == "console"
        else structlog.processors.JSONRenderer()
    )

    # ProcessorFormatter renders BOTH structlog and stdlib/third-party logs
    processor_formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.add_log_level,
            merge_contextvars,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=[
            structlog.processors.add_log_level,
            merge_contextvars,
        ],
    )

    handler = logging.StreamHandler()  # stderr
    handler.setLevel(level)
    handler.setFormatter(processor_formatter)

    # force=True to replace any prior configuration
    logging.basicConfig(level=level, handlers=[handler], force=True)

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
