"""Structured logging setup using structlog."""
import logging
import sys

import structlog

from inventory_graph.config import settings


def add_app_context(logger, method_name, event_dict):
    """Add the application name to all log entries."""
    event_dict["app"] = settings.APP_NAME
    return event_dict


def setup_logging():
    """
    Configure structlog and route it through the standard library.

    Console output is human readable unless LOG_JSON is set, in which case
    every record (uvicorn's included) is rendered as one JSON line.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ExtraAdder(),
        add_app_context,
    ]

    if settings.LOG_JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=settings.DEBUG)

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(log_level)

    # The driver logs every routing table refresh at INFO
    logging.getLogger("neo4j").setLevel(logging.WARNING)


def get_logger(name=None):
    """Get a structured logger, typically with the module's __name__."""
    return structlog.get_logger(name)
