# freshconnect/utils/logging.py
import logging
import sys

import structlog


def setup_stdlib_logging(level: str) -> None:
    """Route stdlib records (uvicorn, celery, sqlalchemy) to stdout."""
    logging.basicConfig(level=level.upper(), format="%(message)s", stream=sys.stdout)
    logging.getLogger().setLevel(level.upper())

    # engine logging is controlled by SQL_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def setup_structlog(json_logs: bool = False) -> None:
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.contextvars.merge_contextvars,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    setup_stdlib_logging(level)
    setup_structlog(json_logs)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
