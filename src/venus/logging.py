import logging

import structlog

# Loggers that are too chatty below WARNING
QUIET_LOGGERS = ("pymongo",)


def log_level_name(debug: bool) -> str:
    return "DEBUG" if debug else "INFO"


def setup_logging(debug: bool) -> None:
    logging.basicConfig(level=log_level_name(debug), format="%(message)s")
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    # Console output for development, JSON lines otherwise
    processors.append(structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
