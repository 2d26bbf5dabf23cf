import logging
import sys
from typing import Optional
import structlog

from .core.config import OllamaSettings

_handler: Optional[logging.Handler] = None


def _truncate_long_messages(_, __, event_dict):
    """Shorten oversized events such as full error bodies."""
    message = event_dict.get("event", "")
    if isinstance(message, str) and len(message) > 500:
        event_dict["event"] = f"{message[:250]}... (truncated)"
    return event_dict


def setup_logging(
    level: Optional[str] = None,
    request_id: Optional[str] = None,
    environment: str = "development"
):
    """Configure structured logging for applications using the client.

    The library itself never calls this; it only logs through the
    standard ``logging`` module. Repeated calls reconfigure levels but
    attach the stderr handler only once.

    Args:
        level: Default log level (INFO, DEBUG, WARNING, ERROR). Falls back
            to OLLAMA_LOG_LEVEL.
        request_id: Optional request ID for request tracing
        environment: Environment name (development, production)
    """
    global _handler
    level = (level or OllamaSettings().LOG_LEVEL).upper()

    component_levels = {
        "ollama_api": level,
        "httpx": "WARNING",
        "httpcore": "WARNING",
    }

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _truncate_long_messages,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    # Use pretty formatting in development, JSON in production
    if environment == "development":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        logger_factory=structlog.PrintLoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level)),
        cache_logger_on_first_use=True,
    )

    for component, component_level in component_levels.items():
        logging.getLogger(component).setLevel(
            logging.getLevelName(component_level))

    logger = structlog.get_logger()
    logger = logger.bind(
        environment=environment,
        request_id=request_id,
    )

    root_logger = logging.getLogger()
    if _handler is None or _handler not in root_logger.handlers:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(
            logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s')
        )
        root_logger.addHandler(_handler)
    root_logger.setLevel(level)

    return logger


def get_request_logger(request_id: str):
    """Get a logger instance bound with the request ID."""
    return structlog.get_logger().bind(request_id=request_id)
