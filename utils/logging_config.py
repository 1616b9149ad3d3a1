"""
Structured logging for the instrument picker.

Widget events are logged as snake_case event names with keyword context
(field_id, token, market, keyword). Optional context such as a missing
keyword arrives as None and is dropped before rendering.
"""

import logging
import sys
from typing import Any, List, MutableMapping, Optional

import structlog

_configured = False


def drop_none_values(logger: Any, method_name: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """structlog processor: remove keys whose value is None."""
    for key in [key for key, value in event_dict.items() if value is None]:
        del event_dict[key]
    return event_dict


def build_processors(json_format: bool = False) -> List[Any]:
    """Processor chain shared by console and JSON output."""
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        drop_none_values,
        structlog.stdlib.add_logger_name,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_format:
        # Korean instrument names stay readable in JSON lines
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    log_file: Optional[str] = None
) -> None:
    """
    Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_format: Emit one JSON object per line instead of console output
        log_file: Optional file path that also receives every record
    """
    global _configured

    level = getattr(logging, log_level.upper(), logging.INFO)
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(format="%(message)s", level=level, handlers=handlers, force=True)

    structlog.configure(
        processors=build_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    _configured = True


def configure_from_config(config) -> None:
    """Configure logging once per process from LOG_LEVEL / LOG_JSON."""
    if _configured:
        return
    configure_logging(log_level=config.log_level, json_format=config.log_json)


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs) -> None:
    """Bind context variables (e.g. page) for subsequent log calls."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context(*keys: str) -> None:
    """Clear the given context variables, or all of them when none are named."""
    if keys:
        structlog.contextvars.unbind_contextvars(*keys)
    else:
        structlog.contextvars.clear_contextvars()
