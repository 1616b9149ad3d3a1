# Utilities module for the instrument picker
# Contains field token parsing, URL checks and logging

from .validators import split_symbol_tokens, is_absolute_url
from .logging_config import configure_logging, configure_from_config, get_logger, bind_context, clear_context

__all__ = [
    "split_symbol_tokens",
    "is_absolute_url",
    "configure_logging",
    "configure_from_config",
    "get_logger",
    "bind_context",
    "clear_context",
]
