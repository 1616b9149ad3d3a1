"""
Configuration management for the instrument picker.
Loads environment variables and provides centralized configuration.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from models.schemas import DEFAULT_MARKET, DEFAULT_SEARCH_ENDPOINT, SearchOptions

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(Exception):
    """Raised when configuration values are invalid."""
    pass


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _parse_positive_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got '{raw}'")
    if value <= 0:
        raise ConfigurationError(f"{name} must be positive, got {value}")
    return value


@dataclass
class Config:
    """Application configuration."""

    # Search endpoint
    api_base_url: str = "http://localhost:8080"
    search_endpoint: str = DEFAULT_SEARCH_ENDPOINT
    request_timeout: int = 20  # Seconds

    # Widget defaults
    default_market: str = DEFAULT_MARKET
    multi_select: bool = True
    focus_delay_ms: int = 100

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """
        Load configuration from environment variables.

        Raises:
            ConfigurationError: If a numeric variable is malformed
        """
        return cls(
            api_base_url=os.getenv("SYMBOL_SEARCH_BASE_URL", "http://localhost:8080").rstrip("/"),
            search_endpoint=os.getenv("SYMBOL_SEARCH_API_URL", DEFAULT_SEARCH_ENDPOINT),
            request_timeout=_parse_positive_int("REQUEST_TIMEOUT", "20"),
            default_market=os.getenv("SYMBOL_SEARCH_DEFAULT_MARKET", DEFAULT_MARKET),
            multi_select=_parse_bool(os.getenv("SYMBOL_SEARCH_MULTI_SELECT", "true")),
            focus_delay_ms=_parse_positive_int("FOCUS_DELAY_MS", "100"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_json=_parse_bool(os.getenv("LOG_JSON", "false")),
        )

    @property
    def focus_delay(self) -> float:
        """Keyword focus delay in seconds."""
        return self.focus_delay_ms / 1000

    def default_options(self) -> SearchOptions:
        """Widget-level defaults that each open() merges its options into."""
        return SearchOptions(
            multi_select=self.multi_select,
            default_market=self.default_market,
            search_endpoint=self.search_endpoint,
        )


def get_config() -> Config:
    """Get the application configuration."""
    return Config.from_env()
