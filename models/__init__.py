# Models module for the instrument picker
# Contains selection, search result, option and event schemas

from .schemas import (
    DEFAULT_MARKET,
    DEFAULT_SEARCH_ENDPOINT,
    ResultViewState,
    SearchOptions,
    SearchResultItem,
    SelectionChanged,
    SelectionConfirmed,
    SelectionItem,
)

__all__ = [
    "DEFAULT_MARKET",
    "DEFAULT_SEARCH_ENDPOINT",
    "ResultViewState",
    "SearchOptions",
    "SearchResultItem",
    "SelectionChanged",
    "SelectionConfirmed",
    "SelectionItem",
]
