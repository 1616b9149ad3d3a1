# Services module for the instrument picker
# Contains the instrument search endpoint client

from .instrument_search import (
    AsyncInstrumentSearchService,
    InstrumentSearchError,
    GENERIC_SEARCH_ERROR,
)

__all__ = [
    "AsyncInstrumentSearchService",
    "InstrumentSearchError",
    "GENERIC_SEARCH_ERROR",
]
