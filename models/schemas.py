"""
Data models for the instrument picker.
Selection items, search results, per-open options and outward events.
"""

from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple


DEFAULT_MARKET = "KOSPI"
DEFAULT_SEARCH_ENDPOINT = "/trading/instruments/api/search"
DEFAULT_MARKET_LABEL = "KR"


class ResultViewState(str, Enum):
    """State of the result area of the widget."""
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    POPULATED = "populated"


@dataclass(frozen=True)
class SelectionItem:
    """
    A selected instrument.

    Attributes:
        symbol: Instrument code, identity of the item
        name: Display name (equal to symbol until a search provides one)
    """
    symbol: str
    name: str = ""

    def __post_init__(self):
        symbol = (self.symbol or "").strip()
        if not symbol:
            raise ValueError("SelectionItem requires a non-empty symbol")
        object.__setattr__(self, "symbol", symbol)
        if not self.name:
            object.__setattr__(self, "name", symbol)

    def to_dict(self) -> dict:
        return {"symbol": self.symbol, "name": self.name}


@dataclass
class SearchResultItem:
    """Instrument returned by the search endpoint."""
    symbol: str
    name: Optional[str] = None
    name_kr: Optional[str] = None
    market: Optional[str] = None

    @property
    def display_name(self) -> str:
        """Localized name first, then generic name, then the symbol."""
        return self.name_kr or self.name or self.symbol

    @property
    def market_label(self) -> str:
        return self.market or DEFAULT_MARKET_LABEL

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchResultItem":
        """
        Create instance from an endpoint item payload.

        Raises:
            ValueError: If the payload carries no symbol
        """
        symbol = str(data.get("symbol") or "").strip()
        if not symbol:
            raise ValueError("Search result item has no symbol")

        def _text(key: str) -> Optional[str]:
            value = data.get(key)
            if value is None:
                return None
            text = str(value).strip()
            return text or None

        return cls(
            symbol=symbol,
            name=_text("name"),
            name_kr=_text("nameKr"),
            market=_text("market"),
        )


@dataclass(frozen=True)
class SearchOptions:
    """
    Options for one open/close cycle of the widget.

    Attributes:
        multi_select: Allow more than one selected instrument
        default_market: Market filter applied when the widget opens
        search_endpoint: Search API path (or absolute URL)
        on_confirm: Called with the selected items after the field is written
    """
    multi_select: bool = True
    default_market: str = DEFAULT_MARKET
    search_endpoint: str = DEFAULT_SEARCH_ENDPOINT
    on_confirm: Optional[Callable[[List[SelectionItem]], None]] = None

    def merged(self, overrides: Optional[Dict[str, Any]] = None, **kwargs) -> "SearchOptions":
        """
        Return a copy with caller-supplied keys taking precedence.

        Raises:
            TypeError: If an override names an unknown option
        """
        values = dict(overrides or {})
        values.update(kwargs)
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"Unknown symbol search options: {', '.join(unknown)}")
        return replace(self, **values)


@dataclass(frozen=True)
class SelectionChanged:
    """Emitted after every mutation of the selection set."""
    field_id: Optional[str]
    items: Tuple[SelectionItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SelectionConfirmed:
    """Emitted once the host field holds the confirmed selection."""
    field_id: Optional[str]
    items: Tuple[SelectionItem, ...] = field(default_factory=tuple)
    value: str = ""
