"""
Selection set of the instrument picker.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional

from models.schemas import SelectionItem


@dataclass
class SelectionDelta:
    """Symbols added and removed by one mutation."""
    added: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.added or self.removed)


class SelectionStore:
    """
    Ordered, duplicate-free selection keyed by symbol.

    In single-select mode the store never holds more than one item.
    """

    def __init__(self, multi_select: bool = True, items: Optional[Iterable[SelectionItem]] = None):
        self._multi_select = multi_select
        self._items: Dict[str, SelectionItem] = {}
        for item in items or []:
            if item.symbol in self._items:
                continue
            if not multi_select and self._items:
                break
            self._items[item.symbol] = item

    @property
    def multi_select(self) -> bool:
        return self._multi_select

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._items

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[SelectionItem]:
        return iter(list(self._items.values()))

    def symbols(self) -> List[str]:
        return list(self._items)

    def get_selected(self) -> List[SelectionItem]:
        """Copy of the selection in insertion order."""
        return list(self._items.values())

    def toggle(self, symbol: str, name: Optional[str] = None) -> SelectionDelta:
        """
        Remove the symbol if selected, otherwise append it.

        In single-select mode appending first drops every other item.
        """
        symbol = symbol.strip()
        if symbol in self._items:
            del self._items[symbol]
            return SelectionDelta(removed=[symbol])

        item = SelectionItem(symbol=symbol, name=name or symbol)
        delta = SelectionDelta(added=[symbol])
        if not self._multi_select:
            delta.removed = list(self._items)
            self._items.clear()
        self._items[symbol] = item
        return delta

    def remove(self, symbol: str) -> SelectionDelta:
        if self._items.pop(symbol, None) is None:
            return SelectionDelta()
        return SelectionDelta(removed=[symbol])

    def enrich(self, names: Dict[str, str]) -> bool:
        """
        Fill in display names that are still placeholders (equal to symbol).

        Returns:
            True if at least one name changed
        """
        changed = False
        for symbol, item in list(self._items.items()):
            new_name = names.get(symbol)
            if new_name and item.name == item.symbol and new_name != item.name:
                self._items[symbol] = SelectionItem(symbol=symbol, name=new_name)
                changed = True
        return changed
