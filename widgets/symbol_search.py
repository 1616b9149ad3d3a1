"""
Symbol search widget.

Lets a user search the instrument catalog, build a selection (single or
multiple) and write it back to a text field of the host page as
"005930, 000660".

Usage:
    page = HostPage()
    page.add_field("symbols")
    page.mount_surface()
    widget = SymbolSearchWidget(page, AsyncInstrumentSearchService(base_url=...))
    widget.open("symbols", multi_select=False, on_confirm=handle)

open() and search() need a running asyncio event loop; searches complete
in the background and render into the surface.
"""

import asyncio
from typing import Any, Callable, Dict, List, Optional, Union

from models.schemas import (
    SearchOptions,
    SearchResultItem,
    SelectionChanged,
    SelectionConfirmed,
    SelectionItem,
)
from services.instrument_search import AsyncInstrumentSearchService
from utils.logging_config import get_logger

from .field_binder import FieldBinder
from .renderer import Renderer
from .search_controller import SearchController
from .selection import SelectionDelta, SelectionStore
from .surface import (
    BACKDROP,
    CLICK_EVENT,
    DEFAULT_SURFACE_ID,
    KEYDOWN_EVENT,
    HostPage,
    ResultRow,
    WidgetSurface,
)

logger = get_logger(__name__)

CANCEL_KEY = "Escape"

WidgetEvent = Union[SelectionChanged, SelectionConfirmed]
ItemRef = Union[str, ResultRow, SearchResultItem]


class SymbolSearchWidget:
    """One mounted instrument picker; all state lives on the instance."""

    def __init__(
        self,
        page: HostPage,
        service: AsyncInstrumentSearchService,
        surface_id: str = DEFAULT_SURFACE_ID,
        defaults: Optional[SearchOptions] = None,
        focus_delay: float = 0.1,
        renderer: Optional[Renderer] = None,
    ):
        self.page = page
        self._log = logger.bind(surface_id=surface_id)
        self.surface_id = surface_id
        self.defaults = defaults or SearchOptions()
        self.focus_delay = focus_delay
        self.renderer = renderer or Renderer()
        self.binder = FieldBinder(page)
        self.controller = SearchController(service, self.renderer, on_results=self._enrich_names)

        self.options = self.defaults
        self.store = SelectionStore(multi_select=self.defaults.multi_select)
        self.target_field_id: Optional[str] = None
        self._surface: Optional[WidgetSurface] = None
        self._detach: List[Callable[[], None]] = []
        self._focus_handle: Optional[asyncio.TimerHandle] = None
        self._listeners: List[Callable[[WidgetEvent], None]] = []

        mounted = page.get_surface(surface_id)
        if mounted is not None:
            self.renderer.render_idle(mounted)
            self.renderer.render_selection_view(mounted, self.store)

    @property
    def surface(self) -> Optional[WidgetSurface]:
        return self._surface

    @property
    def is_open(self) -> bool:
        return self._surface is not None and self._surface.visible

    # ── Outward notifications ─────────────────────────────────────────

    def subscribe(self, listener: Callable[[WidgetEvent], None]) -> Callable[[], None]:
        """Register for SelectionChanged / SelectionConfirmed events."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _dispatch(self, event: WidgetEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    # ── Lifecycle ─────────────────────────────────────────────────────

    def open(self, field_id: str, options: Optional[Dict[str, Any]] = None, **overrides) -> bool:
        """
        Open the widget for a host field.

        Args:
            field_id: Id of the host text field to read from and write to
            options: Option overrides (multi_select, default_market,
                search_endpoint, on_confirm)
            **overrides: Same as options, as keyword arguments

        Returns:
            False if the surface is not mounted (nothing changed), else True

        Raises:
            RuntimeError: Outside a running event loop; nothing is changed
        """
        loop = asyncio.get_running_loop()
        surface = self.page.get_surface(self.surface_id)
        if surface is None:
            self._log.warning("symbol_search_surface_missing", field_id=field_id)
            return False

        merged = self.defaults.merged(options, **overrides)

        # Re-entrant open: drop everything from a previous session first
        self._teardown()

        self.options = merged
        self.target_field_id = field_id
        self._surface = surface
        self._detach = [
            surface.on(CLICK_EVENT, self._handle_click),
            surface.on(KEYDOWN_EVENT, self._handle_key),
        ]

        self.store = SelectionStore(
            multi_select=self.options.multi_select,
            items=self.binder.read(field_id),
        )

        surface.market_filter = self.options.default_market
        surface.keyword = ""
        self.renderer.render_selection_view(surface, self.store)
        surface.show()

        self._log.info(
            "symbol_search_opened",
            field_id=field_id,
            multi_select=self.options.multi_select,
            seeded=len(self.store),
        )

        self.search()

        self._focus_handle = loop.call_later(self.focus_delay, surface.focus_keyword)
        return True

    def close(self) -> None:
        """Hide the widget; the host field keeps whatever value it had."""
        if self._surface is not None:
            self._surface.hide()
            self._log.info("symbol_search_closed", field_id=self.target_field_id)
        self._teardown()

    def _teardown(self) -> None:
        for detach in self._detach:
            detach()
        self._detach = []
        if self._focus_handle is not None:
            self._focus_handle.cancel()
            self._focus_handle = None
        self.controller.invalidate()
        self.target_field_id = None
        self.store = SelectionStore(multi_select=self.options.multi_select)

    def _handle_click(self, target: str) -> None:
        if target == BACKDROP:
            self.close()

    def _handle_key(self, key: str) -> None:
        if key == CANCEL_KEY and self.is_open:
            self.close()

    # ── Search ────────────────────────────────────────────────────────

    def search(self) -> Optional[asyncio.Task]:
        """Search with the current market filter and keyword."""
        if self._surface is None:
            self._log.warning("symbol_search_not_open")
            return None
        return self.controller.search(self._surface, self.store, self.options.search_endpoint)

    def set_market(self, market: str) -> Optional[asyncio.Task]:
        """Change the market filter and search again."""
        if self._surface is None:
            return None
        self._surface.market_filter = market or ""
        return self.search()

    def set_keyword(self, keyword: str) -> None:
        if self._surface is not None:
            self._surface.keyword = keyword or ""

    async def wait_for_search(self) -> None:
        await self.controller.wait()

    def _enrich_names(self, items: List[SearchResultItem]) -> None:
        names = {item.symbol: item.display_name for item in items}
        if self.store.enrich(names) and self._surface is not None:
            self.renderer.render_selection_view(self._surface, self.store)

    # ── Selection ─────────────────────────────────────────────────────

    def toggle(self, item_ref: ItemRef, name: Optional[str] = None) -> bool:
        """
        Flip selection of an instrument.

        Args:
            item_ref: Symbol, result row or result item
            name: Display name; looked up from the visible rows when omitted

        Returns:
            True if the instrument is selected afterwards
        """
        symbol, name = self._resolve_ref(item_ref, name)
        delta = self.store.toggle(symbol, name)
        self._apply(delta)
        return symbol in self.store

    def remove(self, symbol: str) -> None:
        delta = self.store.remove(symbol)
        if delta:
            self._apply(delta)

    def get_selected(self) -> List[SelectionItem]:
        return self.store.get_selected()

    def confirm(self) -> List[SelectionItem]:
        """
        Write the selection to the host field, notify, then close.

        The field (and its change listeners) is updated before on_confirm
        runs, so the callback can read the new value. Confirming a closed
        widget does nothing and returns an empty list.
        """
        field_id = self.target_field_id
        if field_id is None:
            self._log.warning("symbol_search_confirm_while_closed")
            return []

        selected = self.store.get_selected()
        value = self.binder.write(field_id, selected)

        self._log.info("symbol_search_confirmed", field_id=field_id, count=len(selected))
        self._dispatch(SelectionConfirmed(field_id=field_id, items=tuple(selected), value=value))

        if self.options.on_confirm is not None:
            self.options.on_confirm(list(selected))

        self.close()
        return selected

    def _resolve_ref(self, item_ref: ItemRef, name: Optional[str]):
        if isinstance(item_ref, ResultRow):
            item_ref = item_ref.item
        if isinstance(item_ref, SearchResultItem):
            return item_ref.symbol, name or item_ref.display_name

        symbol = item_ref.strip()
        if name is None and self._surface is not None:
            row = self._surface.find_row(symbol)
            if row is not None:
                name = row.item.display_name
        return symbol, name

    def _apply(self, delta: SelectionDelta) -> None:
        surface = self._surface
        if surface is not None:
            for symbol in delta.removed:
                self.renderer.mark_row(surface, symbol, False)
            for symbol in delta.added:
                self.renderer.mark_row(surface, symbol, True)
            self.renderer.render_selection_view(surface, self.store)

        self._dispatch(SelectionChanged(field_id=self.target_field_id, items=tuple(self.store.get_selected())))
