"""
In-process model of the host page.

A HostPage owns text fields (the host form) and mounted widget surfaces.
A WidgetSurface is the modal subtree of one widget: visibility, the market
and keyword inputs, keyword focus, rendered result rows and selection tags,
and the click/key events scoped to it.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from models.schemas import ResultViewState, SearchResultItem

DEFAULT_SURFACE_ID = "symbolSearchModal"

BACKDROP = "backdrop"
CONTENT = "content"

CLICK_EVENT = "click"
KEYDOWN_EVENT = "keydown"


class HostField:
    """Text-valued form field on the host page."""

    def __init__(self, field_id: str, value: str = ""):
        self.field_id = field_id
        self.value = value
        self._listeners: List[Callable[["HostField"], None]] = []

    def add_change_listener(self, listener: Callable[["HostField"], None]) -> None:
        self._listeners.append(listener)

    def remove_change_listener(self, listener: Callable[["HostField"], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def set_value(self, value: str, notify: bool = True) -> None:
        self.value = value
        if notify:
            self.dispatch_change()

    def dispatch_change(self) -> None:
        """Run change listeners synchronously, in registration order."""
        for listener in list(self._listeners):
            listener(self)


@dataclass
class ResultRow:
    """A rendered row of the result list."""
    item: SearchResultItem
    selected: bool = False
    html: str = ""


class WidgetSurface:
    """The modal surface of one mounted widget."""

    def __init__(self, surface_id: str):
        self.surface_id = surface_id
        self.visible = False
        self.market_filter = ""
        self.keyword = ""
        self.focused = False

        self.result_state = ResultViewState.IDLE
        self.result_message: Optional[str] = None
        self.result_rows: List[ResultRow] = []
        self.result_html = ""
        self.selection_html = ""

        self._handlers: Dict[str, List[Callable]] = {}

    # ── Scoped events ──────────────────────────────────────────────────

    def on(self, event: str, handler: Callable) -> Callable[[], None]:
        """Subscribe to a surface event; returns an unsubscribe callable."""
        handlers = self._handlers.setdefault(event, [])
        handlers.append(handler)

        def unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return unsubscribe

    def _emit(self, event: str, *args) -> None:
        for handler in list(self._handlers.get(event, [])):
            handler(*args)

    def click(self, target: str = CONTENT) -> None:
        """Simulate a click on the backdrop or on the content area."""
        self._emit(CLICK_EVENT, target)

    def key_down(self, key: str) -> None:
        self._emit(KEYDOWN_EVENT, key)

    # ── Visibility and focus ───────────────────────────────────────────

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False
        self.focused = False

    def focus_keyword(self) -> None:
        if self.visible:
            self.focused = True

    def find_row(self, symbol: str) -> Optional[ResultRow]:
        for row in self.result_rows:
            if row.item.symbol == symbol:
                return row
        return None


class HostPage:
    """Host form: fields by id plus mounted widget surfaces."""

    def __init__(self):
        self._fields: Dict[str, HostField] = {}
        self._surfaces: Dict[str, WidgetSurface] = {}

    def add_field(self, field_id: str, value: str = "") -> HostField:
        host_field = HostField(field_id, value)
        self._fields[field_id] = host_field
        return host_field

    def get_field(self, field_id: Optional[str]) -> Optional[HostField]:
        if field_id is None:
            return None
        return self._fields.get(field_id)

    def mount_surface(self, surface_id: str = DEFAULT_SURFACE_ID) -> WidgetSurface:
        surface = WidgetSurface(surface_id)
        self._surfaces[surface_id] = surface
        return surface

    def unmount_surface(self, surface_id: str) -> None:
        self._surfaces.pop(surface_id, None)

    def get_surface(self, surface_id: str) -> Optional[WidgetSurface]:
        return self._surfaces.get(surface_id)
