# Widgets module for the instrument picker
# Contains the symbol search widget and its host page model

from .surface import HostPage, HostField, WidgetSurface, ResultRow, BACKDROP, CONTENT, DEFAULT_SURFACE_ID
from .field_binder import FieldBinder
from .selection import SelectionStore, SelectionDelta
from .renderer import Renderer
from .search_controller import SearchController
from .symbol_search import SymbolSearchWidget, CANCEL_KEY

__all__ = [
    "HostPage",
    "HostField",
    "WidgetSurface",
    "ResultRow",
    "BACKDROP",
    "CONTENT",
    "DEFAULT_SURFACE_ID",
    "FieldBinder",
    "SelectionStore",
    "SelectionDelta",
    "Renderer",
    "SearchController",
    "SymbolSearchWidget",
    "CANCEL_KEY",
]
