"""
HTML rendering for the instrument picker surface.

All user-supplied text goes through html.escape before it reaches the
surface. The renderer reads the selection but never changes it.
"""

import html
from typing import Iterable

from models.schemas import ResultViewState, SearchResultItem, SelectionItem

from .selection import SelectionStore
from .surface import ResultRow, WidgetSurface

IDLE_MESSAGE = "종목명 또는 코드를 입력해 검색하세요"
LOADING_MESSAGE = "종목을 검색 중입니다..."
EMPTY_MESSAGE = "검색 결과가 없습니다"
NO_SELECTION_MESSAGE = "선택된 종목이 없습니다"


def _esc(value: str) -> str:
    return html.escape(value or "", quote=True)


def result_row_html(item: SearchResultItem, selected: bool) -> str:
    """Markup for a single result row."""
    classes = "symbol-search-item selected" if selected else "symbol-search-item"
    checked = " checked" if selected else ""
    return (
        f'<div class="{classes}" data-symbol="{_esc(item.symbol)}" data-name="{_esc(item.display_name)}">'
        f'<input type="checkbox"{checked}>'
        '<div class="info">'
        f'<div class="name">{_esc(item.display_name)}</div>'
        f'<div class="code">{_esc(item.symbol)}</div>'
        '</div>'
        f'<span class="market">{_esc(item.market_label)}</span>'
        '</div>'
    )


def selection_tag_html(item: SelectionItem) -> str:
    return (
        f'<span class="symbol-search-tag" data-symbol="{_esc(item.symbol)}">'
        f'{_esc(item.symbol)} ({_esc(item.name)})'
        '<span class="remove">&times;</span>'
        '</span>'
    )


def _message_html(icon: str, message: str) -> str:
    return f'<div class="symbol-search-empty">{icon}<p>{_esc(message)}</p></div>'


class Renderer:
    """Writes result and selection markup onto a WidgetSurface."""

    def render_idle(self, surface: WidgetSurface) -> None:
        self._set_state(surface, ResultViewState.IDLE, IDLE_MESSAGE, _message_html("🔍", IDLE_MESSAGE))

    def render_loading(self, surface: WidgetSurface) -> None:
        self._set_state(
            surface,
            ResultViewState.LOADING,
            LOADING_MESSAGE,
            f'<div class="symbol-search-loading">{_esc(LOADING_MESSAGE)}</div>',
        )

    def render_empty(self, surface: WidgetSurface) -> None:
        self._set_state(surface, ResultViewState.EMPTY, EMPTY_MESSAGE, _message_html("🔍", EMPTY_MESSAGE))

    def render_error(self, surface: WidgetSurface, message: str) -> None:
        self._set_state(surface, ResultViewState.ERROR, message, _message_html("⚠️", message))

    def render_result_list(
        self,
        surface: WidgetSurface,
        items: Iterable[SearchResultItem],
        store: SelectionStore,
    ) -> None:
        rows = []
        for item in items:
            selected = item.symbol in store
            rows.append(ResultRow(item=item, selected=selected, html=result_row_html(item, selected)))

        surface.result_rows = rows
        surface.result_state = ResultViewState.POPULATED
        surface.result_message = None
        surface.result_html = "".join(row.html for row in rows)

    def mark_row(self, surface: WidgetSurface, symbol: str, selected: bool) -> None:
        """Update the selected marker of a visible result row in place."""
        row = surface.find_row(symbol)
        if row is None or row.selected == selected:
            return
        row.selected = selected
        row.html = result_row_html(row.item, selected)
        surface.result_html = "".join(r.html for r in surface.result_rows)

    def render_selection_view(self, surface: WidgetSurface, store: SelectionStore) -> None:
        if not len(store):
            surface.selection_html = (
                f'<span class="symbol-search-no-selection">{_esc(NO_SELECTION_MESSAGE)}</span>'
            )
            return
        surface.selection_html = "".join(selection_tag_html(item) for item in store)

    @staticmethod
    def _set_state(surface: WidgetSurface, state: ResultViewState, message: str, markup: str) -> None:
        surface.result_state = state
        surface.result_message = message
        surface.result_rows = []
        surface.result_html = markup
