"""
Instrument Picker - Streamlit host page.
Mounts one symbol search widget and binds it to a watchlist field.
"""

import asyncio
from typing import Callable

import streamlit as st

from config import Config, ConfigurationError, get_config
from models.schemas import ResultViewState
from services.instrument_search import AsyncInstrumentSearchService
from utils.logging_config import bind_context, clear_context, configure_from_config, get_logger
from widgets import HostPage, SymbolSearchWidget


st.set_page_config(
    page_title="Instrument Picker",
    page_icon="🔍",
    layout="wide",
)

FIELD_ID = "watchlistSymbols"
MARKETS = ["KOSPI", "KOSDAQ", "KONEX", ""]

WIDGET_CSS = """
<style>
.symbol-search-tag { display: inline-block; margin: 2px 4px; padding: 2px 8px;
    border-radius: 12px; background: #e8f0fe; font-size: 0.85rem; }
.symbol-search-tag .remove { display: none; }
.symbol-search-no-selection, .symbol-search-loading { color: #888; }
</style>
"""

logger = get_logger(__name__)


def get_widget(config: Config) -> SymbolSearchWidget:
    """Create the page and widget once per browser session."""
    if "symbol_search" not in st.session_state:
        page = HostPage()
        page.add_field(FIELD_ID)
        page.mount_surface()
        service = AsyncInstrumentSearchService(
            base_url=config.api_base_url,
            timeout=config.request_timeout,
        )
        st.session_state.symbol_search = SymbolSearchWidget(
            page,
            service,
            defaults=config.default_options(),
            focus_delay=config.focus_delay,
        )
        st.session_state.confirmed = []
    return st.session_state.symbol_search


def run(widget: SymbolSearchWidget, action: Callable[[], None]) -> None:
    """
    Run a widget action on a short-lived event loop and wait for its search.

    Streamlit reruns the script synchronously, so every interaction gets its
    own loop; the HTTP client is closed before that loop goes away.
    """
    async def runner() -> None:
        try:
            action()
            await widget.wait_for_search()
        finally:
            await widget.controller.service.close()

    asyncio.run(runner())


def remember_confirmed(items) -> None:
    st.session_state.confirmed = [item.to_dict() for item in items]


def render_results(widget: SymbolSearchWidget) -> None:
    surface = widget.surface
    if surface is None:
        return

    if surface.result_state == ResultViewState.ERROR:
        st.error(surface.result_message)
        return
    if surface.result_state in (ResultViewState.EMPTY, ResultViewState.IDLE):
        st.info(surface.result_message)
        return
    if surface.result_state == ResultViewState.LOADING:
        st.caption(surface.result_message)
        return

    for row in surface.result_rows:
        col1, col2, col3 = st.columns([4, 2, 1])
        with col1:
            st.checkbox(
                f"{row.item.display_name} ({row.item.symbol})",
                value=row.selected,
                key=f"row-{row.item.symbol}-{row.selected}",
                on_change=widget.toggle,
                args=(row,),
            )
        with col2:
            st.caption(row.item.market_label)
        with col3:
            st.caption("✅" if row.selected else "")


def render_selection(widget: SymbolSearchWidget) -> None:
    st.markdown(WIDGET_CSS, unsafe_allow_html=True)
    st.markdown(widget.surface.selection_html, unsafe_allow_html=True)

    selected = widget.get_selected()
    if selected:
        choice = st.selectbox(
            "Remove",
            [""] + [item.symbol for item in selected],
            format_func=lambda s: s or "-",
        )
        if choice:
            widget.remove(choice)
            st.rerun()


def render_picker(widget: SymbolSearchWidget) -> None:
    surface = widget.surface

    col1, col2, col3 = st.columns([1, 3, 1])
    with col1:
        market = st.selectbox(
            "Market",
            MARKETS,
            index=MARKETS.index(surface.market_filter) if surface.market_filter in MARKETS else 0,
            format_func=lambda m: m or "All",
        )
    with col2:
        keyword = st.text_input("Keyword", value=surface.keyword)
    with col3:
        st.write("")
        do_search = st.button("🔍 Search")

    if market != surface.market_filter:
        run(widget, lambda: widget.set_market(market))
        st.rerun()
    if do_search:
        widget.set_keyword(keyword)
        run(widget, widget.search)

    render_selection(widget)
    st.markdown("---")
    render_results(widget)
    st.markdown("---")

    col1, col2 = st.columns(2)
    with col1:
        if st.button("✅ Confirm", type="primary"):
            widget.confirm()
            st.rerun()
    with col2:
        if st.button("✖ Cancel"):
            widget.close()
            st.rerun()


def main():
    """Main host page."""
    try:
        config = get_config()
    except ConfigurationError as e:
        st.error(f"⚠️ Configuration Error: {e}")
        st.stop()

    configure_from_config(config)
    widget = get_widget(config)
    bind_context(page="instrument_picker")

    st.title("🔍 Instrument Picker")
    host_field = widget.page.get_field(FIELD_ID)

    col1, col2, col3 = st.columns([4, 1, 1])
    with col1:
        value = st.text_input("Watchlist symbols", value=host_field.value)
        if value != host_field.value:
            host_field.set_value(value)
    with col2:
        multi = st.toggle("Multi-select", value=True)
    with col3:
        st.write("")
        if st.button("Open picker") and not widget.is_open:
            run(widget, lambda: widget.open(FIELD_ID, multi_select=multi, on_confirm=remember_confirmed))
            logger.info("picker_opened_from_page", multi_select=multi)

    if widget.is_open:
        with st.container(border=True):
            render_picker(widget)

    confirmed = st.session_state.get("confirmed") or []
    if confirmed:
        st.success(
            "Confirmed: " + ", ".join(
                f"{item['symbol']} ({item['name']})" for item in confirmed
            )
        )

    clear_context("page")


if __name__ == "__main__":
    main()
