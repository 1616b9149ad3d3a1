"""
Tests for result and selection rendering.
"""

from models.schemas import ResultViewState, SearchResultItem, SelectionItem
from widgets import Renderer, SelectionStore, WidgetSurface
from widgets.renderer import EMPTY_MESSAGE, IDLE_MESSAGE, NO_SELECTION_MESSAGE


class TestResultList:
    """Tests for Renderer.render_result_list."""

    def setup_method(self):
        self.renderer = Renderer()
        self.surface = WidgetSurface("symbolSearchModal")

    def test_rows_marked_selected(self, sample_items):
        store = SelectionStore(items=[SelectionItem("000660")])

        self.renderer.render_result_list(self.surface, sample_items, store)

        assert self.surface.result_state == ResultViewState.POPULATED
        assert [row.selected for row in self.surface.result_rows] == [False, True, False]
        assert 'class="symbol-search-item selected" data-symbol="000660"' in self.surface.result_html
        assert "<input type=\"checkbox\" checked>" in self.surface.result_rows[1].html

    def test_row_shows_name_symbol_market(self, sample_items):
        self.renderer.render_result_list(self.surface, sample_items, SelectionStore())

        first, _, last = self.surface.result_rows
        assert '<div class="name">삼성전자</div>' in first.html
        assert '<div class="code">005930</div>' in first.html
        assert '<span class="market">KOSPI</span>' in first.html
        assert '<span class="market">KR</span>' in last.html

    def test_markup_in_names_is_escaped(self):
        item = SearchResultItem(symbol="\"><b>1", name="<script>x</script>")

        self.renderer.render_result_list(self.surface, [item], SelectionStore())

        markup = self.surface.result_html
        assert "<script>" not in markup
        assert "&lt;script&gt;x&lt;/script&gt;" in markup
        assert 'data-symbol="&quot;&gt;&lt;b&gt;1"' in markup

    def test_mark_row_in_place(self, sample_items):
        self.renderer.render_result_list(self.surface, sample_items, SelectionStore())

        self.renderer.mark_row(self.surface, "035420", True)

        row = self.surface.find_row("035420")
        assert row.selected is True
        assert "symbol-search-item selected" in row.html
        assert row.html in self.surface.result_html

    def test_mark_row_missing_symbol_is_ignored(self, sample_items):
        self.renderer.render_result_list(self.surface, sample_items, SelectionStore())
        before = self.surface.result_html
        self.renderer.mark_row(self.surface, "999999", True)
        assert self.surface.result_html == before


class TestStates:
    """Tests for idle/loading/empty/error states."""

    def setup_method(self):
        self.renderer = Renderer()
        self.surface = WidgetSurface("symbolSearchModal")

    def test_empty_differs_from_idle(self):
        self.renderer.render_idle(self.surface)
        idle_html = self.surface.result_html
        self.renderer.render_empty(self.surface)

        assert self.surface.result_state == ResultViewState.EMPTY
        assert self.surface.result_message == EMPTY_MESSAGE
        assert EMPTY_MESSAGE != IDLE_MESSAGE
        assert self.surface.result_html != idle_html

    def test_error_message_escaped(self):
        self.renderer.render_error(self.surface, "<b>down</b>")
        assert self.surface.result_state == ResultViewState.ERROR
        assert self.surface.result_message == "<b>down</b>"
        assert "&lt;b&gt;down&lt;/b&gt;" in self.surface.result_html

    def test_state_clears_rows(self, sample_items):
        self.renderer.render_result_list(self.surface, sample_items, SelectionStore())
        self.renderer.render_loading(self.surface)
        assert self.surface.result_rows == []
        assert self.surface.result_state == ResultViewState.LOADING


class TestSelectionView:
    """Tests for Renderer.render_selection_view."""

    def setup_method(self):
        self.renderer = Renderer()
        self.surface = WidgetSurface("symbolSearchModal")

    def test_placeholder_when_empty(self):
        self.renderer.render_selection_view(self.surface, SelectionStore())
        assert NO_SELECTION_MESSAGE in self.surface.selection_html
        assert "symbol-search-tag" not in self.surface.selection_html

    def test_tags_in_insertion_order(self):
        store = SelectionStore(items=[SelectionItem("000660", "SK하이닉스"), SelectionItem("005930", "삼성전자")])
        self.renderer.render_selection_view(self.surface, store)

        markup = self.surface.selection_html
        assert markup.count('class="symbol-search-tag"') == 2
        assert markup.index("000660 (SK하이닉스)") < markup.index("005930 (삼성전자)")

    def test_tag_text_escaped(self):
        store = SelectionStore(items=[SelectionItem("X&Y", "<i>n</i>")])
        self.renderer.render_selection_view(self.surface, store)
        assert "X&amp;Y (&lt;i&gt;n&lt;/i&gt;)" in self.surface.selection_html
