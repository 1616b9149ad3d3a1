"""
Tests for data models and schemas.
"""

import pytest

from models.schemas import (
    DEFAULT_MARKET,
    DEFAULT_SEARCH_ENDPOINT,
    ResultViewState,
    SearchOptions,
    SearchResultItem,
    SelectionItem,
)


class TestSelectionItem:
    """Tests for SelectionItem dataclass."""

    def test_name_defaults_to_symbol(self):
        """Unknown display name falls back to the symbol."""
        item = SelectionItem(symbol="005930")
        assert item.name == "005930"

    def test_symbol_is_trimmed(self):
        item = SelectionItem(symbol=" 005930 ", name="삼성전자")
        assert item.symbol == "005930"
        assert item.name == "삼성전자"

    def test_empty_symbol_rejected(self):
        """Test that a blank symbol is not a valid item."""
        with pytest.raises(ValueError):
            SelectionItem(symbol="   ")

    def test_items_are_immutable(self):
        item = SelectionItem(symbol="005930")
        with pytest.raises(AttributeError):
            item.symbol = "000660"

    def test_to_dict(self):
        assert SelectionItem("000660", "SK하이닉스").to_dict() == {
            "symbol": "000660",
            "name": "SK하이닉스",
        }


class TestSearchResultItem:
    """Tests for SearchResultItem decoding and display rules."""

    def test_from_dict_full(self):
        item = SearchResultItem.from_dict({
            "symbol": "005930",
            "name": "Samsung Electronics",
            "nameKr": "삼성전자",
            "market": "KOSPI",
        })
        assert item.symbol == "005930"
        assert item.name_kr == "삼성전자"
        assert item.market == "KOSPI"

    def test_display_name_prefers_localized_name(self):
        item = SearchResultItem(symbol="005930", name="Samsung Electronics", name_kr="삼성전자")
        assert item.display_name == "삼성전자"

    def test_display_name_falls_back_to_name_then_symbol(self):
        assert SearchResultItem(symbol="035420", name="NAVER").display_name == "NAVER"
        assert SearchResultItem(symbol="035420").display_name == "035420"

    def test_blank_names_treated_as_absent(self):
        item = SearchResultItem.from_dict({"symbol": "035420", "name": "  ", "nameKr": ""})
        assert item.display_name == "035420"

    def test_market_label_default(self):
        """Missing market renders as KR."""
        assert SearchResultItem(symbol="035420").market_label == "KR"
        assert SearchResultItem(symbol="035420", market="KOSDAQ").market_label == "KOSDAQ"

    def test_from_dict_without_symbol_raises(self):
        with pytest.raises(ValueError):
            SearchResultItem.from_dict({"name": "No code"})


class TestSearchOptions:
    """Tests for SearchOptions merging."""

    def test_defaults(self):
        options = SearchOptions()
        assert options.multi_select is True
        assert options.default_market == DEFAULT_MARKET == "KOSPI"
        assert options.search_endpoint == DEFAULT_SEARCH_ENDPOINT
        assert options.on_confirm is None

    def test_caller_keys_win(self):
        base = SearchOptions(default_market="KOSDAQ")
        merged = base.merged({"multi_select": False}, default_market="KONEX")
        assert merged.multi_select is False
        assert merged.default_market == "KONEX"
        assert base.default_market == "KOSDAQ"

    def test_merge_without_overrides_keeps_values(self):
        base = SearchOptions(search_endpoint="/api/x")
        assert base.merged() == base

    def test_unknown_option_rejected(self):
        with pytest.raises(TypeError):
            SearchOptions().merged(apiUrl="/api/x")


def test_result_view_state_values():
    """View states serialize to plain strings."""
    assert ResultViewState.EMPTY.value == "empty"
    assert ResultViewState.ERROR == "error"
