"""
Tests for host field parsing and serialization.
"""

from models.schemas import SelectionItem
from widgets import FieldBinder, HostPage


class TestParseSerialize:
    """Tests for FieldBinder.parse / serialize."""

    def test_parse_tolerates_whitespace_and_empty_tokens(self):
        items = FieldBinder.parse("005930,  000660 ,")
        assert [item.symbol for item in items] == ["005930", "000660"]

    def test_parse_names_equal_symbols(self):
        assert FieldBinder.parse("005930") == [SelectionItem(symbol="005930", name="005930")]

    def test_parse_empty(self):
        assert FieldBinder.parse("") == []
        assert FieldBinder.parse(None) == []

    def test_serialize_joins_with_comma_space(self):
        items = [SelectionItem("005930", "삼성전자"), SelectionItem("000660", "SK하이닉스")]
        assert FieldBinder.serialize(items) == "005930, 000660"

    def test_round_trip_keeps_order(self):
        items = [SelectionItem("005930"), SelectionItem("000660")]
        parsed = FieldBinder.parse(FieldBinder.serialize(items))
        assert [item.symbol for item in parsed] == ["005930", "000660"]

    def test_normalized_text_is_stable(self):
        text = "005930, 000660"
        assert FieldBinder.serialize(FieldBinder.parse(text)) == text

    def test_serialize_empty(self):
        assert FieldBinder.serialize([]) == ""


class TestReadWrite:
    """Tests for FieldBinder.read / write against a host page."""

    def setup_method(self):
        self.page = HostPage()
        self.field = self.page.add_field("symbols", "000660 ,005930")
        self.binder = FieldBinder(self.page)

    def test_read_existing_field(self):
        assert [item.symbol for item in self.binder.read("symbols")] == ["000660", "005930"]

    def test_read_missing_field(self):
        assert self.binder.read("missing") == []

    def test_write_sets_value_and_notifies(self):
        seen = []
        self.field.add_change_listener(lambda f: seen.append(f.value))

        value = self.binder.write("symbols", [SelectionItem("035420")])

        assert value == "035420"
        assert self.field.value == "035420"
        assert seen == ["035420"]

    def test_write_missing_field_returns_value(self):
        value = self.binder.write("missing", [SelectionItem("035420")])
        assert value == "035420"
        assert self.field.value == "000660 ,005930"
