"""
Host field <-> selection conversion.
"""

from typing import Iterable, List, Optional

from models.schemas import SelectionItem
from utils.logging_config import get_logger
from utils.validators import split_symbol_tokens

from .surface import HostPage

logger = get_logger(__name__)

FIELD_SEPARATOR = ", "


class FieldBinder:
    """Reads the initial selection from a host field and writes it back."""

    def __init__(self, page: HostPage):
        self.page = page

    @staticmethod
    def parse(text: Optional[str]) -> List[SelectionItem]:
        """
        Parse a field value into selection items.

        Display names start out equal to the symbol; a later search
        response may enrich them.

        Args:
            text: Field value, e.g. "005930, 000660"

        Returns:
            Ordered, duplicate-free selection items
        """
        return [SelectionItem(symbol=token, name=token) for token in split_symbol_tokens(text or "")]

    @staticmethod
    def serialize(items: Iterable[SelectionItem]) -> str:
        return FIELD_SEPARATOR.join(item.symbol for item in items)

    def read(self, field_id: Optional[str]) -> List[SelectionItem]:
        host_field = self.page.get_field(field_id)
        if host_field is None:
            return []
        return self.parse(host_field.value)

    def write(self, field_id: Optional[str], items: Iterable[SelectionItem]) -> str:
        """
        Write the serialized selection into the field and notify listeners.

        Returns:
            The serialized value (also when the field no longer exists)
        """
        value = self.serialize(items)
        host_field = self.page.get_field(field_id)
        if host_field is None:
            logger.warning("symbol_search_field_missing", field_id=field_id)
            return value

        host_field.set_value(value)
        return value
