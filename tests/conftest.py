"""
Pytest configuration and shared fixtures for instrument picker tests.
"""

import asyncio
from typing import Dict, List, Optional, Tuple

import pytest

from models.schemas import SearchResultItem
from services.instrument_search import InstrumentSearchError
from widgets import HostPage, SymbolSearchWidget


class FakeSearchService:
    """
    Stand-in for AsyncInstrumentSearchService.

    Responses are keyed by keyword ("" for no keyword). A response is either
    a list of SearchResultItem or an InstrumentSearchError instance. A gate
    (asyncio.Event) registered for a keyword holds that request until set.
    """

    def __init__(self):
        self.responses: Dict[str, object] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.calls: List[Tuple[str, Optional[str], Optional[str]]] = []
        self.closed = False

    async def search(self, endpoint, market=None, keyword=None):
        self.calls.append((endpoint, market, keyword))
        gate = self.gates.get(keyword or "")
        if gate is not None:
            await gate.wait()
        response = self.responses.get(keyword or "", [])
        if isinstance(response, InstrumentSearchError):
            raise response
        return list(response)

    async def close(self):
        self.closed = True


@pytest.fixture
def sample_items():
    """Search results in the shape the endpoint decodes to."""
    return [
        SearchResultItem(symbol="005930", name="Samsung Electronics", name_kr="삼성전자", market="KOSPI"),
        SearchResultItem(symbol="000660", name="SK hynix", name_kr="SK하이닉스", market="KOSPI"),
        SearchResultItem(symbol="035420", name="NAVER", market=None),
    ]


@pytest.fixture
def page():
    """Host page with one empty field and a mounted surface."""
    host = HostPage()
    host.add_field("symbols")
    host.mount_surface()
    return host


@pytest.fixture
def fake_service(sample_items):
    service = FakeSearchService()
    service.responses[""] = sample_items
    return service


@pytest.fixture
def widget(page, fake_service):
    return SymbolSearchWidget(page, fake_service, focus_delay=0.01)
