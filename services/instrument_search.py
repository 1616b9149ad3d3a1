"""
Instrument search service.
Queries the dashboard's instrument search endpoint (GET ?market=&search=).
"""

from typing import Any, Dict, List, Optional

import httpx

from models.schemas import SearchResultItem
from utils.logging_config import get_logger
from utils.validators import is_absolute_url

logger = get_logger(__name__)

GENERIC_SEARCH_ERROR = "검색 중 오류가 발생했습니다"


class InstrumentSearchError(Exception):
    """
    Raised when a search request fails.

    Attributes:
        message: Text to show in the result area
        reported: True when the endpoint itself returned the error message
    """

    def __init__(self, message: Optional[str] = None, reported: bool = False):
        self.message = message or GENERIC_SEARCH_ERROR
        self.reported = reported
        super().__init__(self.message)


class AsyncInstrumentSearchService:
    """Async client for the instrument search endpoint."""

    def __init__(
        self,
        base_url: str = "",
        timeout: int = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/") if base_url else ""
        self.timeout = timeout
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    @property
    def http_client(self) -> httpx.AsyncClient:
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
                headers={"Accept": "application/json"},
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    @staticmethod
    def build_params(market: Optional[str] = None, keyword: Optional[str] = None) -> Dict[str, str]:
        """Query parameters; absent or blank values mean "no filter"."""
        params: Dict[str, str] = {}
        if market and market.strip():
            params["market"] = market.strip()
        if keyword and keyword.strip():
            params["search"] = keyword.strip()
        return params

    async def search(
        self,
        endpoint: str,
        market: Optional[str] = None,
        keyword: Optional[str] = None,
    ) -> List[SearchResultItem]:
        """
        Search instruments.

        Args:
            endpoint: Endpoint path (resolved against base_url) or absolute URL
            market: Market filter, e.g. KOSPI
            keyword: Name or code fragment

        Returns:
            Decoded result items (possibly empty)

        Raises:
            InstrumentSearchError: On transport failure, undecodable body,
                HTTP error status or an endpoint-reported error
        """
        if not self.base_url and not is_absolute_url(endpoint):
            logger.error("symbol_search_endpoint_unresolvable", endpoint=endpoint)
            raise InstrumentSearchError()

        params = self.build_params(market, keyword)

        try:
            response = await self.http_client.get(endpoint, params=params)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("symbol_search_transport_error", endpoint=endpoint, error=str(exc))
            raise InstrumentSearchError() from exc

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning(
                "symbol_search_invalid_body",
                endpoint=endpoint,
                status=response.status_code,
            )
            raise InstrumentSearchError() from exc

        if isinstance(data, dict) and data.get("error"):
            raise InstrumentSearchError(str(data["error"]), reported=True)

        if response.is_error or not isinstance(data, dict):
            logger.warning("symbol_search_bad_response", endpoint=endpoint, status=response.status_code)
            raise InstrumentSearchError()

        items = self._parse_items(data.get("items"))
        logger.debug("symbol_search_completed", params=params, count=len(items))
        return items

    def _parse_items(self, raw_items: Any) -> List[SearchResultItem]:
        """Decode endpoint items, skipping malformed rows and repeated symbols."""
        if raw_items is None:
            return []
        if not isinstance(raw_items, list):
            raise InstrumentSearchError()

        items: List[SearchResultItem] = []
        seen = set()
        for raw in raw_items:
            if not isinstance(raw, dict):
                continue
            try:
                item = SearchResultItem.from_dict(raw)
            except ValueError:
                continue
            if item.symbol in seen:
                continue
            seen.add(item.symbol)
            items.append(item)
        return items
