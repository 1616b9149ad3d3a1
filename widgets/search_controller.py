"""
Search orchestration for the instrument picker.

Every issued search gets a request token. A response is applied only if its
token is still the latest one, so a slow earlier request can never overwrite
the view of a newer one.
"""

import asyncio
from typing import Callable, List, Optional, Set

from models.schemas import SearchResultItem
from services.instrument_search import AsyncInstrumentSearchService, InstrumentSearchError
from utils.logging_config import get_logger

from .renderer import Renderer
from .selection import SelectionStore
from .surface import WidgetSurface

logger = get_logger(__name__)


class SearchController:
    """Issues searches and drives the result area view state."""

    def __init__(
        self,
        service: AsyncInstrumentSearchService,
        renderer: Renderer,
        on_results: Optional[Callable[[List[SearchResultItem]], None]] = None,
    ):
        self.service = service
        self.renderer = renderer
        self.on_results = on_results
        self._latest_token = 0
        self._pending: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    @property
    def latest_token(self) -> int:
        return self._latest_token

    @property
    def pending(self) -> Optional[asyncio.Task]:
        return self._pending

    def search(self, surface: WidgetSurface, store: SelectionStore, endpoint: str) -> asyncio.Task:
        """
        Start a search with the surface's current market filter and keyword.

        Must be called from a running event loop. Returns the task so
        callers may await completion; the view is updated either way.
        """
        loop = asyncio.get_running_loop()
        market = surface.market_filter.strip()
        keyword = surface.keyword.strip()

        self._latest_token += 1
        token = self._latest_token

        self.renderer.render_loading(surface)
        logger.info("symbol_search_started", token=token, market=market, keyword=keyword)

        task = loop.create_task(self._run(token, surface, store, endpoint, market, keyword))
        self._tasks.add(task)
        task.add_done_callback(self._task_done)
        self._pending = task
        return task

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def _task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("symbol_search_task_failed", error=repr(exc))

    def invalidate(self) -> None:
        """Make every in-flight response stale."""
        self._latest_token += 1

    async def wait(self) -> None:
        if self._pending is not None:
            await self._pending

    def _is_stale(self, token: int) -> bool:
        return token != self._latest_token

    async def _run(
        self,
        token: int,
        surface: WidgetSurface,
        store: SelectionStore,
        endpoint: str,
        market: str,
        keyword: str,
    ) -> None:
        try:
            items = await self.service.search(endpoint, market=market or None, keyword=keyword or None)
        except InstrumentSearchError as exc:
            if self._is_stale(token):
                logger.debug("symbol_search_stale_error_discarded", token=token)
                return
            logger.warning(
                "symbol_search_failed",
                token=token,
                reported=exc.reported,
                error=exc.message,
            )
            self.renderer.render_error(surface, exc.message)
            return

        if self._is_stale(token):
            logger.debug("symbol_search_stale_response_discarded", token=token, latest=self._latest_token)
            return

        if not items:
            self.renderer.render_empty(surface)
            return

        if self.on_results is not None:
            self.on_results(items)
        self.renderer.render_result_list(surface, items, store)
        logger.info("symbol_search_rendered", token=token, count=len(items))
