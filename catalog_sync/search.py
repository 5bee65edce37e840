"""
Search coordinator: debounced remote search merged with local matches.

Flow for every query edit:
- the raw query is echoed immediately on ``query``
- after the debounce window, a changed (trimmed) query supersedes any
  in-flight search
- matches from the catalog cache are published right away, then
  replaced by the remote answer when it lands
- if the remote search fails, local matches are kept when there are
  any; otherwise an Error is published

Each dispatched search gets a generation number. A search whose
generation is no longer current never publishes, even if its worker
thread finishes after the cancellation.
"""

import asyncio
from typing import List, Optional

from .cache import CatalogCache
from .config import Config
from .models import Movie
from .repository import MovieRepository
from .state import LOADING, StateFlow, Success, UiState, from_exception
from .utils import setup_logger


class SearchCoordinator:
    """
    Owns the current query and the current search state.

    Must be driven from a running event loop: ``update_query`` schedules
    the debounce timer as a task on it.
    """

    def __init__(
        self,
        repository: MovieRepository,
        cache: CatalogCache,
        config: Config,
        debounce_seconds: Optional[float] = None,
    ):
        self.repository = repository
        self.cache = cache
        self.config = config
        self.debounce_seconds = (
            config.search_debounce_seconds if debounce_seconds is None else debounce_seconds
        )
        self.logger = setup_logger("search", config.log_dir)

        self.query: StateFlow[str] = StateFlow("")
        self.results: StateFlow[UiState] = StateFlow(Success([]))

        self._debounce_task: Optional[asyncio.Task] = None
        self._search_task: Optional[asyncio.Task] = None
        self._last_debounced = ""
        self._generation = 0

    # ============ CALLER ACTIONS ============

    def update_query(self, query: str) -> None:
        """Echo the query and (re)start the debounce window."""
        self.query.set(query)
        self._cancel_debounce()

        if not query.strip():
            # Blank input takes effect at once
            self._on_debounced("")
            return

        self._debounce_task = asyncio.get_running_loop().create_task(self._debounce(query))

    def clear(self) -> None:
        """Reset the query and drop all pending and in-flight work."""
        self._cancel_debounce()
        self._generation += 1
        self._cancel_search()
        self._last_debounced = ""
        self.query.set("")
        self.results.set(Success([]))

    def retry(self) -> None:
        """Re-run the last debounced query, bypassing de-duplication."""
        self._dispatch(self._last_debounced)

    def close(self) -> None:
        self._cancel_debounce()
        self._generation += 1
        self._cancel_search()

    async def wait_idle(self) -> None:
        """Wait until no debounce timer or search is pending."""
        while True:
            pending = [
                t for t in (self._debounce_task, self._search_task)
                if t is not None and not t.done()
            ]
            if not pending:
                return
            await asyncio.wait(pending)

    @property
    def generation(self) -> int:
        return self._generation

    # ============ INTERNALS ============

    def _cancel_debounce(self) -> None:
        if self._debounce_task is not None and not self._debounce_task.done():
            self._debounce_task.cancel()
        self._debounce_task = None

    def _cancel_search(self) -> None:
        if self._search_task is not None and not self._search_task.done():
            self.logger.debug("Cancelling superseded search")
            self._search_task.cancel()
        self._search_task = None

    async def _debounce(self, query: str) -> None:
        await asyncio.sleep(self.debounce_seconds)
        self._on_debounced(query.strip())

    def _on_debounced(self, query: str) -> None:
        if query == self._last_debounced:
            return
        self._last_debounced = query
        self._dispatch(query)

    def _dispatch(self, query: str) -> None:
        self._generation += 1
        self._cancel_search()

        if not query:
            self.results.set(Success([]))
            return

        self._search_task = asyncio.get_running_loop().create_task(
            self._perform_search(query, self._generation)
        )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    def _local_matches(self, query: str) -> List[Movie]:
        try:
            return self.cache.search_local(query)[: self.config.max_search_results]
        except Exception as e:
            # Remote search still runs and decides the terminal state
            self.logger.error(f"Local search for '{query}' failed: {e}")
            return []

    async def _perform_search(self, query: str, generation: int) -> None:
        self.results.set(LOADING)

        local_results = self._local_matches(query)
        if local_results:
            self.results.set(Success(local_results))

        try:
            remote_results = await self.repository.search_once(query)
        except Exception as e:
            if not self._is_current(generation):
                return
            if local_results:
                self.logger.warning(
                    f"Remote search for '{query}' failed, keeping {len(local_results)} local results: {e}"
                )
                self.results.set(Success(local_results))
            else:
                self.logger.warning(f"Remote search for '{query}' failed: {e}")
                self.results.set(from_exception(e))
            return

        if not self._is_current(generation):
            self.logger.debug(f"Discarding stale results for '{query}'")
            return
        self.results.set(Success(remote_results))
