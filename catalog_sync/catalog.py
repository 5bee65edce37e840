"""
Home screen concern: the four movie collections plus search.
"""

import asyncio
from typing import Dict, Iterable, Optional

from .cache import CatalogCache
from .config import Config
from .models import CollectionKind
from .repository import MovieRepository
from .search import SearchCoordinator
from .state import LOADING, StateFlow, Success, UiState
from .utils import setup_logger


class CatalogCoordinator:
    """
    Tracks one UiState per collection kind and owns the search coordinator.

    Collection fetches are independent: they run concurrently and each
    one's Loading/Success/Error is tracked separately. Successful
    fetches refresh the cache that seeds local search; failed ones
    empty that kind's snapshot.
    """

    def __init__(
        self,
        repository: MovieRepository,
        config: Config,
        cache: Optional[CatalogCache] = None,
        search: Optional[SearchCoordinator] = None,
    ):
        self.repository = repository
        self.config = config
        self.cache = cache if cache is not None else CatalogCache()
        self.search = search or SearchCoordinator(repository, self.cache, config)
        self.logger = setup_logger("catalog", config.log_dir)

        self.collections: Dict[CollectionKind, StateFlow[UiState]] = {
            kind: StateFlow(LOADING) for kind in CollectionKind
        }

    # Named accessors matching the home screen sections

    @property
    def now_playing(self) -> StateFlow[UiState]:
        return self.collections[CollectionKind.now_playing]

    @property
    def upcoming(self) -> StateFlow[UiState]:
        return self.collections[CollectionKind.upcoming]

    @property
    def top_rated(self) -> StateFlow[UiState]:
        return self.collections[CollectionKind.top_rated]

    @property
    def popular(self) -> StateFlow[UiState]:
        return self.collections[CollectionKind.popular]

    async def load_collection(self, kind: CollectionKind, page: int = 1) -> UiState:
        """Fetch one collection, publishing every state it passes through."""
        kind = CollectionKind(kind)
        flow = self.collections[kind]
        state: UiState = LOADING
        async for state in self.repository.collection(kind, page):
            flow.set(state)

        if isinstance(state, Success):
            self.cache.update(kind, state.data)
            self.logger.info(f"Loaded {len(state.data)} movies for {kind.value}")
        else:
            self.cache.invalidate(kind)
        return state

    async def load_all(self, kinds: Optional[Iterable[CollectionKind]] = None) -> Dict[CollectionKind, UiState]:
        """Fetch collections concurrently. Returns the terminal state per kind."""
        kinds = list(kinds or CollectionKind)
        states = await asyncio.gather(*(self.load_collection(kind) for kind in kinds))
        return dict(zip(kinds, states))

    async def retry(self) -> Dict[CollectionKind, UiState]:
        return await self.load_all()

    # ============ SEARCH PASS-THROUGHS ============

    @property
    def search_query(self) -> StateFlow[str]:
        return self.search.query

    @property
    def search_results(self) -> StateFlow[UiState]:
        return self.search.results

    def update_search_query(self, query: str) -> None:
        self.search.update_query(query)

    def clear_search(self) -> None:
        self.search.clear()

    def retry_search(self) -> None:
        self.search.retry()

    def close(self) -> None:
        self.search.close()
