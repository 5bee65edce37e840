"""
Movie details screen concern: details, cast, reviews and videos for one movie.
"""

import asyncio
from typing import AsyncIterator

from .bookmarks import BookmarkToggleCoordinator
from .config import Config
from .database import BookmarkStore
from .errors import ErrorKind
from .repository import MovieRepository
from .state import LOADING, Error, StateFlow, Success, UiState
from .utils import setup_logger


class MovieDetailsCoordinator:
    """Loads everything the details screen shows for ``movie_id``."""

    def __init__(
        self,
        movie_id: int,
        repository: MovieRepository,
        store: BookmarkStore,
        config: Config,
    ):
        self.movie_id = movie_id
        self.repository = repository
        self.store = store
        self.toggler = BookmarkToggleCoordinator(store)
        self.logger = setup_logger("details", config.log_dir)

        self.details: StateFlow[UiState] = StateFlow(LOADING)
        self.cast: StateFlow[UiState] = StateFlow(LOADING)
        self.reviews: StateFlow[UiState] = StateFlow(LOADING)
        self.videos: StateFlow[UiState] = StateFlow(LOADING)

    async def _follow(self, stream: AsyncIterator[UiState], flow: StateFlow[UiState]) -> None:
        async for state in stream:
            flow.set(state)

    async def load(self) -> None:
        """Fetch details, credits, reviews and videos concurrently."""
        await asyncio.gather(
            self._follow(self.repository.details(self.movie_id), self.details),
            self._follow(self.repository.credits(self.movie_id), self.cast),
            self._follow(self.repository.reviews(self.movie_id), self.reviews),
            self._follow(self.repository.videos(self.movie_id), self.videos),
        )

    async def retry(self) -> None:
        await self.load()

    def observe_is_bookmarked(self) -> AsyncIterator[bool]:
        return self.store.observe_is_bookmarked(self.movie_id)

    async def toggle_bookmark(self) -> UiState:
        """Bookmark or unbookmark the loaded movie based on the store's current view."""
        state = self.details.value
        if not isinstance(state, Success):
            return Error("Movie details are not loaded yet", ErrorKind.unknown)

        currently_bookmarked = any(b.id == self.movie_id for b in self.store.bookmarks)
        self.logger.info(
            f"Toggle bookmark movie_id={self.movie_id} currently_bookmarked={currently_bookmarked}"
        )
        return await self.toggler.toggle(state.data, currently_bookmarked)
