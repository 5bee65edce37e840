"""
Movie repository: async state streams over the catalog client.

Each stream emits Loading first and then exactly one terminal
Success or Error. The blocking client runs in a worker thread so the
event loop stays responsive while requests are in flight.
"""

import asyncio
from typing import AsyncIterator, Callable, List, Optional, Sequence, TypeVar

from .client import CatalogClient
from .config import Config
from .errors import CatalogError
from .models import CastMember, CollectionKind, Movie, Review, Video
from .state import LOADING, Success, UiState, from_exception
from .utils import setup_logger

T = TypeVar("T")

MAX_SEARCH_RESULTS = 20
MAX_VIDEOS = 10


def rank_videos(videos: Sequence[Video], limit: int = MAX_VIDEOS) -> List[Video]:
    """
    Keep YouTube videos only, trailers first, capped at ``limit``.

    ``sorted`` is stable, so videos keep their remote order within the
    trailer and non-trailer buckets.
    """
    youtube = [v for v in videos if v.is_youtube]
    ranked = sorted(youtube, key=lambda v: not v.is_trailer)
    return ranked[:limit]


def cap_search_results(movies: Sequence[Movie], limit: int = MAX_SEARCH_RESULTS) -> List[Movie]:
    """Keep the first ``limit`` results in the order the remote returned them."""
    return list(movies[:limit])


class MovieRepository:
    """
    Projects catalog client calls into UiState streams.

    Responsibilities:
    - Run blocking client calls off the event loop
    - Emit Loading before every terminal state
    - Apply search capping and video ranking
    """

    def __init__(self, client: CatalogClient, config: Config):
        self.client = client
        self.config = config
        self.logger = setup_logger("repository", config.log_dir)

    async def _call(self, func: Callable[..., T], *args) -> T:
        if asyncio.iscoroutinefunction(func):
            return await func(*args)
        return await asyncio.to_thread(func, *args)

    async def _stream(self, label: str, func: Callable[..., T], *args) -> AsyncIterator[UiState]:
        yield LOADING
        try:
            result = await self._call(func, *args)
        except CatalogError as e:
            self.logger.warning(f"{label} failed: {e.message}")
            yield from_exception(e)
            return
        except Exception as e:
            self.logger.error(f"{label} failed unexpectedly: {e}")
            yield from_exception(e)
            return
        yield Success(result)

    # ============ ONE-SHOT CALLS (raise on failure) ============

    async def search_once(self, query: str, page: int = 1) -> List[Movie]:
        """Run a remote search and cap the results. Raises CatalogError."""
        clean_query = query.strip()
        if not clean_query:
            return []
        movies = await self._call(self.client.search, clean_query, page)
        return cap_search_results(movies, self.config.max_search_results)

    async def videos_once(self, movie_id: int) -> List[Video]:
        videos = await self._call(self.client.videos, movie_id)
        return rank_videos(videos, self.config.max_videos)

    # ============ STATE STREAMS ============

    def collection(self, kind: CollectionKind, page: int = 1) -> AsyncIterator[UiState]:
        kind = CollectionKind(kind)
        return self._stream(f"Fetch {kind.value}", self.client.fetch_collection, kind, page)

    def search(self, query: str, page: int = 1) -> AsyncIterator[UiState]:
        return self._stream(f"Search '{query}'", self.search_once, query, page)

    def details(self, movie_id: int) -> AsyncIterator[UiState]:
        return self._stream(f"Details {movie_id}", self.client.details, movie_id)

    def credits(self, movie_id: int) -> AsyncIterator[UiState]:
        return self._stream(f"Credits {movie_id}", self.client.credits, movie_id)

    def reviews(self, movie_id: int, page: int = 1) -> AsyncIterator[UiState]:
        return self._stream(f"Reviews {movie_id}", self.client.reviews, movie_id, page)

    def videos(self, movie_id: int) -> AsyncIterator[UiState]:
        return self._stream(f"Videos {movie_id}", self.videos_once, movie_id)

    async def terminal(self, stream: AsyncIterator[UiState]) -> UiState:
        """Drain a stream and return its terminal state."""
        state: Optional[UiState] = None
        async for state in stream:
            pass
        return state
