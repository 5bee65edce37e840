"""
Bookmark coordinators: the seam between callers and the bookmark store.
"""

from typing import AsyncIterator, List

from .database import BookmarkStore
from .errors import CatalogError
from .models import BookmarkedMovie, Movie
from .state import Success, UiState, from_exception
from .utils import setup_logger


def as_bookmark(movie) -> BookmarkedMovie:
    """Accept either a Movie or a BookmarkedMovie."""
    if isinstance(movie, Movie):
        return movie.to_bookmark()
    return movie


class BookmarkToggleCoordinator:
    """Pass-through to ``BookmarkStore.toggle`` that reports failures as state."""

    def __init__(self, store: BookmarkStore):
        self.store = store
        self.logger = setup_logger("bookmarks", store.config.log_dir)

    async def toggle(self, movie, currently_bookmarked: bool) -> UiState:
        """
        Flip the bookmark for ``movie`` according to the caller's flag.

        Returns:
            Success(new_status) or Error(kind=persistence)
        """
        bookmark = as_bookmark(movie)
        try:
            new_status = await self.store.toggle(bookmark, currently_bookmarked)
        except CatalogError as e:
            self.logger.error(f"Toggle failed for movie_id={bookmark.id}: {e.message}")
            return from_exception(e)
        return Success(new_status)


class BookmarkCoordinator:
    """
    Bookmark list screen concern.

    Exposes the observable bookmark list plus add/remove/toggle actions,
    each returning a UiState so persistence failures reach the caller.
    """

    def __init__(self, store: BookmarkStore):
        self.store = store
        self.toggler = BookmarkToggleCoordinator(store)
        self.logger = self.toggler.logger

    @property
    def bookmarked_movies(self) -> List[BookmarkedMovie]:
        return self.store.bookmarks

    def observe_bookmarks(self) -> AsyncIterator[List[BookmarkedMovie]]:
        return self.store.observe_all()

    def observe_is_bookmarked(self, movie_id: int) -> AsyncIterator[bool]:
        return self.store.observe_is_bookmarked(movie_id)

    def is_bookmarked(self, movie_id: int) -> bool:
        return any(b.id == movie_id for b in self.store.bookmarks)

    async def add_bookmark(self, movie) -> UiState:
        bookmark = as_bookmark(movie)
        try:
            await self.store.add(bookmark)
        except CatalogError as e:
            self.logger.error(f"Add failed for movie_id={bookmark.id}: {e.message}")
            return from_exception(e)
        return Success(True)

    async def remove_bookmark(self, movie) -> UiState:
        bookmark = as_bookmark(movie)
        try:
            await self.store.remove(bookmark)
        except CatalogError as e:
            self.logger.error(f"Remove failed for movie_id={bookmark.id}: {e.message}")
            return from_exception(e)
        return Success(False)

    async def toggle_bookmark(self, movie, currently_bookmarked: bool) -> UiState:
        return await self.toggler.toggle(movie, currently_bookmarked)
