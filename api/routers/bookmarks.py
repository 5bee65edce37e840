"""
Bookmark endpoints.

Bookmarks are stored locally and keyed by TMDB movie id.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_bookmark_store
from api.exceptions import DatabaseError, raise_for_state
from api.schemas.bookmark import (
    BookmarkIn,
    BookmarkItem,
    BookmarkListResponse,
    BookmarkStatus,
    BookmarkToggle,
)
from catalog_sync.bookmarks import BookmarkCoordinator
from catalog_sync.database import BookmarkStore
from catalog_sync.errors import PersistenceError
from catalog_sync.models import BookmarkedMovie

router = APIRouter()
logger = logging.getLogger("catalog_api.bookmarks")


@router.get("/bookmarks", response_model=BookmarkListResponse)
async def list_bookmarks(
    store: BookmarkStore = Depends(get_bookmark_store),
):
    """Get all bookmarked movies in the order they were added."""
    try:
        bookmarks = store.get_all()
    except PersistenceError as e:
        raise DatabaseError(e.message)

    return BookmarkListResponse(
        data=[BookmarkItem.from_bookmark(b) for b in bookmarks],
        total=len(bookmarks),
    )


@router.get("/bookmarks/{movie_id}", response_model=BookmarkStatus)
async def get_bookmark_status(
    movie_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
):
    try:
        bookmarked = store.is_bookmarked(movie_id)
    except PersistenceError as e:
        raise DatabaseError(e.message)
    return BookmarkStatus(movie_id=movie_id, bookmarked=bookmarked)


@router.put("/bookmarks/{movie_id}", response_model=BookmarkStatus)
async def add_bookmark(
    movie_id: int,
    request: BookmarkIn,
    store: BookmarkStore = Depends(get_bookmark_store),
):
    """Bookmark a movie. Re-adding replaces the stored values."""
    state = await BookmarkCoordinator(store).add_bookmark(request.to_bookmark(movie_id))
    raise_for_state(state)
    logger.info(f"Bookmark add: movie_id={movie_id}")
    return BookmarkStatus(movie_id=movie_id, bookmarked=True)


@router.delete("/bookmarks/{movie_id}", response_model=BookmarkStatus)
async def remove_bookmark(
    movie_id: int,
    store: BookmarkStore = Depends(get_bookmark_store),
):
    """Remove a bookmark. Removing a movie that is not bookmarked is a no-op."""
    state = await BookmarkCoordinator(store).remove_bookmark(
        BookmarkedMovie(id=movie_id, title="")
    )
    raise_for_state(state)
    logger.info(f"Bookmark remove: movie_id={movie_id}")
    return BookmarkStatus(movie_id=movie_id, bookmarked=False)


@router.post("/bookmarks/{movie_id}/toggle", response_model=BookmarkStatus)
async def toggle_bookmark(
    movie_id: int,
    request: BookmarkToggle,
    store: BookmarkStore = Depends(get_bookmark_store),
):
    """
    Flip a bookmark based on the caller's view of the current status.

    The flag is trusted as sent: toggling with a stale
    ``currently_bookmarked`` repeats the add or remove.
    """
    state = await BookmarkCoordinator(store).toggle_bookmark(
        request.movie.to_bookmark(movie_id),
        request.currently_bookmarked,
    )
    raise_for_state(state)
    return BookmarkStatus(movie_id=movie_id, bookmarked=state.data)
