"""
Bookmark-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_sync.models import BookmarkedMovie


class BookmarkIn(BaseModel):
    """Movie values to persist as a bookmark."""

    title: str = Field(..., min_length=1)
    poster_path: str = ""
    vote_average: float = Field(0.0, ge=0, le=10)
    release_date: str = ""
    runtime: Optional[int] = Field(None, ge=0)

    def to_bookmark(self, movie_id: int) -> BookmarkedMovie:
        return BookmarkedMovie(id=movie_id, **self.model_dump())


class BookmarkToggle(BaseModel):
    """Toggle request. The caller's view of the current status is trusted."""

    currently_bookmarked: bool
    movie: BookmarkIn


class BookmarkItem(BaseModel):
    """Persisted bookmark with display helpers."""

    id: int
    title: str
    poster_path: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    runtime: Optional[int] = None
    formatted_rating: str
    year: str
    runtime_formatted: str

    @classmethod
    def from_bookmark(cls, bookmark: BookmarkedMovie) -> "BookmarkItem":
        return cls(
            formatted_rating=bookmark.formatted_rating,
            year=bookmark.year,
            runtime_formatted=bookmark.runtime_formatted,
            **bookmark.to_dict(),
        )


class BookmarkListResponse(BaseModel):
    """All bookmarks."""

    data: List[BookmarkItem] = []
    total: int = 0


class BookmarkStatus(BaseModel):
    """Bookmark status for one movie."""

    movie_id: int
    bookmarked: bool
