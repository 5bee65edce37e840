"""Pydantic schemas for API request and response validation."""

from api.schemas.common import ErrorResponse
from api.schemas.movie import (
    CastMemberItem,
    CollectionResponse,
    CreditsResponse,
    MovieItem,
    ReviewItem,
    ReviewsResponse,
    VideoItem,
    VideosResponse,
)
from api.schemas.search import SearchResponse
from api.schemas.bookmark import (
    BookmarkIn,
    BookmarkItem,
    BookmarkListResponse,
    BookmarkStatus,
    BookmarkToggle,
)

__all__ = [
    # Common
    "ErrorResponse",
    # Movie
    "CastMemberItem",
    "CollectionResponse",
    "CreditsResponse",
    "MovieItem",
    "ReviewItem",
    "ReviewsResponse",
    "VideoItem",
    "VideosResponse",
    # Search
    "SearchResponse",
    # Bookmark
    "BookmarkIn",
    "BookmarkItem",
    "BookmarkListResponse",
    "BookmarkStatus",
    "BookmarkToggle",
]
