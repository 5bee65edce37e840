"""
Movie-related Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from catalog_sync.models import CastMember, Movie, Review, Video


class MovieItem(BaseModel):
    """Movie as shown in lists, search results and details."""

    id: int
    title: str
    poster_path: str = ""
    backdrop_path: str = ""
    overview: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    genres: List[str] = []
    runtime: Optional[int] = None

    @classmethod
    def from_movie(cls, movie: Movie) -> "MovieItem":
        return cls(**movie.to_dict())


class CollectionResponse(BaseModel):
    """One page of a named collection."""

    kind: str
    page: int = Field(..., ge=1)
    data: List[MovieItem] = []


class CastMemberItem(BaseModel):
    """Cast member summary."""

    id: int
    name: str
    profile_path: Optional[str] = None

    @classmethod
    def from_cast(cls, member: CastMember) -> "CastMemberItem":
        return cls(**member.to_dict())


class CreditsResponse(BaseModel):
    """Cast list for a movie."""

    movie_id: int
    cast: List[CastMemberItem] = []


class ReviewItem(BaseModel):
    """Review with a short preview for list display."""

    id: str
    author: str
    content: str
    preview: str

    @classmethod
    def from_review(cls, review: Review) -> "ReviewItem":
        return cls(preview=review.preview(), **review.to_dict())


class ReviewsResponse(BaseModel):
    """One page of reviews for a movie."""

    movie_id: int
    page: int = Field(..., ge=1)
    data: List[ReviewItem] = []


class VideoItem(BaseModel):
    """Playable video reference."""

    id: str
    key: str
    name: str
    site: str
    type: str
    official: bool = False

    @classmethod
    def from_video(cls, video: Video) -> "VideoItem":
        return cls(**video.to_dict())


class VideosResponse(BaseModel):
    """YouTube videos for a movie, trailers first."""

    movie_id: int
    data: List[VideoItem] = []
