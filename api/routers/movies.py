"""
Movie endpoints: collections, details, credits, reviews and videos.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_catalog_cache, get_config, get_repository
from api.exceptions import raise_for_state
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
from catalog_sync.cache import CatalogCache
from catalog_sync.catalog import CatalogCoordinator
from catalog_sync.config import Config
from catalog_sync.models import CollectionKind
from catalog_sync.repository import MovieRepository

router = APIRouter()


@router.get("/collections/{kind}", response_model=CollectionResponse)
async def get_collection(
    kind: CollectionKind,
    page: int = Query(1, ge=1, description="Page number"),
    repository: MovieRepository = Depends(get_repository),
    cache: CatalogCache = Depends(get_catalog_cache),
    config: Config = Depends(get_config),
):
    """
    Get one page of a named collection.

    A successful first page also refreshes the snapshot local search uses.
    """
    catalog = CatalogCoordinator(repository, config, cache=cache)
    if page == 1:
        state = await catalog.load_collection(kind)
    else:
        state = await repository.terminal(repository.collection(kind, page))
    raise_for_state(state)

    return CollectionResponse(
        kind=kind.value,
        page=page,
        data=[MovieItem.from_movie(m) for m in state.data],
    )


@router.get("/movies/{movie_id}", response_model=MovieItem)
async def get_movie(
    movie_id: int,
    repository: MovieRepository = Depends(get_repository),
):
    """Get full details for a movie, including genres and runtime."""
    state = await repository.terminal(repository.details(movie_id))
    raise_for_state(state, "Movie", movie_id)
    return MovieItem.from_movie(state.data)


@router.get("/movies/{movie_id}/credits", response_model=CreditsResponse)
async def get_movie_credits(
    movie_id: int,
    repository: MovieRepository = Depends(get_repository),
):
    state = await repository.terminal(repository.credits(movie_id))
    raise_for_state(state, "Movie", movie_id)
    return CreditsResponse(
        movie_id=movie_id,
        cast=[CastMemberItem.from_cast(c) for c in state.data],
    )


@router.get("/movies/{movie_id}/reviews", response_model=ReviewsResponse)
async def get_movie_reviews(
    movie_id: int,
    page: int = Query(1, ge=1, description="Page number"),
    repository: MovieRepository = Depends(get_repository),
):
    state = await repository.terminal(repository.reviews(movie_id, page))
    raise_for_state(state, "Movie", movie_id)
    return ReviewsResponse(
        movie_id=movie_id,
        page=page,
        data=[ReviewItem.from_review(r) for r in state.data],
    )


@router.get("/movies/{movie_id}/videos", response_model=VideosResponse)
async def get_movie_videos(
    movie_id: int,
    repository: MovieRepository = Depends(get_repository),
):
    """YouTube videos only, trailers first."""
    state = await repository.terminal(repository.videos(movie_id))
    raise_for_state(state, "Movie", movie_id)
    return VideosResponse(
        movie_id=movie_id,
        data=[VideoItem.from_video(v) for v in state.data],
    )
