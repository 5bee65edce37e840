"""
Search endpoint.
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_catalog_cache, get_config, get_repository
from api.exceptions import raise_for_state
from api.schemas.movie import MovieItem
from api.schemas.search import SearchResponse
from catalog_sync.cache import CatalogCache
from catalog_sync.config import Config
from catalog_sync.repository import MovieRepository
from catalog_sync.search import SearchCoordinator

router = APIRouter()


@router.get("/search", response_model=SearchResponse)
async def search_movies(
    q: str = Query(..., min_length=1, description="Search query"),
    repository: MovieRepository = Depends(get_repository),
    cache: CatalogCache = Depends(get_catalog_cache),
    config: Config = Depends(get_config),
):
    """
    Search movies by title.

    Remote results win. If the remote search fails, matches from the
    collections loaded so far are returned instead.
    """
    coordinator = SearchCoordinator(repository, cache, config, debounce_seconds=0)
    try:
        coordinator.update_query(q)
        await coordinator.wait_idle()
        state = coordinator.results.value
    finally:
        coordinator.close()

    raise_for_state(state)

    movies = [MovieItem.from_movie(m) for m in state.data]
    return SearchResponse(query=q.strip(), data=movies, returned=len(movies))
