"""
Shared fixtures for catalog sync tests.

Provides a fake catalog client, sample movies, an in-memory bookmark
store and a FastAPI test client wired to them.
"""

import time
from typing import Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from catalog_sync.cache import CatalogCache
from catalog_sync.config import Config
from catalog_sync.database import BookmarkStore
from catalog_sync.errors import RemoteRejectedError
from catalog_sync.models import CastMember, CollectionKind, Movie, Review, Video
from catalog_sync.repository import MovieRepository


# =============================================================================
# SAMPLE DATA
# =============================================================================

def create_sample_movie(
    movie_id: int,
    title: str,
    release_date: str = "2010-07-16",
    vote_average: float = 7.5,
    overview: Optional[str] = None,
    runtime: Optional[int] = None,
) -> Movie:
    """Create a sample Movie for testing."""
    return Movie(
        id=movie_id,
        title=title,
        poster_path=f"/poster_{movie_id}.jpg",
        backdrop_path=f"/backdrop_{movie_id}.jpg",
        overview=overview if overview is not None else f"This is the overview for {title}.",
        vote_average=vote_average,
        release_date=release_date,
        runtime=runtime,
    )


INCEPTION = create_sample_movie(27205, "Inception", "2010-07-16", 8.4, "A thief who steals corporate secrets through dreams.", 148)
FIGHT_CLUB = create_sample_movie(550, "Fight Club", "1999-10-15", 8.4)
THE_MATRIX = create_sample_movie(603, "The Matrix", "1999-03-30", 8.2)
MATRIX_RELOADED = create_sample_movie(604, "The Matrix Reloaded", "2003-05-15", 7.0)
INTERSTELLAR = create_sample_movie(157336, "Interstellar", "2014-11-05", 8.4)
DUNE = create_sample_movie(438631, "Dune", "2021-09-15", 7.8)

SAMPLE_MOVIES = [INCEPTION, FIGHT_CLUB, THE_MATRIX, MATRIX_RELOADED, INTERSTELLAR, DUNE]

SAMPLE_COLLECTIONS = {
    CollectionKind.now_playing: [DUNE, INTERSTELLAR],
    CollectionKind.upcoming: [DUNE],
    CollectionKind.top_rated: [FIGHT_CLUB, INCEPTION, THE_MATRIX],
    CollectionKind.popular: [INCEPTION, DUNE, MATRIX_RELOADED],
}

SAMPLE_VIDEOS = [
    Video(id="v1", key="k1", name="Featurette", site="YouTube", type="Featurette"),
    Video(id="v2", key="k2", name="Vimeo Trailer", site="Vimeo", type="Trailer"),
    Video(id="v3", key="k3", name="Official Trailer", site="YouTube", type="Trailer", official=True),
    Video(id="v4", key="k4", name="Clip", site="YouTube", type="Clip"),
]


# =============================================================================
# FAKE CATALOG CLIENT
# =============================================================================

class FakeCatalogClient:
    """
    Synchronous stand-in for CatalogClient backed by sample data.

    Failures are configured per method name; ``search_delays`` makes
    individual queries slow so tests can overlap them.
    """

    def __init__(self, movies: List[Movie] = None):
        self.movies: Dict[int, Movie] = {m.id: m for m in (movies or SAMPLE_MOVIES)}
        self.collections = {k: list(v) for k, v in SAMPLE_COLLECTIONS.items()}
        self.videos_by_movie: Dict[int, List[Video]] = {INCEPTION.id: list(SAMPLE_VIDEOS)}
        self.failures: Dict[str, Exception] = {}
        self.search_delays: Dict[str, float] = {}
        self.calls: List[tuple] = []
        self.connection_ok = True
        self.closed = False

    def _record(self, name: str, *args) -> None:
        self.calls.append((name,) + args)
        if name in self.failures:
            raise self.failures[name]

    def calls_to(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    def fetch_collection(self, kind: CollectionKind, page: int = 1, language: str = None) -> List[Movie]:
        kind = CollectionKind(kind)
        self._record("fetch_collection", kind, page)
        if f"fetch_collection:{kind.value}" in self.failures:
            raise self.failures[f"fetch_collection:{kind.value}"]
        return list(self.collections.get(kind, []))

    def search(self, query: str, page: int = 1, language: str = None) -> List[Movie]:
        delay = self.search_delays.get(query)
        if delay:
            time.sleep(delay)
        self._record("search", query, page)
        needle = query.lower()
        return [m for m in self.movies.values() if needle in m.title.lower()]

    def details(self, movie_id: int, language: str = None) -> Movie:
        self._record("details", movie_id)
        if movie_id not in self.movies:
            raise RemoteRejectedError(404, f"/movie/{movie_id}", "The resource you requested could not be found.")
        return self.movies[movie_id]

    def credits(self, movie_id: int) -> List[CastMember]:
        self._record("credits", movie_id)
        return [
            CastMember(id=6193, name="Leonardo DiCaprio", profile_path="/leo.jpg"),
            CastMember(id=24045, name="Joseph Gordon-Levitt"),
        ]

    def reviews(self, movie_id: int, page: int = 1, language: str = None) -> List[Review]:
        self._record("reviews", movie_id, page)
        return [Review(id="r1", author="critic", content="x" * 250)]

    def videos(self, movie_id: int) -> List[Video]:
        self._record("videos", movie_id)
        return list(self.videos_by_movie.get(movie_id, []))

    def test_connection(self) -> bool:
        return self.connection_ok

    def close(self) -> None:
        self.closed = True


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def config(tmp_path):
    """Config with an in-memory bookmark store and no debounce delay."""
    return Config(
        bearer_token="test-token",
        base_url="https://api.example.test/3",
        bookmark_db_path=":memory:",
        search_debounce_ms=0,
        project_dir=tmp_path,
        log_dir=tmp_path / "logs",
    )


@pytest.fixture
def fake_client():
    return FakeCatalogClient()


@pytest.fixture
def repository(fake_client, config):
    return MovieRepository(fake_client, config)


@pytest.fixture
def cache():
    return CatalogCache()


@pytest.fixture
def store(config):
    """Fresh in-memory bookmark store for each test."""
    store = BookmarkStore(config)
    yield store
    store.dispose()


@pytest.fixture
def api_client(config, fake_client, repository, cache, store):
    """Provide FastAPI test client with faked dependencies."""
    from api.main import app
    from api import dependencies

    app.dependency_overrides[dependencies.get_config] = lambda: config
    app.dependency_overrides[dependencies.get_catalog_client] = lambda: fake_client
    app.dependency_overrides[dependencies.get_repository] = lambda: repository
    app.dependency_overrides[dependencies.get_catalog_cache] = lambda: cache
    app.dependency_overrides[dependencies.get_bookmark_store] = lambda: store

    with TestClient(app) as client:
        yield client

    # Clean up overrides
    app.dependency_overrides.clear()
