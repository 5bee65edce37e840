"""
Catalog sync - movie catalog and bookmark synchronization layer.

This package provides:
- A TMDB client for movie collections, search, details, credits,
  reviews and videos
- Loading/Success/Error state envelopes for every remote call
- Debounced search merging cached and remote results
- A SQLite bookmark store with observable changes
"""

from .config import Config
from .errors import (
    CatalogError,
    DecodeError,
    ErrorKind,
    PersistenceError,
    RemoteRejectedError,
    TransportError,
)
from .models import BookmarkedMovie, CastMember, CollectionKind, Movie, Review, Video
from .state import Error, Loading, StateFlow, Success, UiState
from .client import CatalogClient
from .cache import CatalogCache
from .database import BookmarkStore
from .repository import MovieRepository, cap_search_results, rank_videos
from .search import SearchCoordinator
from .bookmarks import BookmarkCoordinator, BookmarkToggleCoordinator
from .catalog import CatalogCoordinator
from .details import MovieDetailsCoordinator

__version__ = "1.0.0"
__all__ = [
    "Config",
    "CatalogError",
    "DecodeError",
    "ErrorKind",
    "PersistenceError",
    "RemoteRejectedError",
    "TransportError",
    "BookmarkedMovie",
    "CastMember",
    "CollectionKind",
    "Movie",
    "Review",
    "Video",
    "Error",
    "Loading",
    "StateFlow",
    "Success",
    "UiState",
    "CatalogClient",
    "CatalogCache",
    "BookmarkStore",
    "MovieRepository",
    "cap_search_results",
    "rank_videos",
    "SearchCoordinator",
    "BookmarkCoordinator",
    "BookmarkToggleCoordinator",
    "CatalogCoordinator",
    "MovieDetailsCoordinator",
]
