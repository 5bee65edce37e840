"""
Dependency injection for the API.

Provides dependencies for configuration, the catalog client, the
shared collection cache and the bookmark store.
"""

from functools import lru_cache

from catalog_sync.cache import CatalogCache
from catalog_sync.client import CatalogClient
from catalog_sync.config import Config
from catalog_sync.database import BookmarkStore
from catalog_sync.repository import MovieRepository


@lru_cache()
def get_config() -> Config:
    """Get cached configuration instance."""
    return Config.from_env()


@lru_cache()
def get_catalog_client() -> CatalogClient:
    """Get cached CatalogClient instance."""
    return CatalogClient(get_config())


@lru_cache()
def get_repository() -> MovieRepository:
    """Get cached MovieRepository instance."""
    return MovieRepository(get_catalog_client(), get_config())


@lru_cache()
def get_catalog_cache() -> CatalogCache:
    """Collection snapshots shared by every request, seeding local search."""
    return CatalogCache()


@lru_cache()
def get_bookmark_store() -> BookmarkStore:
    """Get cached BookmarkStore instance."""
    return BookmarkStore(get_config())
