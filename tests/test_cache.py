"""
Collection cache and local search tests.
"""

from catalog_sync.cache import CatalogCache
from catalog_sync.models import CollectionKind

from conftest import DUNE, FIGHT_CLUB, INCEPTION, THE_MATRIX


def test_local_search_dedupes_across_collections():
    cache = CatalogCache()
    cache.update(CollectionKind.popular, [INCEPTION, DUNE])
    cache.update(CollectionKind.top_rated, [INCEPTION, FIGHT_CLUB])

    matches = cache.search_local("incep")

    assert matches == [INCEPTION]


def test_local_search_walks_collections_in_order():
    cache = CatalogCache()
    cache.update(CollectionKind.popular, [THE_MATRIX])
    cache.update(CollectionKind.now_playing, [DUNE])

    # Both overviews contain "overview"
    assert cache.search_local("overview") == [DUNE, THE_MATRIX]


def test_blank_query_matches_nothing():
    cache = CatalogCache()
    cache.update(CollectionKind.popular, [INCEPTION])

    assert cache.search_local("  ") == []


def test_update_replaces_and_invalidate_drops():
    cache = CatalogCache()
    cache.update(CollectionKind.popular, [INCEPTION, DUNE])
    cache.update(CollectionKind.popular, [FIGHT_CLUB])

    assert cache.snapshot(CollectionKind.popular) == [FIGHT_CLUB]
    assert len(cache) == 1

    cache.invalidate(CollectionKind.popular)

    assert cache.snapshot(CollectionKind.popular) == []
    assert len(cache) == 0
