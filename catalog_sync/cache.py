"""
In-memory snapshot of the latest successful fetch per collection.

Seeds local search so it can answer without a network round trip.
Never persisted and never authoritative: a fresh fetch replaces the
snapshot, a failed fetch empties it.
"""

from typing import Dict, List, Sequence, Tuple

from .models import CollectionKind, Movie

# Order local search walks the snapshots in
SEARCH_ORDER = (
    CollectionKind.now_playing,
    CollectionKind.upcoming,
    CollectionKind.top_rated,
    CollectionKind.popular,
)


class CatalogCache:
    """Holds at most one snapshot per collection kind."""

    def __init__(self):
        self._snapshots: Dict[CollectionKind, Tuple[Movie, ...]] = {}

    def update(self, kind: CollectionKind, movies: Sequence[Movie]) -> None:
        self._snapshots[CollectionKind(kind)] = tuple(movies)

    def invalidate(self, kind: CollectionKind) -> None:
        self._snapshots.pop(CollectionKind(kind), None)

    def snapshot(self, kind: CollectionKind) -> List[Movie]:
        return list(self._snapshots.get(CollectionKind(kind), ()))

    def all_movies(self) -> List[Movie]:
        movies: List[Movie] = []
        for kind in SEARCH_ORDER:
            movies.extend(self._snapshots.get(kind, ()))
        return movies

    def search_local(self, query: str) -> List[Movie]:
        """
        Case-insensitive substring match on title or overview across all
        snapshots, de-duplicated by movie id (first occurrence wins).
        """
        query = query.strip()
        if not query:
            return []

        seen_ids = set()
        matches = []
        for movie in self.all_movies():
            if movie.id in seen_ids or not movie.matches(query):
                continue
            seen_ids.add(movie.id)
            matches.append(movie)
        return matches

    def __len__(self) -> int:
        return sum(len(s) for s in self._snapshots.values())
