"""
Bookmark store for the catalog sync layer.

Handles all local persistence:
- Connection management with SQLAlchemy (SQLite)
- Upsert/delete/existence checks on the bookmarked_movies table
- Change notification so observers re-receive the full list
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, List, Optional, Tuple

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from .config import Config
from .errors import PersistenceError
from .models import BookmarkedMovie
from .state import StateFlow
from .utils import setup_logger


class BookmarkStore:
    """
    Owns the persisted bookmark rows.

    Responsibilities:
    - Table creation
    - Upsert/delete by movie id, serialized per id
    - Observable full list and per-id bookmark status

    Reads are synchronous and cheap. Mutations are coroutines: the SQL
    runs in a worker thread, then the observable snapshot is refreshed
    on the event loop.
    """

    TABLE = "bookmarked_movies"

    def __init__(self, config: Config, engine: Optional[Engine] = None):
        self.config = config
        self.engine = engine or self._create_engine()
        self.logger = setup_logger("bookmark_store", config.log_dir)
        # movie id -> (lock, number of holders and waiters)
        self._locks: Dict[int, Tuple[asyncio.Lock, int]] = {}
        self._write_version = 0
        self._applied_version = 0
        self.create_tables()
        self._bookmarks: StateFlow[List[BookmarkedMovie]] = StateFlow(self.get_all())

    def _create_engine(self) -> Engine:
        """Create SQLAlchemy engine for the SQLite bookmark file."""
        url = self.config.get_db_url()
        connect_args = {"check_same_thread": False}
        if url == "sqlite://":
            # One shared connection, otherwise every thread sees its own empty database
            return create_engine(url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(url, connect_args=connect_args, pool_pre_ping=True)

    def _execute(self, query: str, params: dict = None) -> list:
        """Execute a query and return results."""
        try:
            with self.engine.connect() as conn:
                result = conn.execute(text(query), params or {})
                rows = result.mappings().fetchall() if result.returns_rows else []
                conn.commit()
                return rows
        except SQLAlchemyError as e:
            self.logger.error(f"Bookmark store query failed: {e}")
            raise PersistenceError(f"Bookmark store unavailable: {e}")

    # ============ SETUP ============

    def create_tables(self) -> None:
        """Create the bookmarked_movies table if missing."""
        self._execute(f"""
            CREATE TABLE IF NOT EXISTS {self.TABLE} (
                id INTEGER PRIMARY KEY,
                title TEXT NOT NULL,
                poster_path TEXT NOT NULL DEFAULT '',
                vote_average REAL NOT NULL DEFAULT 0,
                release_date TEXT NOT NULL DEFAULT '',
                runtime INTEGER
            )
        """)

    def table_exists(self) -> bool:
        result = self._execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = :name",
            {"name": self.TABLE},
        )
        return len(result) > 0

    # ============ READS ============

    def get_all(self) -> List[BookmarkedMovie]:
        """Get every bookmark, in insertion order."""
        rows = self._execute(f"SELECT * FROM {self.TABLE} ORDER BY rowid")
        return [BookmarkedMovie.from_row(row) for row in rows]

    def get(self, movie_id: int) -> Optional[BookmarkedMovie]:
        rows = self._execute(
            f"SELECT * FROM {self.TABLE} WHERE id = :id",
            {"id": movie_id},
        )
        return BookmarkedMovie.from_row(rows[0]) if rows else None

    def is_bookmarked(self, movie_id: int) -> bool:
        """Check if a movie id is bookmarked."""
        rows = self._execute(
            f"SELECT EXISTS(SELECT 1 FROM {self.TABLE} WHERE id = :id) AS present",
            {"id": movie_id},
        )
        return bool(rows[0]["present"])

    def count(self) -> int:
        rows = self._execute(f"SELECT COUNT(*) AS cnt FROM {self.TABLE}")
        return rows[0]["cnt"]

    # ============ OBSERVATION ============

    @property
    def bookmarks(self) -> List[BookmarkedMovie]:
        """Latest snapshot seen by observers."""
        return self._bookmarks.value

    def observe_all(self) -> AsyncIterator[List[BookmarkedMovie]]:
        """Current full list immediately, then the full list after every change."""
        return self._bookmarks.subscribe()

    async def observe_is_bookmarked(self, movie_id: int) -> AsyncIterator[bool]:
        """Bookmark status for one id, re-evaluated on every change."""
        last = None
        async for bookmarks in self._bookmarks.subscribe():
            present = any(b.id == movie_id for b in bookmarks)
            if present != last:
                last = present
                yield present

    async def _refresh(self) -> None:
        # Concurrent mutations on different ids may finish their reads out of order
        self._write_version += 1
        version = self._write_version
        bookmarks = await asyncio.to_thread(self.get_all)
        if version > self._applied_version:
            self._applied_version = version
            self._bookmarks.set(bookmarks)

    # ============ MUTATIONS ============

    @asynccontextmanager
    async def _locked(self, movie_id: int):
        """Serialize mutations on one id; the lock is dropped once nobody holds or awaits it."""
        lock, users = self._locks.get(movie_id, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[movie_id] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[movie_id]
            if users == 1:
                del self._locks[movie_id]
            else:
                self._locks[movie_id] = (lock, users - 1)

    def _upsert(self, movie: BookmarkedMovie) -> None:
        movie_dict = movie.to_dict()
        columns = ", ".join(movie_dict.keys())
        placeholders = ", ".join(f":{k}" for k in movie_dict.keys())
        self._execute(
            f"INSERT OR REPLACE INTO {self.TABLE} ({columns}) VALUES ({placeholders})",
            movie_dict,
        )

    def _delete(self, movie_id: int) -> None:
        self._execute(f"DELETE FROM {self.TABLE} WHERE id = :id", {"id": movie_id})

    async def add(self, movie: BookmarkedMovie) -> None:
        """Insert or replace the bookmark row for ``movie.id``."""
        async with self._locked(movie.id):
            await asyncio.to_thread(self._upsert, movie)
            self.logger.info(f"Bookmark added: movie_id={movie.id}")
            await self._refresh()

    async def remove(self, movie: BookmarkedMovie) -> None:
        """Delete the bookmark row for ``movie.id``; absent ids are a no-op."""
        async with self._locked(movie.id):
            await asyncio.to_thread(self._delete, movie.id)
            self.logger.info(f"Bookmark removed: movie_id={movie.id}")
            await self._refresh()

    async def toggle(self, movie: BookmarkedMovie, currently_bookmarked: bool) -> bool:
        """
        Remove if ``currently_bookmarked`` else add. Returns the new status.

        The flag is taken as given. A stale flag (two toggles issued
        before either lands) executes literally, e.g. two adds.
        """
        if currently_bookmarked:
            await self.remove(movie)
            return False
        await self.add(movie)
        return True

    def _delete_all(self) -> int:
        try:
            with self.engine.begin() as conn:
                return conn.execute(text(f"DELETE FROM {self.TABLE}")).rowcount
        except SQLAlchemyError as e:
            self.logger.error(f"Bookmark store query failed: {e}")
            raise PersistenceError(f"Bookmark store unavailable: {e}")

    async def clear(self) -> int:
        """
        Delete every bookmark in one statement. Returns number of rows removed.

        Per-id mutations in flight land wholly before or after the delete.
        """
        removed = await asyncio.to_thread(self._delete_all)
        self.logger.info(f"Bookmarks cleared: {removed} removed")
        await self._refresh()
        return removed

    def dispose(self) -> None:
        self.engine.dispose()
