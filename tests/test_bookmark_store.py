"""
Bookmark store tests against an in-memory SQLite database.
"""

import asyncio

import pytest

from catalog_sync.bookmarks import BookmarkCoordinator, BookmarkToggleCoordinator
from catalog_sync.errors import ErrorKind, PersistenceError
from catalog_sync.models import BookmarkedMovie
from catalog_sync.state import Error, Success

from conftest import DUNE, INCEPTION


class TestSetup:

    def test_table_created_on_startup(self, store):
        assert store.table_exists()
        assert store.count() == 0
        assert store.bookmarks == []


class TestMutations:

    def test_add_then_remove(self, store):
        bookmark = INCEPTION.to_bookmark()

        asyncio.run(store.add(bookmark))
        assert store.is_bookmarked(INCEPTION.id)
        assert store.get(INCEPTION.id) == bookmark

        asyncio.run(store.remove(bookmark))
        assert not store.is_bookmarked(INCEPTION.id)
        assert store.bookmarks == []

    def test_upsert_is_idempotent(self, store):
        bookmark = INCEPTION.to_bookmark()

        asyncio.run(store.add(bookmark))
        asyncio.run(store.add(bookmark))

        assert store.count() == 1

    def test_re_adding_replaces_values(self, store):
        asyncio.run(store.add(BookmarkedMovie(id=1, title="Old title")))
        asyncio.run(store.add(BookmarkedMovie(id=1, title="New title", runtime=90)))

        assert store.get(1).title == "New title"
        assert store.get(1).runtime == 90

    def test_removing_absent_id_is_noop(self, store):
        asyncio.run(store.remove(BookmarkedMovie(id=42, title="")))

        assert store.count() == 0

    def test_list_keeps_insertion_order(self, store):
        async def run():
            await store.add(DUNE.to_bookmark())
            await store.add(INCEPTION.to_bookmark())

        asyncio.run(run())

        assert [b.id for b in store.get_all()] == [DUNE.id, INCEPTION.id]

    def test_clear_removes_everything(self, store):
        async def run():
            await store.add(DUNE.to_bookmark())
            await store.add(INCEPTION.to_bookmark())
            return await store.clear()

        assert asyncio.run(run()) == 2
        assert store.bookmarks == []


class TestToggle:

    def test_toggle_adds_then_observer_sees_true(self, store):
        async def run():
            status = await store.toggle(INCEPTION.to_bookmark(), currently_bookmarked=False)
            observer = store.observe_is_bookmarked(INCEPTION.id)
            first = await observer.__anext__()
            await observer.aclose()
            return status, first

        assert asyncio.run(run()) == (True, True)

    def test_toggle_removes(self, store):
        bookmark = INCEPTION.to_bookmark()

        async def run():
            await store.add(bookmark)
            return await store.toggle(bookmark, currently_bookmarked=True)

        assert asyncio.run(run()) is False
        assert not store.is_bookmarked(INCEPTION.id)

    def test_stale_flag_executes_literally(self, store):
        bookmark = INCEPTION.to_bookmark()

        async def run():
            return await asyncio.gather(
                store.toggle(bookmark, currently_bookmarked=False),
                store.toggle(bookmark, currently_bookmarked=False),
            )

        assert asyncio.run(run()) == [True, True]
        assert store.count() == 1
        assert store._locks == {}

    def test_locks_released_after_mutations(self, store):
        async def run():
            for movie in (DUNE, INCEPTION):
                await store.add(movie.to_bookmark())
                await store.remove(movie.to_bookmark())

        asyncio.run(run())

        assert store._locks == {}


class TestObservation:

    def test_observer_gets_current_list_then_changes(self, store):
        async def run():
            observer = store.observe_all()
            first = await observer.__anext__()
            await store.add(DUNE.to_bookmark())
            second = await observer.__anext__()
            await observer.aclose()
            return first, second

        first, second = asyncio.run(run())

        assert first == []
        assert second == [DUNE.to_bookmark()]

    def test_status_observer_only_emits_changes(self, store):
        async def run():
            observer = store.observe_is_bookmarked(INCEPTION.id)
            seen = [await observer.__anext__()]
            # Unrelated change does not re-emit
            await store.add(DUNE.to_bookmark())
            await store.add(INCEPTION.to_bookmark())
            seen.append(await observer.__anext__())
            await observer.aclose()
            return seen

        assert asyncio.run(run()) == [False, True]


class TestFailures:

    def test_broken_table_raises_persistence_error(self, store):
        store._execute(f"DROP TABLE {store.TABLE}")

        with pytest.raises(PersistenceError):
            asyncio.run(store.add(INCEPTION.to_bookmark()))

    def test_coordinator_reports_persistence_error(self, store):
        store._execute(f"DROP TABLE {store.TABLE}")

        state = asyncio.run(BookmarkToggleCoordinator(store).toggle(INCEPTION, False))

        assert isinstance(state, Error)
        assert state.kind == ErrorKind.persistence


class TestBookmarkCoordinator:

    def test_add_and_remove_report_status(self, store):
        coordinator = BookmarkCoordinator(store)

        async def run():
            added = await coordinator.add_bookmark(INCEPTION)
            present = coordinator.is_bookmarked(INCEPTION.id)
            removed = await coordinator.remove_bookmark(INCEPTION)
            return added, present, removed

        assert asyncio.run(run()) == (Success(True), True, Success(False))
        assert coordinator.bookmarked_movies == []

    def test_toggle_accepts_movie(self, store):
        coordinator = BookmarkCoordinator(store)

        state = asyncio.run(coordinator.toggle_bookmark(DUNE, False))

        assert state == Success(True)
        assert coordinator.bookmarked_movies == [DUNE.to_bookmark()]
