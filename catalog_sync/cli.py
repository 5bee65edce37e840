"""
Command-line interface for the catalog sync layer.

Provides commands for:
- setup: Create the bookmark table
- test: Test API and bookmark store connections
- list: Show a movie collection (popular, now_playing, upcoming, top_rated)
- search: Search movies (optionally merged with cached collections)
- details: Show details, cast, reviews and videos for a movie
- bookmarks: List bookmarked movies
- bookmark / unbookmark / toggle: Change a movie's bookmark
"""

import argparse
import asyncio
import sys
from typing import Optional

from .bookmarks import BookmarkCoordinator
from .catalog import CatalogCoordinator
from .client import CatalogClient
from .config import Config
from .database import BookmarkStore
from .details import MovieDetailsCoordinator
from .models import CollectionKind
from .repository import MovieRepository
from .state import Success, UiState, is_error
from .utils import print_header, print_section, print_status_table, truncate_string


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with all commands."""
    parser = argparse.ArgumentParser(
        prog="catalog_sync",
        description="Movie catalog browser - list, search and bookmark movies from TMDB",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the bookmark table (run first)
  python -m catalog_sync setup

  # Show popular movies
  python -m catalog_sync list popular

  # Search, merging matches from the cached collections
  python -m catalog_sync search "Inception" --local

  # Movie details
  python -m catalog_sync details 27205

  # Bookmarks
  python -m catalog_sync bookmark 27205
  python -m catalog_sync bookmarks
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("setup", help="Create the bookmark table if missing")
    subparsers.add_parser("test", help="Test API and bookmark store connections")

    list_parser = subparsers.add_parser("list", help="Show a movie collection")
    list_parser.add_argument(
        "kind",
        choices=[k.value for k in CollectionKind],
        help="Collection to show",
    )
    list_parser.add_argument("--page", type=int, default=1, help="Page number (default: 1)")

    search_parser = subparsers.add_parser("search", help="Search movies by title")
    search_parser.add_argument("query", help="Movie title to search for")
    search_parser.add_argument(
        "--local",
        action="store_true",
        help="Load the collections first so cached matches are merged in",
    )

    details_parser = subparsers.add_parser("details", help="Show details for a movie")
    details_parser.add_argument("movie_id", type=int, help="TMDB movie ID")

    subparsers.add_parser("bookmarks", help="List bookmarked movies")

    for name, help_text in (
        ("bookmark", "Bookmark a movie"),
        ("unbookmark", "Remove a movie from bookmarks"),
        ("toggle", "Flip a movie's bookmark"),
    ):
        p = subparsers.add_parser(name, help=help_text)
        p.add_argument("movie_id", type=int, help="TMDB movie ID")

    return parser


def print_state_error(state: UiState) -> int:
    if is_error(state):
        print(f"Error ({state.kind.value}): {state.message}")
        return 1
    return 0


def print_movies(movies) -> None:
    if not movies:
        print("  No movies found.")
        return
    for i, movie in enumerate(movies, 1):
        year = movie.release_date[:4] if movie.release_date else "Unknown"
        print(f"  [{i}] {movie.title} ({year}) - ID: {movie.id} - {movie.vote_average:.1f}/10")


def cmd_setup(store: BookmarkStore) -> int:
    print_header("Bookmark Store Setup")
    store.create_tables()
    print_status_table(
        {"table": store.TABLE, "exists": store.table_exists(), "bookmarks": store.count()},
        title="Bookmark store",
    )
    return 0


def cmd_test(client: CatalogClient, store: BookmarkStore) -> int:
    print_header("Connection Test")
    api_ok = client.test_connection()
    db_ok = store.table_exists()
    print_status_table(
        {"TMDB API": "OK" if api_ok else "FAILED", "Bookmark store": "OK" if db_ok else "FAILED"},
        title="Results",
    )
    return 0 if api_ok and db_ok else 1


async def cmd_list(repository: MovieRepository, args) -> int:
    kind = CollectionKind(args.kind)
    print_header(f"{kind.label} - page {args.page}")
    state = await repository.terminal(repository.collection(kind, args.page))
    if isinstance(state, Success):
        print_movies(state.data)
    return print_state_error(state)


async def cmd_search(repository: MovieRepository, config: Config, args) -> int:
    catalog = CatalogCoordinator(repository, config)
    catalog.search.debounce_seconds = 0
    print_header(f"Search: {args.query}")

    if args.local:
        await catalog.load_all()
        print(f"Cached {len(catalog.cache)} movies from collections")

    catalog.update_search_query(args.query)
    await catalog.search.wait_idle()
    catalog.close()

    state = catalog.search_results.value
    if isinstance(state, Success):
        print_movies(state.data)
    return print_state_error(state)


async def cmd_details(repository: MovieRepository, store: BookmarkStore, config: Config, args) -> int:
    details = MovieDetailsCoordinator(args.movie_id, repository, store, config)
    await details.load()

    state = details.details.value
    if not isinstance(state, Success):
        return print_state_error(state)

    print(state.data.display_summary())
    print(f"BOOKMARKED: {'yes' if store.is_bookmarked(args.movie_id) else 'no'}")

    print_section("Cast")
    cast = details.cast.value
    if isinstance(cast, Success):
        for member in cast.data[:10]:
            print(f"  - {member.name}")
    else:
        print_state_error(cast)

    print_section("Reviews")
    reviews = details.reviews.value
    if isinstance(reviews, Success):
        for review in reviews.data[:3]:
            print(f"  {review.author}: {truncate_string(review.preview(), 120)}")
    else:
        print_state_error(reviews)

    print_section("Videos")
    videos = details.videos.value
    if isinstance(videos, Success):
        for video in videos.data:
            print(f"  [{video.type}] {video.name} - https://www.youtube.com/watch?v={video.key}")
    else:
        print_state_error(videos)
    return 0


def cmd_bookmarks(store: BookmarkStore) -> int:
    print_header("Bookmarked Movies")
    bookmarks = store.get_all()
    if not bookmarks:
        print("  No bookmarks yet.")
    for i, bookmark in enumerate(bookmarks, 1):
        print(bookmark.display_line(i))
    return 0


async def cmd_change_bookmark(repository: MovieRepository, store: BookmarkStore, args) -> int:
    coordinator = BookmarkCoordinator(store)

    if args.command == "unbookmark":
        existing = store.get(args.movie_id)
        if existing is None:
            print(f"Movie {args.movie_id} is not bookmarked.")
            return 0
        state = await coordinator.remove_bookmark(existing)
    else:
        movie_state = await repository.terminal(repository.details(args.movie_id))
        if not isinstance(movie_state, Success):
            return print_state_error(movie_state)
        movie = movie_state.data
        if args.command == "bookmark":
            state = await coordinator.add_bookmark(movie)
        else:
            state = await coordinator.toggle_bookmark(movie, store.is_bookmarked(movie.id))

    if isinstance(state, Success):
        status = "bookmarked" if state.data else "not bookmarked"
        print(f"Movie {args.movie_id} is now {status}.")
    return print_state_error(state)


def main(args: Optional[list] = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 0

    # Load configuration
    try:
        config = Config.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}")
        print("\nMake sure your .env file contains:")
        print("  TMDB_BEARER_TOKEN=<your_bearer_token>")
        print("  BOOKMARK_DB_PATH=<path to bookmarks sqlite file> (optional)")
        return 1

    # Create components
    try:
        client = CatalogClient(config)
        store = BookmarkStore(config)
        repository = MovieRepository(client, config)
    except Exception as e:
        print(f"Error initializing: {e}")
        return 1

    # Route to command handler
    try:
        command = parsed_args.command
        if command == "setup":
            return cmd_setup(store)
        elif command == "test":
            return cmd_test(client, store)
        elif command == "list":
            return asyncio.run(cmd_list(repository, parsed_args))
        elif command == "search":
            return asyncio.run(cmd_search(repository, config, parsed_args))
        elif command == "details":
            return asyncio.run(cmd_details(repository, store, config, parsed_args))
        elif command == "bookmarks":
            return cmd_bookmarks(store)
        elif command in ("bookmark", "unbookmark", "toggle"):
            return asyncio.run(cmd_change_bookmark(repository, store, parsed_args))
        else:
            parser.print_help()
            return 0

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        return 130
    except Exception as e:
        print(f"\nError: {e}")
        return 1
    finally:
        client.close()
        store.dispose()


if __name__ == "__main__":
    sys.exit(main())
