"""
Data models for the catalog sync layer.

Provides dataclasses for type-safe data handling between the remote
catalog, the bookmark store and the presentation boundary.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .errors import DecodeError


class CollectionKind(str, Enum):
    """Named, paginated movie lists offered by the remote catalog."""

    now_playing = "now_playing"
    upcoming = "upcoming"
    top_rated = "top_rated"
    popular = "popular"

    @property
    def endpoint(self) -> str:
        return f"/movie/{self.value}"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


def _require_id(data: dict, what: str):
    if not isinstance(data, dict):
        raise DecodeError(f"Expected an object for {what}, got {type(data).__name__}")
    if data.get("id") is None:
        raise DecodeError(f"{what} payload is missing 'id'")
    return data["id"]


def _int_id(value, what: str) -> int:
    if isinstance(value, bool):
        raise DecodeError(f"{what} id must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise DecodeError(f"{what} id must be an integer, got {value!r}")


def _text(data: dict, key: str, what: str, default: str = "") -> str:
    """String field; absent, null or empty falls back to ``default``."""
    value = data.get(key)
    if value is None or value == "":
        return default
    if not isinstance(value, str):
        raise DecodeError(f"{what} field '{key}' must be a string, got {type(value).__name__}")
    return value


def _optional_text(data: dict, key: str, what: str) -> Optional[str]:
    if data.get(key) is None:
        return None
    return _text(data, key, what)


def _optional_int(data: dict, key: str, what: str) -> Optional[int]:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise DecodeError(f"{what} field '{key}' must be an integer, got {type(value).__name__}")
    return value



def format_rating(vote_average: float) -> str:
    return f"{vote_average:.1f}"


def format_year(release_date: str) -> str:
    return release_date[:4] if release_date else ""


def format_runtime(runtime: Optional[int]) -> str:
    return f"{runtime} min" if runtime else "N/A"


@dataclass(frozen=True)
class Movie:
    """Movie as returned by the remote catalog. Recreated on every fetch."""

    id: int
    title: str
    poster_path: str = ""
    backdrop_path: str = ""
    overview: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    genres: Tuple[str, ...] = ()
    runtime: Optional[int] = None  # Only present on detail responses

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match against title or overview."""
        needle = query.lower()
        if needle in self.title.lower():
            return True
        return bool(self.overview) and needle in self.overview.lower()

    def to_bookmark(self) -> "BookmarkedMovie":
        return BookmarkedMovie(
            id=self.id,
            title=self.title,
            poster_path=self.poster_path,
            vote_average=float(self.vote_average),
            release_date=self.release_date,
            runtime=self.runtime,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "poster_path": self.poster_path,
            "backdrop_path": self.backdrop_path,
            "overview": self.overview,
            "vote_average": self.vote_average,
            "release_date": self.release_date,
            "genres": list(self.genres),
            "runtime": self.runtime,
        }

    def display_summary(self) -> str:
        """Return formatted string for terminal display."""
        lines = []
        lines.append("=" * 60)
        lines.append(f"TITLE: {self.title}")
        lines.append(f"RELEASE DATE: {self.release_date or 'Unknown'}")
        lines.append(f"TMDB ID: {self.id}")
        lines.append("-" * 60)

        if self.overview:
            overview = self.overview[:300] + "..." if len(self.overview) > 300 else self.overview
            lines.append(f"OVERVIEW: {overview}")
            lines.append("-" * 60)

        if self.genres:
            lines.append(f"GENRES: {', '.join(self.genres)}")
        lines.append(f"RUNTIME: {format_runtime(self.runtime)}")
        lines.append(f"RATING: {format_rating(self.vote_average)}/10")
        lines.append("=" * 60)
        return "\n".join(lines)

    @classmethod
    def from_tmdb(cls, data: dict) -> "Movie":
        """
        Create Movie from a TMDB list entry or detail response.

        List entries carry ``genre_ids`` only, so genres stay empty for
        them; detail responses carry ``genres`` and ``runtime``.
        """
        movie_id = _int_id(_require_id(data, "movie"), "movie")
        try:
            genres = tuple(
                _text(g, "name", "genre") for g in data.get("genres") or [] if g.get("name")
            )
            return cls(
                id=movie_id,
                title=_text(data, "title", "movie"),
                poster_path=_text(data, "poster_path", "movie"),
                backdrop_path=_text(data, "backdrop_path", "movie"),
                overview=_text(data, "overview", "movie"),
                vote_average=float(data.get("vote_average") or 0.0),
                release_date=_text(data, "release_date", "movie"),
                genres=genres,
                runtime=_optional_int(data, "runtime", "movie"),
            )
        except (TypeError, ValueError, AttributeError) as e:
            raise DecodeError(f"Malformed movie payload for id {movie_id}: {e}")


@dataclass(frozen=True)
class BookmarkedMovie:
    """Persisted projection of a Movie."""

    id: int
    title: str
    poster_path: str = ""
    vote_average: float = 0.0
    release_date: str = ""
    runtime: Optional[int] = None

    @property
    def formatted_rating(self) -> str:
        return format_rating(self.vote_average)

    @property
    def year(self) -> str:
        return format_year(self.release_date)

    @property
    def runtime_formatted(self) -> str:
        return format_runtime(self.runtime)

    def to_dict(self) -> dict:
        """Convert to dictionary for database insertion."""
        return {
            "id": self.id,
            "title": self.title,
            "poster_path": self.poster_path,
            "vote_average": self.vote_average,
            "release_date": self.release_date,
            "runtime": self.runtime,
        }

    def display_line(self, index: int) -> str:
        """Return single-line display for bookmark lists."""
        year = self.year or "Unknown"
        return (
            f"  [{index}] {self.title} ({year}) - ID: {self.id} "
            f"- {self.formatted_rating}/10 - {self.runtime_formatted}"
        )

    @classmethod
    def from_row(cls, row) -> "BookmarkedMovie":
        """Create from a ``bookmarked_movies`` row mapping."""
        return cls(
            id=row["id"],
            title=row["title"],
            poster_path=row["poster_path"] or "",
            vote_average=float(row["vote_average"] or 0.0),
            release_date=row["release_date"] or "",
            runtime=row["runtime"],
        )


@dataclass(frozen=True)
class CastMember:
    """Cast member from movie credits."""

    id: int
    name: str
    profile_path: Optional[str] = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "profile_path": self.profile_path}

    @classmethod
    def from_tmdb(cls, data: dict) -> "CastMember":
        return cls(
            id=_int_id(_require_id(data, "cast member"), "cast member"),
            name=_text(data, "name", "cast member", default="Unknown"),
            profile_path=_optional_text(data, "profile_path", "cast member"),
        )


@dataclass(frozen=True)
class Review:
    """User review of a movie."""

    id: str
    author: str
    content: str

    def preview(self, limit: int = 200) -> str:
        if len(self.content) > limit:
            return self.content[:limit] + "..."
        return self.content

    def to_dict(self) -> dict:
        return {"id": self.id, "author": self.author, "content": self.content}

    @classmethod
    def from_tmdb(cls, data: dict) -> "Review":
        review_id = _require_id(data, "review")
        return cls(
            id=str(review_id),
            author=_text(data, "author", "review", default="Unknown"),
            content=_text(data, "content", "review"),
        )


@dataclass(frozen=True)
class Video:
    """Video attached to a movie (trailer, teaser, clip...)."""

    id: str
    key: str
    name: str
    site: str
    type: str
    official: bool = False

    @property
    def is_youtube(self) -> bool:
        return self.site.lower() == "youtube"

    @property
    def is_trailer(self) -> bool:
        return self.type.lower() == "trailer"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "site": self.site,
            "type": self.type,
            "official": self.official,
        }

    @classmethod
    def from_tmdb(cls, data: dict) -> "Video":
        video_id = _require_id(data, "video")
        return cls(
            id=str(video_id),
            key=_text(data, "key", "video"),
            name=_text(data, "name", "video"),
            site=_text(data, "site", "video"),
            type=_text(data, "type", "video"),
            official=bool(data.get("official", False)),
        )
