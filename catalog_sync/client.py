"""
TMDB API client for the catalog sync layer.

Handles all remote catalog interactions:
- Bearer authentication on every request
- Bounded per-request timeout
- Response parsing into data models

No retries happen here. Every failure is raised as a typed
CatalogError and the caller decides what to do with it.
"""

from typing import List, Optional

import requests
from requests.adapters import HTTPAdapter

from .config import Config
from .errors import DecodeError, RemoteRejectedError, TransportError
from .models import CastMember, CollectionKind, Movie, Review, Video
from .utils import setup_logger


class CatalogClient:
    """
    Thin synchronous binding to the TMDB v3 movie endpoints.

    Coordinators run it in worker threads; instances are explicitly
    constructed and passed in, never shared through module globals.
    """

    def __init__(self, config: Config, session: Optional[requests.Session] = None):
        self.config = config
        self.session = session or self._create_session()
        self.logger = setup_logger("catalog_client", config.log_dir)

    def _create_session(self) -> requests.Session:
        """Create requests session with auth headers and no retry policy."""
        session = requests.Session()

        adapter = HTTPAdapter(max_retries=0, pool_connections=4, pool_maxsize=8)
        session.mount("https://", adapter)
        session.mount("http://", adapter)

        session.headers.update(self.config.get_headers())

        return session

    def close(self) -> None:
        self.session.close()

    def _request(self, endpoint: str, params: dict = None) -> dict:
        """
        Make an authenticated GET request and decode the JSON body.

        Args:
            endpoint: API endpoint (e.g., '/movie/123')
            params: Query parameters

        Returns:
            Decoded JSON object

        Raises:
            TransportError: Connection failure or timeout
            RemoteRejectedError: Any non-2xx status
            DecodeError: Body is not a JSON object
        """
        url = f"{self.config.base_url}{endpoint}"
        params = {k: v for k, v in (params or {}).items() if v is not None}

        try:
            response = self.session.get(url, params=params, timeout=self.config.request_timeout)
        except requests.exceptions.Timeout:
            self.logger.warning(f"Timeout after {self.config.request_timeout}s for {endpoint}")
            raise TransportError(f"Request to {endpoint} timed out")
        except requests.exceptions.ConnectionError as e:
            self.logger.warning(f"Connection error for {endpoint}: {e}")
            raise TransportError(f"Could not reach the movie catalog: {e}")
        except requests.exceptions.RequestException as e:
            self.logger.error(f"Request error for {endpoint}: {e}")
            raise TransportError(f"Request to {endpoint} failed: {e}")

        if not 200 <= response.status_code < 300:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("status_message") if isinstance(body, dict) else None
            self.logger.error(f"Remote error ({response.status_code}) for {endpoint}")
            raise RemoteRejectedError(response.status_code, endpoint, message)

        try:
            data = response.json()
        except ValueError as e:
            raise DecodeError(f"Invalid JSON from {endpoint}: {e}")

        if not isinstance(data, dict):
            raise DecodeError(f"Unexpected payload from {endpoint}")
        return data

    @staticmethod
    def _results(data: dict, key: str = "results") -> list:
        results = data.get(key)
        if not isinstance(results, list):
            raise DecodeError(f"Response is missing '{key}' list")
        return results

    def fetch_collection(
        self,
        kind: CollectionKind,
        page: int = 1,
        language: Optional[str] = None,
    ) -> List[Movie]:
        """
        Fetch one page of a named movie collection.
        Uses: /movie/{popular|now_playing|upcoming|top_rated}

        Args:
            kind: Which collection to fetch
            page: Page number (1-indexed)
            language: Language code (defaults to configured language)

        Returns:
            List of Movie in remote order
        """
        kind = CollectionKind(kind)
        data = self._request(
            kind.endpoint,
            params={"language": language or self.config.language, "page": page},
        )
        return [Movie.from_tmdb(m) for m in self._results(data)]

    def search(self, query: str, page: int = 1, language: Optional[str] = None) -> List[Movie]:
        """
        Search movies by title.
        Uses: /search/movie?query={query}

        Returns:
            Raw (uncapped) list of Movie in remote order
        """
        data = self._request(
            "/search/movie",
            params={
                "query": query,
                "language": language or self.config.language,
                "page": page,
            },
        )
        return [Movie.from_tmdb(m) for m in self._results(data)]

    def details(self, movie_id: int, language: Optional[str] = None) -> Movie:
        """Get full movie details including runtime and genres."""
        data = self._request(
            f"/movie/{movie_id}",
            params={"language": language or self.config.language},
        )
        return Movie.from_tmdb(data)

    def credits(self, movie_id: int) -> List[CastMember]:
        """Get the cast of a movie in billing order."""
        data = self._request(f"/movie/{movie_id}/credits")
        return [CastMember.from_tmdb(c) for c in self._results(data, "cast")]

    def reviews(self, movie_id: int, page: int = 1, language: Optional[str] = None) -> List[Review]:
        """Get one page of user reviews for a movie."""
        data = self._request(
            f"/movie/{movie_id}/reviews",
            params={"language": language or self.config.language, "page": page},
        )
        return [Review.from_tmdb(r) for r in self._results(data)]

    def videos(self, movie_id: int) -> List[Video]:
        """Get all videos for a movie, unfiltered."""
        data = self._request(f"/movie/{movie_id}/videos")
        return [Video.from_tmdb(v) for v in self._results(data)]

    def test_connection(self) -> bool:
        """Test API connection by fetching a known movie."""
        try:
            movie = self.details(550)  # Fight Club
            return bool(movie.title)
        except Exception as e:
            self.logger.error(f"API connection test failed: {e}")
            return False
