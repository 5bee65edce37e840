"""
Configuration management for the catalog sync layer.

Loads configuration from environment variables and provides
a centralized Config dataclass for all settings.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


@dataclass
class Config:
    """Centralized configuration from environment variables."""

    # TMDB API
    bearer_token: str
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"
    request_timeout: float = 10.0  # Seconds, applies to every remote call

    # Bookmark store
    bookmark_db_path: str = "bookmarks.db"

    # Search behaviour
    search_debounce_ms: int = 500
    max_search_results: int = 20
    max_videos: int = 10

    # Paths
    project_dir: Path = field(default_factory=Path.cwd)
    log_dir: Path = field(default_factory=lambda: Path.cwd() / "logs")

    @property
    def search_debounce_seconds(self) -> float:
        return self.search_debounce_ms / 1000.0

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "Config":
        """
        Load configuration from environment variables.

        Args:
            env_path: Optional path to .env file. If not provided,
                     looks for .env in the current directory.

        Returns:
            Config instance with loaded values.

        Raises:
            ValueError: If required environment variables are missing.
        """
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        # Required variables
        bearer_token = os.getenv("TMDB_BEARER_TOKEN")
        if not bearer_token:
            raise ValueError("TMDB_BEARER_TOKEN environment variable is required")

        # Optional settings
        base_url = os.getenv("BASE_URL", "https://api.themoviedb.org/3").rstrip("/")
        language = os.getenv("TMDB_LANGUAGE", "en-US")
        request_timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))
        project_dir = Path(os.getenv("PROJECT_DIR", Path.cwd()))
        bookmark_db_path = os.getenv("BOOKMARK_DB_PATH", str(project_dir / "bookmarks.db"))

        search_debounce_ms = int(os.getenv("SEARCH_DEBOUNCE_MS", "500"))
        max_search_results = int(os.getenv("MAX_SEARCH_RESULTS", "20"))
        max_videos = int(os.getenv("MAX_VIDEOS", "10"))

        return cls(
            bearer_token=bearer_token,
            base_url=base_url,
            language=language,
            request_timeout=request_timeout,
            bookmark_db_path=bookmark_db_path,
            search_debounce_ms=search_debounce_ms,
            max_search_results=max_search_results,
            max_videos=max_videos,
            project_dir=project_dir,
            log_dir=project_dir / "logs",
        )

    def get_db_url(self) -> str:
        """Get SQLAlchemy database URL for the bookmark store."""
        if self.bookmark_db_path == ":memory:":
            return "sqlite://"
        return f"sqlite:///{self.bookmark_db_path}"

    def get_headers(self) -> dict:
        """Get headers for TMDB API requests."""
        return {
            "Authorization": f"Bearer {self.bearer_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
