"""
HTTP API flow tests.

Tests mimic what a frontend would call.
"""

from catalog_sync.errors import PersistenceError, TransportError
from catalog_sync.models import CollectionKind

from conftest import INCEPTION


class TestBrowseFlow:
    """Flow 1: Home screen collections"""

    def test_health(self, api_client):
        response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_get_collection(self, api_client, cache):
        response = api_client.get("/api/v1/collections/popular")

        assert response.status_code == 200
        data = response.json()
        assert data["kind"] == "popular"
        assert [m["id"] for m in data["data"]] == [27205, 438631, 604]
        # First page seeds local search
        assert cache.snapshot(CollectionKind.popular)

    def test_unknown_collection_rejected(self, api_client):
        response = api_client.get("/api/v1/collections/trending")

        assert response.status_code == 422

    def test_collection_failure_is_upstream_error(self, api_client, fake_client):
        fake_client.failures["fetch_collection"] = TransportError("Could not reach the movie catalog")

        response = api_client.get("/api/v1/collections/upcoming")

        assert response.status_code == 502
        data = response.json()
        assert data["error"] == "upstream_error"
        assert data["details"]["kind"] == "transport"

    def test_response_has_request_id(self, api_client):
        response = api_client.get("/api/v1/collections/upcoming")

        assert response.headers["X-Request-ID"]


class TestMovieDetailsFlow:
    """Flow 2: Details screen"""

    def test_get_movie(self, api_client):
        response = api_client.get(f"/api/v1/movies/{INCEPTION.id}")

        assert response.status_code == 200
        assert response.json()["runtime"] == 148

    def test_missing_movie_is_404(self, api_client):
        response = api_client.get("/api/v1/movies/1")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    def test_credits_reviews_videos(self, api_client):
        credits = api_client.get(f"/api/v1/movies/{INCEPTION.id}/credits").json()
        reviews = api_client.get(f"/api/v1/movies/{INCEPTION.id}/reviews").json()
        videos = api_client.get(f"/api/v1/movies/{INCEPTION.id}/videos").json()

        assert credits["cast"][0]["name"] == "Leonardo DiCaprio"
        assert reviews["data"][0]["preview"].endswith("...")
        assert [v["id"] for v in videos["data"]] == ["v3", "v1", "v4"]


class TestSearchFlow:
    """Flow 3: Search bar"""

    def test_search(self, api_client):
        response = api_client.get("/api/v1/search", params={"q": "matrix"})

        assert response.status_code == 200
        data = response.json()
        assert data["returned"] == 2
        assert {m["id"] for m in data["data"]} == {603, 604}

    def test_search_falls_back_to_loaded_collections(self, api_client, fake_client):
        api_client.get("/api/v1/collections/popular")
        fake_client.failures["search"] = TransportError("offline")

        response = api_client.get("/api/v1/search", params={"q": "Inception"})

        assert response.status_code == 200
        assert [m["id"] for m in response.json()["data"]] == [INCEPTION.id]

    def test_search_failure_without_local_matches(self, api_client, fake_client):
        fake_client.failures["search"] = TransportError("offline")

        response = api_client.get("/api/v1/search", params={"q": "Inception"})

        assert response.status_code == 502

    def test_empty_query_rejected(self, api_client):
        response = api_client.get("/api/v1/search", params={"q": ""})

        assert response.status_code == 422


class TestBookmarkFlow:
    """Flow 4: Bookmarking from the details screen"""

    BODY = {
        "title": "Inception",
        "poster_path": "/poster_27205.jpg",
        "vote_average": 8.4,
        "release_date": "2010-07-16",
        "runtime": 148,
    }

    def test_add_list_remove(self, api_client):
        response = api_client.put(f"/api/v1/bookmarks/{INCEPTION.id}", json=self.BODY)
        assert response.status_code == 200
        assert response.json() == {"movie_id": INCEPTION.id, "bookmarked": True}

        listing = api_client.get("/api/v1/bookmarks").json()
        assert listing["total"] == 1
        assert listing["data"][0]["year"] == "2010"
        assert listing["data"][0]["runtime_formatted"] == "148 min"

        response = api_client.delete(f"/api/v1/bookmarks/{INCEPTION.id}")
        assert response.json()["bookmarked"] is False
        assert api_client.get(f"/api/v1/bookmarks/{INCEPTION.id}").json()["bookmarked"] is False

    def test_toggle(self, api_client):
        body = {"currently_bookmarked": False, "movie": self.BODY}

        response = api_client.post(f"/api/v1/bookmarks/{INCEPTION.id}/toggle", json=body)

        assert response.json()["bookmarked"] is True
        assert api_client.get(f"/api/v1/bookmarks/{INCEPTION.id}").json()["bookmarked"] is True

    def test_invalid_body_rejected(self, api_client):
        response = api_client.put("/api/v1/bookmarks/1", json={"title": ""})

        assert response.status_code == 422

    def test_store_failure_is_503(self, api_client, store, monkeypatch):
        def broken():
            raise PersistenceError("Bookmark store unavailable")

        monkeypatch.setattr(store, "get_all", broken)

        response = api_client.get("/api/v1/bookmarks")

        assert response.status_code == 503
        assert response.json()["error"] == "database_unavailable"
