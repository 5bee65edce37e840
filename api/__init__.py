"""
Catalog sync REST API.

A FastAPI backend-for-frontend over the catalog sync layer: movie
collections, details, search merged with cached collections, and
bookmark management.
"""

from api.main import app

__all__ = ["app"]
