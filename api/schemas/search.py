"""
Search-related Pydantic schemas.
"""

from typing import List

from pydantic import BaseModel

from api.schemas.movie import MovieItem


class SearchResponse(BaseModel):
    """Search results, merged from cached collections and the remote catalog."""

    query: str
    data: List[MovieItem] = []
    returned: int = 0
