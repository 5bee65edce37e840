"""
Custom exceptions and error handlers for the API.
"""

from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from catalog_sync.errors import ErrorKind
from catalog_sync.state import UiState, is_error


class APIError(HTTPException):
    """Base API error with structured error response."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.error = error
        self.message = message
        self.details = details
        super().__init__(status_code=status_code, detail=message)


class NotFoundError(APIError):
    """Resource not found error."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            status_code=404,
            error="not_found",
            message=f"{resource} with ID {identifier} not found",
            details={"resource": resource, "id": identifier},
        )


class UpstreamError(APIError):
    """Remote movie catalog failed or returned something unusable."""

    def __init__(self, message: str, kind: ErrorKind):
        super().__init__(
            status_code=502,
            error="upstream_error",
            message=message,
            details={"kind": kind.value},
        )


class DatabaseError(APIError):
    """Database connection/operation error."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(
            status_code=503,
            error="database_unavailable",
            message=message,
        )


def raise_for_state(state: UiState, resource: str = "Movie", identifier: Any = None) -> None:
    """Turn an Error envelope into the matching APIError."""
    if not is_error(state):
        return
    if state.kind == ErrorKind.persistence:
        raise DatabaseError(state.message)
    if state.status_code == 404 and identifier is not None:
        raise NotFoundError(resource, identifier)
    raise UpstreamError(state.message, state.kind)


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions and return structured JSON response."""
    content = {
        "error": exc.error,
        "message": exc.message,
    }
    if exc.details:
        content["details"] = exc.details
    return JSONResponse(status_code=exc.status_code, content=content)
