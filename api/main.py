"""
FastAPI application for the catalog sync layer.

Backend-for-frontend over the remote movie catalog and the local
bookmark store.
"""

import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.exceptions import APIError, api_error_handler
from api.request_context import logger, generate_request_id, set_request_id
from api.routers import bookmarks, movies, search
from api.schemas.common import ErrorResponse

app = FastAPI(
    title="Catalog Sync API",
    description="Browse, search and bookmark movies from the TMDB catalog",
    version="1.0.0",
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
)

app.add_exception_handler(APIError, api_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """Log all HTTP requests with timing and response status."""
    request_id = generate_request_id()
    set_request_id(request_id)

    skip_paths = {"/health", "/", "/api/docs", "/api/redoc", "/api/openapi.json"}
    if request.url.path in skip_paths:
        return await call_next(request)

    start_time = time.time()

    try:
        response = await call_next(request)
    except Exception as e:
        duration_ms = (time.time() - start_time) * 1000
        logger.error(
            f"Request failed: {request.method} {request.url.path} "
            f"duration={duration_ms:.2f}ms error={e}"
        )
        raise

    duration_ms = (time.time() - start_time) * 1000
    log_msg = (
        f"{request.method} {request.url.path} "
        f"status={response.status_code} duration={duration_ms:.2f}ms"
    )
    if response.status_code >= 500:
        logger.error(log_msg)
    elif response.status_code >= 400:
        logger.warning(log_msg)
    else:
        logger.info(log_msg)

    response.headers["X-Request-ID"] = request_id
    return response


upstream_errors = {404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}}

app.include_router(movies.router, prefix="/api/v1", tags=["Movies"], responses=upstream_errors)
app.include_router(search.router, prefix="/api/v1", tags=["Search"], responses=upstream_errors)
app.include_router(
    bookmarks.router,
    prefix="/api/v1",
    tags=["Bookmarks"],
    responses={503: {"model": ErrorResponse}},
)


@app.get("/", include_in_schema=False)
async def root():
    return {
        "message": "Catalog Sync API",
        "docs": "/api/docs",
    }


@app.get("/health", include_in_schema=False)
async def health():
    """Simple health check endpoint."""
    return {"status": "ok"}
