"""
Request id tracking for API logs.
"""

import logging
import uuid
from contextvars import ContextVar
from typing import Optional

from catalog_sync.utils import setup_logger

# Context variable for request ID tracking across async calls
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


class RequestIdFilter(logging.Filter):
    """Add request_id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True


def generate_request_id() -> str:
    """Generate a short unique request ID."""
    return uuid.uuid4().hex[:8]


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)


logger = setup_logger(
    "catalog_api",
    console_level=logging.INFO,
    fmt="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s",
    filters=[RequestIdFilter()],
)
