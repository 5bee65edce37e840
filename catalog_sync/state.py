"""
Result envelopes and observable state holders.

``UiState`` is the Loading/Success/Error tagged union that wraps every
asynchronous outcome crossing the core boundary. ``StateFlow`` holds the
latest value of one such state and lets any number of async consumers
follow it.
"""

import asyncio
from dataclasses import dataclass
from typing import AsyncIterator, Generic, Optional, Set, TypeVar, Union

from .errors import CatalogError, ErrorKind

T = TypeVar("T")

DEFAULT_ERROR_MESSAGE = "Error occurred"


@dataclass(frozen=True)
class Loading:
    """Operation in flight; no payload yet."""


@dataclass(frozen=True)
class Success(Generic[T]):
    """Operation finished with a complete payload."""

    data: T


@dataclass(frozen=True)
class Error:
    """Operation failed; carries a display-ready message and its kind."""

    message: str = DEFAULT_ERROR_MESSAGE
    kind: ErrorKind = ErrorKind.unknown
    status_code: Optional[int] = None  # Set for remote rejections only


UiState = Union[Loading, Success, Error]

LOADING = Loading()


def from_exception(exc: BaseException) -> Error:
    """Project any failure into an Error envelope."""
    if isinstance(exc, asyncio.CancelledError):
        return Error("Operation cancelled", ErrorKind.cancelled)
    if isinstance(exc, CatalogError):
        return Error(
            exc.message or DEFAULT_ERROR_MESSAGE,
            exc.kind,
            getattr(exc, "status_code", None),
        )
    return Error(str(exc) or DEFAULT_ERROR_MESSAGE, ErrorKind.unknown)


def data_or_none(state: UiState):
    return state.data if isinstance(state, Success) else None


def is_loading(state: UiState) -> bool:
    return isinstance(state, Loading)


def is_success(state: UiState) -> bool:
    return isinstance(state, Success)


def is_error(state: UiState) -> bool:
    return isinstance(state, Error)


def error_message(state: UiState) -> Optional[str]:
    return state.message if isinstance(state, Error) else None


class StateFlow(Generic[T]):
    """
    Hot observable holding a current value.

    New subscribers receive the current value first, then every
    subsequent distinct value. Values must be set from the event loop
    thread.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: Set[asyncio.Queue] = set()

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        self.set(new_value)

    def set(self, new_value: T) -> None:
        if new_value == self._value:
            return
        self._value = new_value
        for queue in list(self._subscribers):
            queue.put_nowait(new_value)

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)

    async def subscribe(self) -> AsyncIterator[T]:
        """Yield the current value, then every change. Never terminates."""
        queue: asyncio.Queue = asyncio.Queue()
        self._subscribers.add(queue)
        try:
            yield self._value
            while True:
                yield await queue.get()
        finally:
            self._subscribers.discard(queue)

    def __repr__(self) -> str:
        return f"StateFlow({self._value!r})"
