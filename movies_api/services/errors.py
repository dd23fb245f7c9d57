"""Domain outcomes of the facade/store layers and the RPC error set."""

from __future__ import annotations

from enum import Enum
from typing import Optional


# ---------- domain outcomes ----------

class MovieNotFoundError(Exception):
    """Provider answered 404 for an id-keyed lookup."""

    def __init__(self, movie_id: int) -> None:
        super().__init__(
            f'movie not found for the given ID and this request: {movie_id}')
        self.movie_id = movie_id


class UserReviewNotFoundError(Exception):
    """No review stored for the (user, movie) pair."""

    def __init__(self, user_id: int, movie_id: int) -> None:
        super().__init__(
            'user movie review not found for the given user and movie')
        self.user_id = user_id
        self.movie_id = movie_id


class UserReviewAlreadyExistsError(Exception):
    """The store rejected a second review for the (user, movie) pair."""

    def __init__(self, user_id: int, movie_id: int) -> None:
        super().__init__(
            'user movie review already exists for the given user and movie')
        self.user_id = user_id
        self.movie_id = movie_id


class ProviderError(RuntimeError):
    """Transport or decode failure talking to the movie provider."""


class ProviderHTTPError(ProviderError):
    """Provider answered with a non-success HTTP status."""

    def __init__(self, status_code: int, path: str,
                 body_snippet: str = '') -> None:
        super().__init__(
            f'tmdb_http_error: {status_code} on {path}')
        self.status_code = status_code
        self.path = path
        self.body_snippet = body_snippet


class ReviewStoreError(RuntimeError):
    """Any SQL failure other than the recognised review outcomes."""


# ---------- RPC level ----------

class ErrorCode(str, Enum):
    not_found = 'not_found'
    already_exists = 'already_exists'
    unauthenticated = 'unauthenticated'
    canceled = 'canceled'
    deadline_exceeded = 'deadline_exceeded'
    internal = 'internal'


class RpcError(Exception):
    """Client-facing error raised by the orchestrator."""

    def __init__(self, code: ErrorCode,
                 message: Optional[str] = None) -> None:
        super().__init__(message or code.value)
        self.code = code
        self.message = message or code.value
