"""In-memory stand-ins for the Postgres pool and the TMDb HTTP API."""

from __future__ import annotations

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
from psycopg import errors as pg_errors

from movies_api.services.repositories.user_reviews_repo import (
    CREATE_USER_REVIEW_PROC,
    DELETE_USER_REVIEW_PROC,
    GET_USER_REVIEW_PROC,
    UNIQUE_USER_MOVIE_REVIEW,
    UPDATE_USER_REVIEW_PROC,
)


class FakeUniqueViolation(pg_errors.UniqueViolation):
    def __init__(self, constraint_name: str) -> None:
        super().__init__(
            f'duplicate key value violates unique constraint '
            f'"{constraint_name}"')
        self._constraint_name = constraint_name

    @property
    def diag(self):
        return SimpleNamespace(constraint_name=self._constraint_name)


class FakeCursor:
    def __init__(self, row: Optional[Tuple[Any, ...]]) -> None:
        self._row = row

    async def fetchone(self):
        return self._row


class FakeConnection:
    def __init__(self, pool: 'FakePool') -> None:
        self.pool = pool

    async def execute(self, query: str, params=None) -> FakeCursor:
        params = tuple(params or ())
        self.pool.calls.append((query, params))
        if self.pool.delay is not None:
            await self.pool.delay()
        if self.pool.fail_with is not None:
            raise self.pool.fail_with
        handler = {
            CREATE_USER_REVIEW_PROC: self.pool.create_user_review,
            UPDATE_USER_REVIEW_PROC: self.pool.update_user_review,
            DELETE_USER_REVIEW_PROC: self.pool.delete_user_review,
            GET_USER_REVIEW_PROC: self.pool.get_user_review,
        }[query]
        return FakeCursor(handler(*params))


class FakePool:
    """Implements the four stored procedures over a dict.

    Rows are keyed by (user_id, movie_id), which plays the part of the
    `user_reviews_unique_user_movie_review` constraint.
    """

    def __init__(self) -> None:
        self.rows: Dict[Tuple[int, int], Dict[str, Any]] = {}
        self.calls: List[Tuple[str, Tuple[Any, ...]]] = []
        self.fail_with: Optional[BaseException] = None
        self.delay: Optional[Callable[[], Any]] = None
        self.closed = False

    @asynccontextmanager
    async def connection(self):
        yield FakeConnection(self)

    async def close(self) -> None:
        self.closed = True

    # ---------- procedures ----------

    def create_user_review(self, user_id, movie_id, rating, review):
        if (user_id, movie_id) in self.rows:
            raise FakeUniqueViolation(UNIQUE_USER_MOVIE_REVIEW)
        now = datetime.now(timezone.utc)
        self.rows[(user_id, movie_id)] = {
            'rating': rating,
            'review': review,
            'created_at': now,
            'updated_at': now,
        }
        return None

    def update_user_review(self, user_id, movie_id, rating, review):
        row = self.rows.get((user_id, movie_id))
        if row is None:
            return (False,)
        row.update(rating=rating, review=review,
                   updated_at=datetime.now(timezone.utc))
        return (True,)

    def delete_user_review(self, user_id, movie_id):
        return (self.rows.pop((user_id, movie_id), None) is not None,)

    def get_user_review(self, user_id, movie_id):
        row = self.rows.get((user_id, movie_id))
        if row is None:
            return (None, None, None, None, False)
        return (row['rating'], row['review'], row['created_at'],
                row['updated_at'], True)


class FakeTMDB:
    """Routes `path -> (status, json)` behind an `httpx.MockTransport`."""

    def __init__(self) -> None:
        self.routes: Dict[str, Tuple[int, Any]] = {}
        self.requests: List[httpx.Request] = []
        self.delay: Optional[Callable[[], Any]] = None

    def add(self, path: str, payload: Any, status: int = 200) -> None:
        self.routes['/3' + path] = (status, payload)

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.delay is not None:
            await self.delay()
        status, payload = self.routes.get(
            request.url.path,
            (404, {'status_code': 34,
                   'status_message': 'The resource you requested '
                                     'could not be found.'}),
        )
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload)
        return httpx.Response(status, json=payload)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)
