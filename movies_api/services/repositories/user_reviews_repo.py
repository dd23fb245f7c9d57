"""Postgres repository for user movie reviews (stored procedures)."""

from __future__ import annotations

from typing import Any, Optional, Sequence

import psycopg
from psycopg import errors as pg_errors
from psycopg_pool import AsyncConnectionPool

from movies_api.models.user_reviews import UserReview
from movies_api.services.errors import (
    ReviewStoreError,
    UserReviewAlreadyExistsError,
    UserReviewNotFoundError,
)

CREATE_USER_REVIEW_PROC = 'CALL create_user_review(%s, %s, %s, %s)'
UPDATE_USER_REVIEW_PROC = 'CALL update_user_review(%s, %s, %s, %s, NULL)'
DELETE_USER_REVIEW_PROC = 'CALL delete_user_review(%s, %s, NULL)'
GET_USER_REVIEW_PROC = (
    'CALL get_user_review(%s, %s, NULL, NULL, NULL, NULL, NULL)'
)

# one review per (user, movie)
UNIQUE_USER_MOVIE_REVIEW = 'user_reviews_unique_user_movie_review'


def violated_constraint(error: psycopg.Error) -> Optional[str]:
    diag = getattr(error, 'diag', None)
    return getattr(diag, 'constraint_name', None)


def found_flag(row: Optional[Sequence[Any]]) -> bool:
    """Trailing `found` out-parameter; NULL or no row means not found."""
    return bool(row) and row[-1] is True


def review_from_row(row: Optional[Sequence[Any]]) -> Optional[UserReview]:
    """Fold (rating, review, created_at, updated_at, found) into a model."""
    if not found_flag(row):
        return None
    rating, review, created_at, updated_at, _ = row
    return UserReview(
        rating=rating or 0,
        review=review or '',
        created_at=created_at,
        updated_at=updated_at,
    )


class UserReviewsRepo:
    """One round trip per operation, no locking, no read-before-write.

    Existence and uniqueness are decided by the store: the unique
    constraint for duplicates and the `found` out-parameter for
    missing rows.
    """

    def __init__(self, pool: AsyncConnectionPool) -> None:
        self.pool = pool

    async def _call(
        self,
        query: str,
        params: Sequence[Any],
        *,
        fetch: bool = True,
    ) -> Optional[Sequence[Any]]:
        async with self.pool.connection() as conn:
            cur = await conn.execute(query, params)
            if not fetch:
                return None
            return await cur.fetchone()

    async def add(
        self,
        user_id: int,
        movie_id: int,
        rating: int,
        review: str,
    ) -> None:
        """Create a review; a second one for the pair -> AlreadyExists."""
        try:
            await self._call(
                CREATE_USER_REVIEW_PROC,
                (user_id, movie_id, rating, review),
                fetch=False,
            )
        except pg_errors.UniqueViolation as error:
            if violated_constraint(error) != UNIQUE_USER_MOVIE_REVIEW:
                raise ReviewStoreError(
                    f'pg_review_create_error: {error}'
                ) from error
            raise UserReviewAlreadyExistsError(user_id, movie_id) from error
        except psycopg.Error as error:
            raise ReviewStoreError(
                f'pg_review_create_error: {error}'
            ) from error

    async def update(
        self,
        user_id: int,
        movie_id: int,
        rating: int,
        review: str,
    ) -> None:
        """Overwrite rating and text of an existing review."""
        try:
            row = await self._call(
                UPDATE_USER_REVIEW_PROC,
                (user_id, movie_id, rating, review),
            )
        except psycopg.Error as error:
            raise ReviewStoreError(
                f'pg_review_update_error: {error}'
            ) from error
        if not found_flag(row):
            raise UserReviewNotFoundError(user_id, movie_id)

    async def delete(self, user_id: int, movie_id: int) -> None:
        """Hard-delete the review of the pair."""
        try:
            row = await self._call(
                DELETE_USER_REVIEW_PROC,
                (user_id, movie_id),
            )
        except psycopg.Error as error:
            raise ReviewStoreError(
                f'pg_review_delete_error: {error}'
            ) from error
        if not found_flag(row):
            raise UserReviewNotFoundError(user_id, movie_id)

    async def get(self, user_id: int, movie_id: int) -> UserReview:
        """Read the review of the pair."""
        try:
            row = await self._call(
                GET_USER_REVIEW_PROC,
                (user_id, movie_id),
            )
        except psycopg.Error as error:
            raise ReviewStoreError(
                f'pg_review_get_error: {error}'
            ) from error
        review = review_from_row(row)
        if review is None:
            raise UserReviewNotFoundError(user_id, movie_id)
        return review
