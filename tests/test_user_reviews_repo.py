import psycopg
import pytest

from movies_api.services.errors import (
    ReviewStoreError,
    UserReviewAlreadyExistsError,
    UserReviewNotFoundError,
)
from movies_api.services.repositories.user_reviews_repo import (
    found_flag,
    review_from_row,
)
from tests.fakes import FakeUniqueViolation
from tests.helpers import new_movie, new_user


async def test_add_then_get_returns_review(reviews_repo):
    user, movie = new_user(), new_movie()
    await reviews_repo.add(user, movie, 8, "solid")
    review = await reviews_repo.get(user, movie)
    assert review.rating == 8
    assert review.review == "solid"
    assert review.created_at is not None
    assert review.updated_at == review.created_at


async def test_second_add_is_already_exists_and_keeps_first(reviews_repo):
    user, movie = new_user(), new_movie()
    await reviews_repo.add(user, movie, 5, "first")
    with pytest.raises(UserReviewAlreadyExistsError):
        await reviews_repo.add(user, movie, 3, "second")
    review = await reviews_repo.get(user, movie)
    assert (review.rating, review.review) == (5, "first")


async def test_other_users_review_same_movie_independently(reviews_repo):
    movie = new_movie()
    await reviews_repo.add(1, movie, 5, "a")
    await reviews_repo.add(2, movie, 9, "b")
    assert (await reviews_repo.get(1, movie)).rating == 5
    assert (await reviews_repo.get(2, movie)).rating == 9


async def test_update_overwrites_rating_and_text(reviews_repo):
    user, movie = new_user(), new_movie()
    await reviews_repo.add(user, movie, 4, "meh")
    await reviews_repo.update(user, movie, 7, "grew on me")
    review = await reviews_repo.get(user, movie)
    assert (review.rating, review.review) == (7, "grew on me")
    assert review.updated_at >= review.created_at


async def test_update_missing_is_not_found(reviews_repo):
    with pytest.raises(UserReviewNotFoundError):
        await reviews_repo.update(new_user(), new_movie(), 7, "x")


async def test_delete_then_get_is_not_found(reviews_repo):
    user, movie = new_user(), new_movie()
    await reviews_repo.add(user, movie, 6, "ok")
    await reviews_repo.delete(user, movie)
    with pytest.raises(UserReviewNotFoundError):
        await reviews_repo.get(user, movie)


async def test_delete_missing_is_not_found(reviews_repo):
    with pytest.raises(UserReviewNotFoundError):
        await reviews_repo.delete(new_user(), new_movie())


async def test_unique_violation_on_other_constraint_is_store_error(
        pool, reviews_repo):
    pool.fail_with = FakeUniqueViolation("user_reviews_pkey")
    with pytest.raises(ReviewStoreError):
        await reviews_repo.add(1, 2, 3, "x")


async def test_driver_error_is_store_error(pool, reviews_repo):
    pool.fail_with = psycopg.OperationalError("connection lost")
    with pytest.raises(ReviewStoreError) as e:
        await reviews_repo.get(1, 2)
    assert isinstance(e.value.__cause__, psycopg.OperationalError)


async def test_one_round_trip_per_operation(pool, reviews_repo):
    await reviews_repo.add(1, 2, 3, "x")
    await reviews_repo.update(1, 2, 4, "y")
    await reviews_repo.get(1, 2)
    await reviews_repo.delete(1, 2)
    assert [params for _, params in pool.calls] == [
        (1, 2, 3, "x"), (1, 2, 4, "y"), (1, 2), (1, 2)]


@pytest.mark.parametrize("row, expected", [
    (None, False),
    ((), False),
    ((None,), False),
    ((False,), False),
    ((True,), True),
])
def test_found_flag(row, expected):
    assert found_flag(row) is expected


def test_review_from_row_not_found_is_none():
    assert review_from_row((None, None, None, None, False)) is None
