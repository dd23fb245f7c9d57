from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

RATING_MIN = 1
RATING_MAX = 10

# ids are BIGINT in the store
BIGINT_MAX = 2**63 - 1


class UserReview(BaseModel):
    model_config = ConfigDict(frozen=True)

    rating: int = 0
    review: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AddUserMovieReviewRequest(BaseModel):
    id: int = Field(gt=0, le=BIGINT_MAX, description="movie id")
    rating: int = Field(ge=RATING_MIN, le=RATING_MAX)
    review: str = Field(min_length=1, max_length=10_000)


class AddUserMovieReviewResponse(BaseModel):
    pass


class UpdateUserMovieReviewRequest(AddUserMovieReviewRequest):
    pass


class UpdateUserMovieReviewResponse(BaseModel):
    pass


class DeleteUserMovieReviewRequest(BaseModel):
    id: int = Field(gt=0, le=BIGINT_MAX, description="movie id")


class DeleteUserMovieReviewResponse(BaseModel):
    pass


class GetUserMovieReviewRequest(BaseModel):
    id: int = Field(gt=0, le=BIGINT_MAX, description="movie id")


class GetUserMovieReviewResponse(BaseModel):
    user_review: UserReview
