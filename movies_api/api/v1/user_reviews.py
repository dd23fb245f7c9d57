from http import HTTPStatus
from fastapi import APIRouter, Depends

from movies_api.core.call_context import CallContext
from movies_api.dependencies import get_call_context, get_movies_service
from movies_api.services.movies_service import MoviesService
from movies_api.models.user_reviews import (
    AddUserMovieReviewRequest, AddUserMovieReviewResponse,
    DeleteUserMovieReviewRequest, DeleteUserMovieReviewResponse,
    GetUserMovieReviewRequest, GetUserMovieReviewResponse,
    UpdateUserMovieReviewRequest, UpdateUserMovieReviewResponse,
)
from movies_api.api.http_utils import handle_rpc_errors
from movies_api.api.v1.catalog import RPC_PREFIX

router = APIRouter(prefix=RPC_PREFIX, tags=["user-reviews"])


@router.post("/AddUserMovieReview",
             response_model=AddUserMovieReviewResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def add_user_movie_review(
    body: AddUserMovieReviewRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.add_user_movie_review(ctx, body)


@router.post("/UpdateUserMovieReview",
             response_model=UpdateUserMovieReviewResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def update_user_movie_review(
    body: UpdateUserMovieReviewRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.update_user_movie_review(ctx, body)


@router.post("/DeleteUserMovieReview",
             response_model=DeleteUserMovieReviewResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def delete_user_movie_review(
    body: DeleteUserMovieReviewRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.delete_user_movie_review(ctx, body)


@router.post("/GetUserMovieReview",
             response_model=GetUserMovieReviewResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_user_movie_review(
    body: GetUserMovieReviewRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_user_movie_review(ctx, body)
