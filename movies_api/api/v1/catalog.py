from http import HTTPStatus
from fastapi import APIRouter, Depends

from movies_api.core.call_context import CallContext
from movies_api.dependencies import get_call_context, get_movies_service
from movies_api.services.movies_service import MoviesService
from movies_api.models.movies import (
    DatedMovieListResponse, MovieCreditsResponse, MovieDetails,
    MovieGenresResponse, MovieListResponse, MovieReviewsResponse,
)
from movies_api.models.requests import (
    DiscoverMoviesRequest, GetMovieCreditsRequest, GetMovieDetailsRequest,
    GetMovieGenresRequest, GetMovieReviewsRequest,
    GetNowPlayingMoviesRequest, GetPopularMoviesRequest,
    GetTopRatedMoviesRequest, GetUpcomingMoviesRequest,
    SearchMoviesRequest, SimilarMoviesRequest,
)
from movies_api.api.http_utils import handle_rpc_errors

RPC_PREFIX = "/api/v1/MoviesService"

router = APIRouter(prefix=RPC_PREFIX, tags=["catalog"])


@router.post("/GetTopRatedMovies", response_model=MovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_top_rated_movies(
    body: GetTopRatedMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_top_rated_movies(ctx, body)


@router.post("/GetPopularMovies", response_model=MovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_popular_movies(
    body: GetPopularMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_popular_movies(ctx, body)


@router.post("/GetNowPlayingMovies", response_model=DatedMovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_now_playing_movies(
    body: GetNowPlayingMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_now_playing_movies(ctx, body)


@router.post("/GetUpcomingMovies", response_model=DatedMovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_upcoming_movies(
    body: GetUpcomingMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_upcoming_movies(ctx, body)


@router.post("/SimilarMovies", response_model=MovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def similar_movies(
    body: SimilarMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.similar_movies(ctx, body)


@router.post("/SearchMovies", response_model=MovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def search_movies(
    body: SearchMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.search_movies(ctx, body)


@router.post("/DiscoverMovies", response_model=MovieListResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def discover_movies(
    body: DiscoverMoviesRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.discover_movies(ctx, body)


@router.post("/GetMovieDetails", response_model=MovieDetails,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_movie_details(
    body: GetMovieDetailsRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_movie_details(ctx, body)


@router.post("/GetMovieCredits", response_model=MovieCreditsResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_movie_credits(
    body: GetMovieCreditsRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_movie_credits(ctx, body)


@router.post("/GetMovieReviews", response_model=MovieReviewsResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_movie_reviews(
    body: GetMovieReviewsRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_movie_reviews(ctx, body)


@router.post("/GetMovieGenres", response_model=MovieGenresResponse,
             status_code=HTTPStatus.OK)
@handle_rpc_errors
async def get_movie_genres(
    body: GetMovieGenresRequest,
    ctx: CallContext = Depends(get_call_context),
    svc: MoviesService = Depends(get_movies_service),
):
    return await svc.get_movie_genres(ctx, body)
