"""Movies service: one coroutine per RPC method.

Each method checks the call's cancellation/deadline first, resolves the
identity for review methods, runs one facade/repository call bounded by
the remaining deadline and by the caller staying connected, and
translates domain outcomes into `RpcError`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

from movies_api.core.call_context import CallContext, Identity
from movies_api.models.movies import (
    DatedMovieListResponse,
    MovieCreditsResponse,
    MovieDetails,
    MovieGenresResponse,
    MovieListResponse,
    MovieReviewsResponse,
)
from movies_api.models.requests import (
    DiscoverMoviesRequest,
    GetMovieCreditsRequest,
    GetMovieDetailsRequest,
    GetMovieGenresRequest,
    GetMovieReviewsRequest,
    GetNowPlayingMoviesRequest,
    GetPopularMoviesRequest,
    GetTopRatedMoviesRequest,
    GetUpcomingMoviesRequest,
    SearchMoviesRequest,
    SimilarMoviesRequest,
)
from movies_api.models.user_reviews import (
    AddUserMovieReviewRequest,
    AddUserMovieReviewResponse,
    DeleteUserMovieReviewRequest,
    DeleteUserMovieReviewResponse,
    GetUserMovieReviewRequest,
    GetUserMovieReviewResponse,
    UpdateUserMovieReviewRequest,
    UpdateUserMovieReviewResponse,
)
from movies_api.services.catalog_service import CatalogService
from movies_api.services.errors import (
    ErrorCode,
    MovieNotFoundError,
    RpcError,
    UserReviewAlreadyExistsError,
    UserReviewNotFoundError,
)
from movies_api.services.repositories.user_reviews_repo import (
    UserReviewsRepo,
)

logger = logging.getLogger(__name__)

T = TypeVar('T')

# how often a running call checks whether the caller is still there
DISCONNECT_POLL_SECONDS = 0.05


class MoviesService:
    """RPC entry points over the catalog facade and the reviews store."""

    def __init__(self, catalog: CatalogService,
                 reviews: UserReviewsRepo) -> None:
        self.catalog = catalog
        self.reviews = reviews

    # ---------- helpers ----------

    @staticmethod
    async def _ensure_active(ctx: CallContext) -> None:
        if ctx.deadline_exceeded():
            raise RpcError(ErrorCode.deadline_exceeded)
        if await ctx.cancelled():
            raise RpcError(ErrorCode.canceled)

    @staticmethod
    def _identity(ctx: CallContext, method: str) -> Identity:
        """Caller identity; the gateway must have set it already."""
        if ctx.identity is None:
            logger.error('identity_missing', extra={'method': method})
            raise RpcError(ErrorCode.unauthenticated,
                           'authenticated identity is required')
        return ctx.identity

    @staticmethod
    async def _watch_disconnect(ctx: CallContext) -> None:
        while not await ctx.cancelled():
            await asyncio.sleep(DISCONNECT_POLL_SECONDS)

    async def _bounded(self, ctx: CallContext,
                       call: Callable[[], Awaitable[T]]) -> T:
        """Run `call` until it finishes, the deadline passes or the caller
        goes away; in the last two cases the call is cancelled so its
        HTTP/pool slot is released."""
        if ctx.deadline is None and ctx.is_disconnected is None:
            return await call()

        work = asyncio.ensure_future(call())
        waiters = {work}
        watcher = None
        if ctx.is_disconnected is not None:
            watcher = asyncio.ensure_future(self._watch_disconnect(ctx))
            waiters.add(watcher)
        try:
            done, _ = await asyncio.wait(
                waiters,
                timeout=ctx.remaining(),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            for pending in waiters:
                if not pending.done():
                    pending.cancel()

        if work in done:
            return work.result()
        # let the cancelled call hand its connection back first
        await asyncio.gather(work, return_exceptions=True)
        if watcher is not None and watcher in done:
            watcher.result()
            raise RpcError(ErrorCode.canceled)
        raise RpcError(ErrorCode.deadline_exceeded)

    async def _run(
        self,
        method: str,
        ctx: CallContext,
        call: Callable[[], Awaitable[T]],
    ) -> T:
        try:
            return await self._bounded(ctx, call)
        except RpcError:
            raise
        except (MovieNotFoundError, UserReviewNotFoundError) as error:
            raise RpcError(ErrorCode.not_found, str(error)) from error
        except UserReviewAlreadyExistsError as error:
            raise RpcError(ErrorCode.already_exists, str(error)) from error
        except Exception as error:
            # request-scoped: log, report, answer opaque internal
            logger.exception('internal_error', extra={'method': method})
            raise RpcError(ErrorCode.internal) from error

    # ---------- catalog ----------

    async def get_top_rated_movies(
        self,
        ctx: CallContext,
        request: GetTopRatedMoviesRequest,
    ) -> MovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetTopRatedMovies', ctx,
            lambda: self.catalog.top_rated(
                request.language, request.page, request.region),
        )

    async def get_popular_movies(
        self,
        ctx: CallContext,
        request: GetPopularMoviesRequest,
    ) -> MovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetPopularMovies', ctx,
            lambda: self.catalog.popular(
                request.language, request.page, request.region),
        )

    async def get_now_playing_movies(
        self,
        ctx: CallContext,
        request: GetNowPlayingMoviesRequest,
    ) -> DatedMovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetNowPlayingMovies', ctx,
            lambda: self.catalog.now_playing(
                request.language, request.page, request.region),
        )

    async def get_upcoming_movies(
        self,
        ctx: CallContext,
        request: GetUpcomingMoviesRequest,
    ) -> DatedMovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetUpcomingMovies', ctx,
            lambda: self.catalog.upcoming(
                request.language, request.page, request.region),
        )

    async def similar_movies(
        self,
        ctx: CallContext,
        request: SimilarMoviesRequest,
    ) -> MovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'SimilarMovies', ctx,
            lambda: self.catalog.similar(
                request.id, request.language, request.page),
        )

    async def search_movies(
        self,
        ctx: CallContext,
        request: SearchMoviesRequest,
    ) -> MovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'SearchMovies', ctx,
            lambda: self.catalog.search(
                request.query,
                include_adult=request.include_adult,
                language=request.language,
                page=request.page,
                year=request.year,
                region=request.region,
                primary_release_year=request.primary_release_year,
            ),
        )

    async def discover_movies(
        self,
        ctx: CallContext,
        request: DiscoverMoviesRequest,
    ) -> MovieListResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'DiscoverMovies', ctx,
            lambda: self.catalog.discover(request),
        )

    async def get_movie_details(
        self,
        ctx: CallContext,
        request: GetMovieDetailsRequest,
    ) -> MovieDetails:
        await self._ensure_active(ctx)
        return await self._run(
            'GetMovieDetails', ctx,
            lambda: self.catalog.details(request.id, request.language),
        )

    async def get_movie_credits(
        self,
        ctx: CallContext,
        request: GetMovieCreditsRequest,
    ) -> MovieCreditsResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetMovieCredits', ctx,
            lambda: self.catalog.credits(request.id, request.language),
        )

    async def get_movie_reviews(
        self,
        ctx: CallContext,
        request: GetMovieReviewsRequest,
    ) -> MovieReviewsResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetMovieReviews', ctx,
            lambda: self.catalog.reviews(
                request.id, request.language, request.page),
        )

    async def get_movie_genres(
        self,
        ctx: CallContext,
        request: GetMovieGenresRequest,
    ) -> MovieGenresResponse:
        await self._ensure_active(ctx)
        return await self._run(
            'GetMovieGenres', ctx,
            lambda: self.catalog.genres(request.language),
        )

    # ---------- user reviews ----------

    async def add_user_movie_review(
        self,
        ctx: CallContext,
        request: AddUserMovieReviewRequest,
    ) -> AddUserMovieReviewResponse:
        await self._ensure_active(ctx)
        identity = self._identity(ctx, 'AddUserMovieReview')
        await self._run(
            'AddUserMovieReview', ctx,
            lambda: self.reviews.add(
                identity.user_id, request.id, request.rating, request.review),
        )
        return AddUserMovieReviewResponse()

    async def update_user_movie_review(
        self,
        ctx: CallContext,
        request: UpdateUserMovieReviewRequest,
    ) -> UpdateUserMovieReviewResponse:
        await self._ensure_active(ctx)
        identity = self._identity(ctx, 'UpdateUserMovieReview')
        await self._run(
            'UpdateUserMovieReview', ctx,
            lambda: self.reviews.update(
                identity.user_id, request.id, request.rating, request.review),
        )
        return UpdateUserMovieReviewResponse()

    async def delete_user_movie_review(
        self,
        ctx: CallContext,
        request: DeleteUserMovieReviewRequest,
    ) -> DeleteUserMovieReviewResponse:
        await self._ensure_active(ctx)
        identity = self._identity(ctx, 'DeleteUserMovieReview')
        await self._run(
            'DeleteUserMovieReview', ctx,
            lambda: self.reviews.delete(identity.user_id, request.id),
        )
        return DeleteUserMovieReviewResponse()

    async def get_user_movie_review(
        self,
        ctx: CallContext,
        request: GetUserMovieReviewRequest,
    ) -> GetUserMovieReviewResponse:
        await self._ensure_active(ctx)
        identity = self._identity(ctx, 'GetUserMovieReview')
        review = await self._run(
            'GetUserMovieReview', ctx,
            lambda: self.reviews.get(identity.user_id, request.id),
        )
        return GetUserMovieReviewResponse(user_review=review)
