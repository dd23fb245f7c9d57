"""Catalog facade over TMDb: one coroutine per catalog query."""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

from movies_api.clients.tmdb import TMDBClient
from movies_api.models.movies import (
    DatedMovieListResponse,
    MovieCreditsResponse,
    MovieDetails,
    MovieGenresResponse,
    MovieListResponse,
    MovieReviewsResponse,
)
from movies_api.models.requests import DiscoverMoviesRequest
from movies_api.services.errors import MovieNotFoundError, ProviderHTTPError
from movies_api.services.normalizer import (
    MovieNormalizer,
    provider_sort_by,
    provider_watch_monetization_types,
)


class CatalogService:
    """Forwards filters to the provider and normalizes what comes back.

    Only id-keyed lookups (details, credits, reviews, similar) translate
    a provider 404 into `MovieNotFoundError`; every other failure
    propagates as `ProviderError`. Payload contents are never inspected
    here, that is the normalizer's job.
    """

    def __init__(self, client: TMDBClient,
                 normalizer: MovieNormalizer) -> None:
        self.client = client
        self.normalizer = normalizer

    # ---------- helpers ----------

    async def _get_movie(
        self,
        movie_id: int,
        path: str,
        params: Dict[str, Any],
    ) -> Dict[str, Any]:
        """GET an id-keyed resource; provider 404 -> MovieNotFoundError."""
        try:
            return await self.client.get_json(path, params)
        except ProviderHTTPError as error:
            if error.status_code == HTTPStatus.NOT_FOUND:
                raise MovieNotFoundError(movie_id) from error
            raise

    @staticmethod
    def _list_params(
        language: Optional[str],
        page: Optional[int],
        region: Optional[str],
    ) -> Dict[str, Any]:
        return {'language': language, 'page': page, 'region': region}

    # ---------- lists ----------

    async def top_rated(
        self,
        language: Optional[str] = None,
        page: Optional[int] = None,
        region: Optional[str] = None,
    ) -> MovieListResponse:
        payload = await self.client.get_json(
            '/movie/top_rated', self._list_params(language, page, region))
        return self.normalizer.movie_list(payload)

    async def popular(
        self,
        language: Optional[str] = None,
        page: Optional[int] = None,
        region: Optional[str] = None,
    ) -> MovieListResponse:
        payload = await self.client.get_json(
            '/movie/popular', self._list_params(language, page, region))
        return self.normalizer.movie_list(payload)

    async def now_playing(
        self,
        language: Optional[str] = None,
        page: Optional[int] = None,
        region: Optional[str] = None,
    ) -> DatedMovieListResponse:
        payload = await self.client.get_json(
            '/movie/now_playing', self._list_params(language, page, region))
        return self.normalizer.dated_movie_list(payload)

    async def upcoming(
        self,
        language: Optional[str] = None,
        page: Optional[int] = None,
        region: Optional[str] = None,
    ) -> DatedMovieListResponse:
        payload = await self.client.get_json(
            '/movie/upcoming', self._list_params(language, page, region))
        return self.normalizer.dated_movie_list(payload)

    async def similar(
        self,
        movie_id: int,
        language: Optional[str] = None,
        page: Optional[int] = None,
    ) -> MovieListResponse:
        payload = await self._get_movie(
            movie_id,
            f'/movie/{movie_id}/similar',
            {'language': language, 'page': page},
        )
        return self.normalizer.movie_list(payload)

    async def search(
        self,
        query: str,
        include_adult: Optional[bool] = None,
        language: Optional[str] = None,
        page: Optional[int] = None,
        year: Optional[str] = None,
        region: Optional[str] = None,
        primary_release_year: Optional[str] = None,
    ) -> MovieListResponse:
        payload = await self.client.get_json(
            '/search/movie',
            {
                'query': query,
                'include_adult': include_adult,
                'language': language,
                'page': page,
                'year': year,
                'region': region,
                'primary_release_year': primary_release_year,
            },
        )
        return self.normalizer.movie_list(payload)

    async def discover(self,
                       filters: DiscoverMoviesRequest) -> MovieListResponse:
        monetization = provider_watch_monetization_types(
            filters.with_watch_monetization_types)
        payload = await self.client.get_json(
            '/discover/movie',
            {
                'certification': filters.certification,
                'certification_country': filters.certification_country,
                'certification.gte': filters.certification_gte,
                'certification.lte': filters.certification_lte,
                'include_adult': filters.include_adult,
                'include_video': filters.include_video,
                'language': filters.language,
                'page': filters.page,
                'primary_release_year': filters.primary_release_year,
                'primary_release_date.gte': filters.primary_release_date_gte,
                'primary_release_date.lte': filters.primary_release_date_lte,
                'region': filters.region,
                'release_date.gte': filters.release_date_gte,
                'release_date.lte': filters.release_date_lte,
                'sort_by': provider_sort_by(filters.sort_by),
                'vote_average.gte': filters.vote_average_gte,
                'vote_average.lte': filters.vote_average_lte,
                'vote_count.gte': filters.vote_count_gte,
                'vote_count.lte': filters.vote_count_lte,
                'watch_region': filters.watch_region,
                'with_cast': filters.with_cast,
                'with_companies': filters.with_companies,
                'with_crew': filters.with_crew,
                'with_genres': filters.with_genres,
                'with_keywords': filters.with_keywords,
                'with_origin_country': filters.with_origin_country,
                'with_original_language': filters.with_original_language,
                'with_people': filters.with_people,
                'with_runtime.gte': filters.with_runtime_gte,
                'with_runtime.lte': filters.with_runtime_lte,
                'with_watch_monetization_types': '|'.join(monetization),
                'with_watch_providers': filters.with_watch_providers,
                'without_companies': filters.without_companies,
                'without_genres': filters.without_genres,
                'without_keywords': filters.without_keywords,
                'year': filters.year,
            },
        )
        return self.normalizer.movie_list(payload)

    # ---------- single movie ----------

    async def details(self, movie_id: int,
                      language: Optional[str] = None) -> MovieDetails:
        payload = await self._get_movie(
            movie_id, f'/movie/{movie_id}', {'language': language})
        return self.normalizer.movie_details(payload)

    async def credits(self, movie_id: int,
                      language: Optional[str] = None) -> MovieCreditsResponse:
        payload = await self._get_movie(
            movie_id, f'/movie/{movie_id}/credits', {'language': language})
        return self.normalizer.credits(payload)

    async def reviews(
        self,
        movie_id: int,
        language: Optional[str] = None,
        page: Optional[int] = None,
    ) -> MovieReviewsResponse:
        payload = await self._get_movie(
            movie_id,
            f'/movie/{movie_id}/reviews',
            {'language': language, 'page': page},
        )
        return self.normalizer.reviews(payload)

    # ---------- genres ----------

    async def genres(self,
                     language: Optional[str] = None) -> MovieGenresResponse:
        payload = await self.client.get_json(
            '/genre/movie/list', {'language': language})
        return self.normalizer.genre_list(payload)
