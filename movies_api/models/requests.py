from typing import List, Optional, Union

from pydantic import BaseModel, Field


class PagedRequest(BaseModel):
    language: Optional[str] = None
    page: Optional[int] = Field(default=None, ge=1, le=500)


class RegionalListRequest(PagedRequest):
    region: Optional[str] = None


class GetTopRatedMoviesRequest(RegionalListRequest):
    pass


class GetPopularMoviesRequest(RegionalListRequest):
    pass


class GetNowPlayingMoviesRequest(RegionalListRequest):
    pass


class GetUpcomingMoviesRequest(RegionalListRequest):
    pass


class SimilarMoviesRequest(PagedRequest):
    id: int = Field(gt=0)


class SearchMoviesRequest(RegionalListRequest):
    query: str = Field(min_length=1)
    include_adult: Optional[bool] = None
    year: Optional[str] = None
    primary_release_year: Optional[str] = None


class GetMovieDetailsRequest(BaseModel):
    id: int = Field(gt=0)
    language: Optional[str] = None


class GetMovieCreditsRequest(BaseModel):
    id: int = Field(gt=0)
    language: Optional[str] = None


class GetMovieReviewsRequest(PagedRequest):
    id: int = Field(gt=0)


class GetMovieGenresRequest(BaseModel):
    language: Optional[str] = None


class DiscoverMoviesRequest(RegionalListRequest):
    """Discover filters, forwarded to the provider as-is.

    `sort_by` and `with_watch_monetization_types` accept enum names or
    numbers; unknown values degrade to "unspecified" instead of failing.
    """

    certification: Optional[str] = None
    certification_country: Optional[str] = None
    certification_gte: Optional[str] = None
    certification_lte: Optional[str] = None
    include_adult: Optional[bool] = None
    include_video: Optional[bool] = None
    primary_release_year: Optional[int] = None
    primary_release_date_gte: Optional[str] = None
    primary_release_date_lte: Optional[str] = None
    release_date_gte: Optional[str] = None
    release_date_lte: Optional[str] = None
    sort_by: Optional[Union[int, str]] = None
    vote_average_gte: Optional[float] = None
    vote_average_lte: Optional[float] = None
    vote_count_gte: Optional[float] = None
    vote_count_lte: Optional[float] = None
    watch_region: Optional[str] = None
    with_cast: Optional[str] = None
    with_companies: Optional[str] = None
    with_crew: Optional[str] = None
    with_genres: Optional[str] = None
    with_keywords: Optional[str] = None
    with_origin_country: Optional[str] = None
    with_original_language: Optional[str] = None
    with_people: Optional[str] = None
    with_runtime_gte: Optional[int] = None
    with_runtime_lte: Optional[int] = None
    with_watch_monetization_types: List[Union[int, str]] = []
    with_watch_providers: Optional[str] = None
    without_companies: Optional[str] = None
    without_genres: Optional[str] = None
    without_keywords: Optional[str] = None
    year: Optional[int] = None
