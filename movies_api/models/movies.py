from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from movies_api.models.enums import Gender


class WireModel(BaseModel):
    # ответы собираются заново на каждый запрос и не меняются
    model_config = ConfigDict(frozen=True)


class Genre(WireModel):
    id: int = 0
    name: str = ""


class ProductionCompany(WireModel):
    id: int = 0
    logo_url: Optional[str] = None
    name: str = ""
    origin_country: str = ""


class ProductionCountry(WireModel):
    iso_3166_1: str = ""
    name: str = ""


class MovieSummary(WireModel):
    adult: bool = False
    genre_ids: List[int] = []
    id: int = 0
    original_language: str = ""
    original_title: str = ""
    overview: str = ""
    popularity: Optional[float] = None
    poster_url: Optional[str] = None
    release_date: Optional[datetime] = None
    title: str = ""
    rating_average_critics: Optional[float] = None
    rating_count_critics: int = 0


class DateRange(WireModel):
    maximum: Optional[datetime] = None
    minimum: Optional[datetime] = None


class MovieListResponse(WireModel):
    page: int = 0
    results: List[MovieSummary] = []
    total_pages: int = 0
    total_results: int = 0


class DatedMovieListResponse(MovieListResponse):
    dates: DateRange = DateRange()


class MovieDetails(WireModel):
    adult: bool = False
    budget: int = 0
    genres: List[Genre] = []
    homepage: str = ""
    id: int = 0
    imdb_id: str = ""
    original_language: str = ""
    original_title: str = ""
    overview: str = ""
    popularity: Optional[float] = None
    poster_url: Optional[str] = None
    production_companies: List[ProductionCompany] = []
    production_countries: List[ProductionCountry] = []
    release_date: Optional[datetime] = None
    revenue: int = 0
    runtime: Optional[int] = None
    status: str = ""
    tagline: str = ""
    title: str = ""
    rating_average_critics: Optional[float] = None
    rating_count_critics: int = 0


class CastMember(WireModel):
    adult: bool = False
    gender: Gender = Gender.NOT_SET_OR_NOT_SPECIFIED
    id: int = 0
    known_department: str = ""
    name: str = ""
    original_name: str = ""
    popularity: Optional[float] = None
    profile_url: Optional[str] = None
    cast_id: int = 0
    character: str = ""
    credit_id: str = ""
    order: int = 0


class CrewMember(WireModel):
    adult: bool = False
    gender: Gender = Gender.NOT_SET_OR_NOT_SPECIFIED
    id: int = 0
    known_department: str = ""
    name: str = ""
    original_name: str = ""
    popularity: Optional[float] = None
    profile_url: Optional[str] = None
    credit_id: str = ""
    department: str = ""
    job: str = ""


class MovieCreditsResponse(WireModel):
    cast: List[CastMember] = []
    crew: List[CrewMember] = []


class CriticAuthorDetails(WireModel):
    name: str = ""
    username: str = ""
    avatar_url: Optional[str] = None
    rating: Optional[float] = None


class CriticReview(WireModel):
    id: str = ""
    author: str = ""
    author_details: CriticAuthorDetails = CriticAuthorDetails()
    content: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    url: str = ""


class MovieReviewsResponse(WireModel):
    critic_reviews: List[CriticReview] = []
    page: int = 0
    total_pages: int = 0
    total_results: int = 0


class MovieGenresResponse(WireModel):
    genres: List[Genre] = []
