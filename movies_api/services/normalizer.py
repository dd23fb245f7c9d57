"""Mapping of TMDb JSON payloads onto the service wire models.

Every public function and `MovieNormalizer` method is total: `None`,
a wrong JSON type or a missing key never raises, it degrades to the
zero value of the target field. Optional numbers stay `None` when the
provider omits them, image paths become absolute URLs only when present,
and unparsable dates become `None`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import IntEnum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Type, TypeVar

from movies_api.models.enums import Gender, SortBy, WatchMonetizationType
from movies_api.models.movies import (
    CastMember,
    CrewMember,
    CriticAuthorDetails,
    CriticReview,
    DateRange,
    DatedMovieListResponse,
    Genre,
    MovieCreditsResponse,
    MovieDetails,
    MovieGenresResponse,
    MovieListResponse,
    MovieReviewsResponse,
    MovieSummary,
    ProductionCompany,
    ProductionCountry,
)

E = TypeVar('E', bound=IntEnum)

_DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')
_RFC3339_RE = re.compile(
    r'^(?P<date>\d{4}-\d{2}-\d{2})[Tt ](?P<time>\d{2}:\d{2}:\d{2})'
    r'(?:\.(?P<frac>\d+))?(?P<tz>[Zz]|[+-]\d{2}:\d{2})$',
)

_INT_RE = re.compile(r'^-?[0-9]+$')

_EMPTY: Mapping[str, Any] = {}


@dataclass(frozen=True)
class ImageSettings:
    """Image CDN base URL and the width tier used for each image field."""

    base_url: str = 'https://image.tmdb.org/t/p'
    cast_profile_width: int = 185
    crew_profile_width: int = 185
    movie_summary_poster_width: int = 342
    company_logo_width: int = 92
    movie_details_poster_width: int = 500
    avatar_width: int = 45

    def url(self, path: Any, width: int) -> Optional[str]:
        """Absolute URL for a relative image path, `None` for no path."""
        if not isinstance(path, str):
            return None
        relative = path.strip().lstrip('/')
        if not relative:
            return None
        return '{0}/w{1}/{2}'.format(self.base_url.rstrip('/'), width,
                                      relative)


# ---------- scalar coercion ----------

def as_mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else _EMPTY


def as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, (list, tuple)) else []


def as_str(value: Any) -> str:
    return value if isinstance(value, str) else ''


def as_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def optional_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def as_int(value: Any) -> int:
    number = optional_int(value)
    return 0 if number is None else number


def optional_float(value: Any) -> Optional[float]:
    """Provider number or `None` when absent; `0.0` is a real value."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    return None


def int_list(values: Any) -> List[int]:
    return [
        number for number in map(optional_int, as_list(values))
        if number is not None
    ]


# ---------- dates ----------

def parse_date(value: Any) -> Optional[datetime]:
    """`YYYY-MM-DD` to midnight UTC; anything else is `None`."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        return None
    try:
        parsed = datetime.strptime(value, '%Y-%m-%d')
    except ValueError:
        return None
    return parsed.replace(tzinfo=timezone.utc)


def parse_rfc3339(value: Any) -> Optional[datetime]:
    """RFC3339 timestamp (with offset) to an aware UTC datetime."""
    if not isinstance(value, str):
        return None
    match = _RFC3339_RE.match(value.strip())
    if match is None:
        return None
    frac = (match.group('frac') or '').ljust(6, '0')[:6]
    tz = match.group('tz')
    if tz in {'Z', 'z'}:
        tz = '+00:00'
    iso = '{0}T{1}.{2}{3}'.format(match.group('date'), match.group('time'),
                                  frac, tz)
    try:
        return datetime.fromisoformat(iso).astimezone(timezone.utc)
    except ValueError:
        return None


# ---------- enum cross-walls ----------

def resolve_enum(enum_cls: Type[E], value: Any) -> E:
    """Wire enum member by number or name; unknown -> member `0`."""
    unspecified = enum_cls(0)
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, bool):
        return unspecified
    if isinstance(value, str):
        name = value.strip().upper()
        if _INT_RE.match(name):
            value = int(name)
        else:
            return enum_cls.__members__.get(name, unspecified)
    if isinstance(value, int):
        try:
            return enum_cls(value)
        except ValueError:
            return unspecified
    return unspecified


def map_gender(value: Any) -> Gender:
    """TMDb gender code to `Gender`."""
    code = optional_int(value)
    if code == 1:
        return Gender.FEMALE
    if code == 2:
        return Gender.MALE
    if code == 3:
        return Gender.NON_BINARY
    return Gender.NOT_SET_OR_NOT_SPECIFIED


_PROVIDER_SORT_BY: Dict[SortBy, str] = {
    SortBy.POPULARITY_ASC: 'popularity.asc',
    SortBy.POPULARITY_DESC: 'popularity.desc',
    SortBy.REVENUE_ASC: 'revenue.asc',
    SortBy.REVENUE_DESC: 'revenue.desc',
    SortBy.PRIMARY_RELEASE_DATE_ASC: 'primary_release_date.asc',
    SortBy.PRIMARY_RELEASE_DATE_DESC: 'primary_release_date.desc',
    SortBy.ORIGINAL_TITLE_ASC: 'original_title.asc',
    SortBy.ORIGINAL_TITLE_DESC: 'original_title.desc',
    SortBy.VOTE_AVERAGE_ASC: 'vote_average.asc',
    SortBy.VOTE_AVERAGE_DESC: 'vote_average.desc',
    SortBy.VOTE_COUNT_ASC: 'vote_count.asc',
    SortBy.VOTE_COUNT_DESC: 'vote_count.desc',
}

_PROVIDER_MONETIZATION: Dict[WatchMonetizationType, str] = {
    WatchMonetizationType.FLATRATE: 'flatrate',
    WatchMonetizationType.FREE: 'free',
    WatchMonetizationType.ADS: 'ads',
    WatchMonetizationType.RENT: 'rent',
    WatchMonetizationType.BUY: 'buy',
}


def map_sort_by(value: Any) -> SortBy:
    return resolve_enum(SortBy, value)


def provider_sort_by(value: Any) -> Optional[str]:
    """Wire sort key to the provider's `sort_by`; unspecified -> `None`."""
    return _PROVIDER_SORT_BY.get(map_sort_by(value))


def map_watch_monetization_type(value: Any) -> WatchMonetizationType:
    return resolve_enum(WatchMonetizationType, value)


def provider_watch_monetization_types(values: Iterable[Any]) -> List[str]:
    """Known monetization types as provider strings, unspecified dropped."""
    mapped: List[str] = []
    for value in values or ():
        provider_value = _PROVIDER_MONETIZATION.get(
            map_watch_monetization_type(value))
        if provider_value is not None:
            mapped.append(provider_value)
    return mapped


# ---------- entities ----------

class MovieNormalizer:
    """Builds wire models from provider payloads using one image config."""

    def __init__(self, images: Optional[ImageSettings] = None) -> None:
        self.images = images or ImageSettings()

    # ---------- movies ----------

    def movie_summary(self, record: Any) -> MovieSummary:
        movie = as_mapping(record)
        return MovieSummary(
            adult=as_bool(movie.get('adult')),
            genre_ids=int_list(movie.get('genre_ids')),
            id=as_int(movie.get('id')),
            original_language=as_str(movie.get('original_language')),
            original_title=as_str(movie.get('original_title')),
            overview=as_str(movie.get('overview')),
            popularity=optional_float(movie.get('popularity')),
            poster_url=self.images.url(
                movie.get('poster_path'),
                self.images.movie_summary_poster_width,
            ),
            release_date=parse_date(movie.get('release_date')),
            title=as_str(movie.get('title')),
            rating_average_critics=optional_float(movie.get('vote_average')),
            rating_count_critics=as_int(movie.get('vote_count')),
        )

    def movie_summaries(self, records: Any) -> List[MovieSummary]:
        return [self.movie_summary(record) for record in as_list(records)]

    def date_range(self, record: Any) -> DateRange:
        dates = as_mapping(record)
        return DateRange(
            maximum=parse_date(dates.get('maximum')),
            minimum=parse_date(dates.get('minimum')),
        )

    def movie_list(self, response: Any) -> MovieListResponse:
        """Paged list: top rated, popular, similar, search, discover."""
        payload = as_mapping(response)
        return MovieListResponse(
            page=as_int(payload.get('page')),
            results=self.movie_summaries(payload.get('results')),
            total_pages=as_int(payload.get('total_pages')),
            total_results=as_int(payload.get('total_results')),
        )

    def dated_movie_list(self, response: Any) -> DatedMovieListResponse:
        """Paged list carrying a release window: now playing, upcoming."""
        payload = as_mapping(response)
        return DatedMovieListResponse(
            dates=self.date_range(payload.get('dates')),
            page=as_int(payload.get('page')),
            results=self.movie_summaries(payload.get('results')),
            total_pages=as_int(payload.get('total_pages')),
            total_results=as_int(payload.get('total_results')),
        )

    # ---------- details ----------

    def genre(self, record: Any) -> Genre:
        genre = as_mapping(record)
        return Genre(id=as_int(genre.get('id')),
                     name=as_str(genre.get('name')))

    def genres(self, records: Any) -> List[Genre]:
        return [self.genre(record) for record in as_list(records)]

    def genre_list(self, response: Any) -> MovieGenresResponse:
        return MovieGenresResponse(
            genres=self.genres(as_mapping(response).get('genres')))

    def production_company(self, record: Any) -> ProductionCompany:
        company = as_mapping(record)
        return ProductionCompany(
            id=as_int(company.get('id')),
            logo_url=self.images.url(company.get('logo_path'),
                                     self.images.company_logo_width),
            name=as_str(company.get('name')),
            origin_country=as_str(company.get('origin_country')),
        )

    def production_country(self, record: Any) -> ProductionCountry:
        country = as_mapping(record)
        return ProductionCountry(
            iso_3166_1=as_str(country.get('iso_3166_1')),
            name=as_str(country.get('name')),
        )

    def movie_details(self, response: Any) -> MovieDetails:
        movie = as_mapping(response)
        return MovieDetails(
            adult=as_bool(movie.get('adult')),
            budget=as_int(movie.get('budget')),
            genres=self.genres(movie.get('genres')),
            homepage=as_str(movie.get('homepage')),
            id=as_int(movie.get('id')),
            imdb_id=as_str(movie.get('imdb_id')),
            original_language=as_str(movie.get('original_language')),
            original_title=as_str(movie.get('original_title')),
            overview=as_str(movie.get('overview')),
            popularity=optional_float(movie.get('popularity')),
            poster_url=self.images.url(
                movie.get('poster_path'),
                self.images.movie_details_poster_width,
            ),
            production_companies=[
                self.production_company(company)
                for company in as_list(movie.get('production_companies'))
            ],
            production_countries=[
                self.production_country(country)
                for country in as_list(movie.get('production_countries'))
            ],
            release_date=parse_date(movie.get('release_date')),
            revenue=as_int(movie.get('revenue')),
            runtime=optional_int(movie.get('runtime')),
            status=as_str(movie.get('status')),
            tagline=as_str(movie.get('tagline')),
            title=as_str(movie.get('title')),
            rating_average_critics=optional_float(movie.get('vote_average')),
            rating_count_critics=as_int(movie.get('vote_count')),
        )

    # ---------- credits ----------

    def cast_member(self, record: Any) -> CastMember:
        person = as_mapping(record)
        return CastMember(
            adult=as_bool(person.get('adult')),
            gender=map_gender(person.get('gender')),
            id=as_int(person.get('id')),
            known_department=as_str(person.get('known_for_department')),
            name=as_str(person.get('name')),
            original_name=as_str(person.get('original_name')),
            popularity=optional_float(person.get('popularity')),
            profile_url=self.images.url(person.get('profile_path'),
                                        self.images.cast_profile_width),
            cast_id=as_int(person.get('cast_id')),
            character=as_str(person.get('character')),
            credit_id=as_str(person.get('credit_id')),
            order=as_int(person.get('order')),
        )

    def crew_member(self, record: Any) -> CrewMember:
        person = as_mapping(record)
        return CrewMember(
            adult=as_bool(person.get('adult')),
            gender=map_gender(person.get('gender')),
            id=as_int(person.get('id')),
            known_department=as_str(person.get('known_for_department')),
            name=as_str(person.get('name')),
            original_name=as_str(person.get('original_name')),
            popularity=optional_float(person.get('popularity')),
            profile_url=self.images.url(person.get('profile_path'),
                                        self.images.crew_profile_width),
            credit_id=as_str(person.get('credit_id')),
            department=as_str(person.get('department')),
            job=as_str(person.get('job')),
        )

    def credits(self, response: Any) -> MovieCreditsResponse:
        payload = as_mapping(response)
        return MovieCreditsResponse(
            cast=[self.cast_member(person)
                  for person in as_list(payload.get('cast'))],
            crew=[self.crew_member(person)
                  for person in as_list(payload.get('crew'))],
        )

    # ---------- critic reviews ----------

    def critic_author_details(self, record: Any) -> CriticAuthorDetails:
        author = as_mapping(record)
        return CriticAuthorDetails(
            name=as_str(author.get('name')),
            username=as_str(author.get('username')),
            avatar_url=self.images.url(author.get('avatar_path'),
                                       self.images.avatar_width),
            rating=optional_float(author.get('rating')),
        )

    def critic_review(self, record: Any) -> CriticReview:
        review = as_mapping(record)
        return CriticReview(
            id=as_str(review.get('id')),
            author=as_str(review.get('author')),
            author_details=self.critic_author_details(
                review.get('author_details')),
            content=as_str(review.get('content')),
            created_at=parse_rfc3339(review.get('created_at')),
            updated_at=parse_rfc3339(review.get('updated_at')),
            url=as_str(review.get('url')),
        )

    def reviews(self, response: Any) -> MovieReviewsResponse:
        payload = as_mapping(response)
        return MovieReviewsResponse(
            critic_reviews=[
                self.critic_review(review)
                for review in as_list(payload.get('results'))
            ],
            page=as_int(payload.get('page')),
            total_pages=as_int(payload.get('total_pages')),
            total_results=as_int(payload.get('total_results')),
        )
