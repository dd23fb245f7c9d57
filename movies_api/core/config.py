# movies_api/core/config.py
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "movies_service"
    env: str = Field(default="local")
    host: str = "0.0.0.0"
    port: int = 8080

    # TMDb
    tmdb_api_key: str = Field(default="", alias="TMDB_API_KEY")
    tmdb_api_base_url: str = Field(
        default="https://api.themoviedb.org/3",
        alias="TMDB_API_BASE_URL",
    )
    tmdb_image_base_url: str = Field(
        default="https://image.tmdb.org/t/p",
        alias="TMDB_IMAGE_BASE_URL",
    )
    tmdb_timeout_seconds: float = Field(default=10.0,
                                        alias="TMDB_TIMEOUT_SECONDS")

    # ширина картинок для каждого поля wire-модели
    cast_member_profile_image_width: int = Field(
        default=185, alias="TMDB_CAST_MEMBER_PROFILE_IMAGE_WIDTH_SIZE")
    crew_member_profile_image_width: int = Field(
        default=185, alias="TMDB_CREW_MEMBER_PROFILE_IMAGE_WIDTH_SIZE")
    simple_movie_poster_image_width: int = Field(
        default=342, alias="TMDB_SIMPLE_MOVIE_POSTER_IMAGE_WIDTH_SIZE")
    production_company_logo_image_width: int = Field(
        default=92, alias="TMDB_PRODUCTION_COMPANY_LOGO_IMAGE_WIDTH_SIZE")
    movie_details_poster_image_width: int = Field(
        default=500, alias="TMDB_MOVIE_DETAILS_POSTER_IMAGE_WIDTH_SIZE")
    avatar_image_width: int = Field(
        default=45, alias="TMDB_AVATAR_IMAGE_WIDTH_SIZE")

    # Postgres
    postgres_dsn: str = Field(default="", alias="POSTGRES_DSN")
    postgres_max_open_connections: int = Field(
        default=10, alias="POSTGRES_MAX_OPEN_CONNECTIONS")
    postgres_max_idle_connections: int = Field(
        default=1, alias="POSTGRES_MAX_IDLE_CONNECTIONS")

    # дедлайн запроса по умолчанию, если клиент не прислал свой
    request_timeout_ms: int = Field(default=15_000,
                                    alias="REQUEST_TIMEOUT_MS")

    sentry_dsn: str = Field(default="", alias="SENTRY_DSN")
    sentry_test_enabled: bool = Field(default=False,
                                      alias="SENTRY_TEST_ENABLED")
    # Pydantic v2: модель конфигурации
    model_config = SettingsConfigDict(env_file="infra/.env",
                                      extra="ignore",
                                      populate_by_name=True)


settings = Settings()
