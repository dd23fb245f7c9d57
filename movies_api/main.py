import logging

from fastapi import FastAPI

from contextlib import asynccontextmanager

from movies_api.clients.tmdb import TMDBClient
from movies_api.core.config import Settings, settings
from movies_api.core.logger import setup_json_logging, shutdown_logging
from movies_api.core.middleware import RequestContextMiddleware
from movies_api.core.sentry import init_sentry
from movies_api.db.postgres import close_pool, open_pool
from movies_api.services.catalog_service import CatalogService
from movies_api.services.movies_service import MoviesService
from movies_api.services.normalizer import ImageSettings, MovieNormalizer
from movies_api.services.repositories.user_reviews_repo import (
    UserReviewsRepo,
)

from movies_api.api.v1.catalog import router as catalog_router
from movies_api.api.v1.user_reviews import router as user_reviews_router
from movies_api.api.v1.debug import include_debug_routes

logger = logging.getLogger(__name__)


def image_settings(cfg: Settings) -> ImageSettings:
    return ImageSettings(
        base_url=cfg.tmdb_image_base_url,
        cast_profile_width=cfg.cast_member_profile_image_width,
        crew_profile_width=cfg.crew_member_profile_image_width,
        movie_summary_poster_width=cfg.simple_movie_poster_image_width,
        company_logo_width=cfg.production_company_logo_image_width,
        movie_details_poster_width=cfg.movie_details_poster_image_width,
        avatar_width=cfg.avatar_image_width,
    )


def build_movies_service(cfg: Settings, tmdb: TMDBClient,
                         pool) -> MoviesService:
    catalog = CatalogService(tmdb, MovieNormalizer(image_settings(cfg)))
    return MoviesService(catalog, UserReviewsRepo(pool))


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 1) логи до всего
    setup_json_logging(service=settings.app_name)
    init_sentry(settings.sentry_dsn, environment=settings.env)

    if not settings.tmdb_api_key:
        raise RuntimeError("TMDB_API_KEY is not set")

    # 2) пул Postgres и HTTP-клиент TMDb, по одному на процесс
    pool = await open_pool(settings)
    tmdb = TMDBClient.create(
        settings.tmdb_api_key,
        base_url=settings.tmdb_api_base_url,
        timeout_seconds=settings.tmdb_timeout_seconds,
    )
    app.state.movies_service = build_movies_service(settings, tmdb, pool)
    logger.info("movies_service_started", extra={"env": settings.env})

    try:
        yield
    finally:
        await tmdb.aclose()
        await close_pool(pool)
        shutdown_logging()


app = FastAPI(title="Movies Service", lifespan=lifespan)

# request_id + access JSON
app.add_middleware(RequestContextMiddleware)

# приглушим штатный uvicorn-access, чтобы не было дублей
logging.getLogger("uvicorn.access").setLevel("WARNING")

include_debug_routes(app, settings.sentry_test_enabled)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(catalog_router)
app.include_router(user_reviews_router)
