import logging

from psycopg_pool import AsyncConnectionPool

from movies_api.core.config import Settings

logger = logging.getLogger(__name__)


async def open_pool(settings: Settings) -> AsyncConnectionPool:
    """
    Пул соединений Postgres с лимитами из настроек.
    Создаётся один раз в lifespan и передаётся в репозиторий.
    """
    if not settings.postgres_dsn:
        raise RuntimeError("POSTGRES_DSN is not set")

    pool = AsyncConnectionPool(
        settings.postgres_dsn,
        min_size=settings.postgres_max_idle_connections,
        max_size=settings.postgres_max_open_connections,
        max_lifetime=3600,
        max_idle=3600,
        kwargs={"application_name": settings.app_name},
        name="movies-reviews",
        open=False,
    )
    # не держим запуск дольше таймаута, если база ещё поднимается
    await pool.open(wait=False)
    try:
        await pool.check()
    except Exception as e:
        logger.warning(
            "postgres_check_failed", extra={"err": str(e)})
    return pool


async def close_pool(pool: AsyncConnectionPool | None) -> None:
    if pool is not None:
        await pool.close()
