import uvicorn

from movies_api.core.config import settings


def main() -> None:
    # логирование настраивает lifespan, uvicorn свой конфиг не ставит
    uvicorn.run("movies_api.main:app", host=settings.host,
                port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
