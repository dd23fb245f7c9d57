import pytest
from httpx import AsyncClient, ASGITransport

from movies_api.clients.tmdb import TMDBClient
from movies_api.main import app
from movies_api.services.catalog_service import CatalogService
from movies_api.services.movies_service import MoviesService
from movies_api.services.normalizer import ImageSettings, MovieNormalizer
from movies_api.services.repositories.user_reviews_repo import (
    UserReviewsRepo,
)
from tests.fakes import FakePool, FakeTMDB

TMDB_BASE_URL = "https://tmdb.test/3"


@pytest.fixture
def images():
    return ImageSettings(base_url="https://img.test/t/p")


@pytest.fixture
def normalizer(images):
    return MovieNormalizer(images)


@pytest.fixture
def tmdb():
    return FakeTMDB()


@pytest.fixture
async def tmdb_client(tmdb):
    client = TMDBClient.create("test-key", base_url=TMDB_BASE_URL,
                               transport=tmdb.transport())
    yield client
    await client.aclose()


@pytest.fixture
def catalog(tmdb_client, normalizer):
    return CatalogService(tmdb_client, normalizer)


@pytest.fixture
def pool():
    return FakePool()


@pytest.fixture
def reviews_repo(pool):
    return UserReviewsRepo(pool)


@pytest.fixture
def service(catalog, reviews_repo):
    return MoviesService(catalog, reviews_repo)


@pytest.fixture
async def client(service):
    """ASGI-клиент без lifespan: сервис подставляем из фейков."""
    app.state.movies_service = service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport,
                           base_url="http://test") as ac:
        yield ac
    del app.state.movies_service
