from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from movies_api.api.v1.debug import include_debug_routes
from tests.helpers import (
    movie_list_payload,
    movie_record,
    new_movie,
    new_user,
    rpc,
    uid_header,
)


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200 and r.json() == {"status": "ok"}


async def test_request_id_is_echoed(client):
    r = await client.get("/health", headers={"X-Request-Id": "abc-123"})
    assert r.headers["X-Request-Id"] == "abc-123"


async def test_get_top_rated_movies(tmdb, client):
    tmdb.add("/movie/top_rated", movie_list_payload(movie_record()))
    r = await client.post(rpc("GetTopRatedMovies"), json={"page": 1})
    assert r.status_code == 200
    body = r.json()
    assert body["total_pages"] == 42
    assert body["results"][0]["poster_url"].endswith(
        "/w342/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg")


async def test_discover_accepts_enum_names(tmdb, client):
    tmdb.add("/discover/movie", movie_list_payload())
    r = await client.post(rpc("DiscoverMovies"), json={
        "sort_by": "POPULARITY_DESC",
        "with_watch_monetization_types": ["FREE", 5],
    })
    assert r.status_code == 200
    params = tmdb.requests[-1].url.params
    assert params["sort_by"] == "popularity.desc"
    assert params["with_watch_monetization_types"] == "free|buy"


async def test_movie_details_404_maps_to_not_found(tmdb, client):
    tmdb.add("/movie/9999", {"status_code": 34}, status=404)
    r = await client.post(rpc("GetMovieDetails"), json={"id": 9999})
    assert r.status_code == 404
    assert r.json()["detail"]["code"] == "not_found"


async def test_provider_500_maps_to_opaque_internal(tmdb, client):
    tmdb.add("/movie/550", {"status_message": "secret"}, status=500)
    r = await client.post(rpc("GetMovieDetails"), json={"id": 550})
    assert r.status_code == 500
    assert r.json()["detail"] == {"code": "internal",
                                  "message": "internal_error"}


async def test_add_then_get_user_review(client):
    headers = uid_header(7)
    r = await client.post(rpc("AddUserMovieReview"),
                          json={"id": 100, "rating": 4, "review": "ok"},
                          headers=headers)
    assert r.status_code == 200 and r.json() == {}
    r = await client.post(rpc("GetUserMovieReview"), json={"id": 100},
                          headers=headers)
    assert r.status_code == 200
    review = r.json()["user_review"]
    assert review["rating"] == 4 and review["review"] == "ok"


async def test_duplicate_review_returns_409(client):
    user, movie = new_user(), new_movie()
    body = {"id": movie, "rating": 5, "review": "first"}
    await client.post(rpc("AddUserMovieReview"), json=body,
                      headers=uid_header(user))
    r = await client.post(rpc("AddUserMovieReview"),
                          json={**body, "review": "second"},
                          headers=uid_header(user))
    assert r.status_code == 409
    assert r.json()["detail"]["code"] == "already_exists"


async def test_update_and_delete_missing_review_return_404(client):
    user, movie = new_user(), new_movie()
    r = await client.post(rpc("UpdateUserMovieReview"),
                          json={"id": movie, "rating": 3, "review": "x"},
                          headers=uid_header(user))
    assert r.status_code == 404
    r = await client.post(rpc("DeleteUserMovieReview"), json={"id": movie},
                          headers=uid_header(user))
    assert r.status_code == 404


async def test_missing_identity_returns_401(pool, client):
    r = await client.post(rpc("GetUserMovieReview"), json={"id": 100})
    assert r.status_code == 401
    assert r.json()["detail"]["code"] == "unauthenticated"
    assert r.headers["WWW-Authenticate"] == "Bearer"
    assert pool.calls == []


async def test_malformed_identity_returns_422(client):
    r = await client.post(rpc("GetUserMovieReview"), json={"id": 100},
                          headers={"X-User-Id": "not-a-number"})
    assert r.status_code == 422


async def test_rating_out_of_range_returns_422(pool, client):
    r = await client.post(rpc("AddUserMovieReview"),
                          json={"id": 100, "rating": 11, "review": "x"},
                          headers=uid_header(1))
    assert r.status_code == 422
    assert pool.calls == []


async def test_empty_search_query_returns_422(client):
    r = await client.post(rpc("SearchMovies"), json={"query": ""})
    assert r.status_code == 422


async def test_sentry_test_route_only_when_enabled():
    for enabled, expected in ((True, 204), (False, 404)):
        app = FastAPI()
        include_debug_routes(app, enabled)
        async with AsyncClient(transport=ASGITransport(app=app),
                               base_url="http://test") as ac:
            r = await ac.get("/__sentry-test")
        assert r.status_code == expected


async def test_discover_malformed_enum_values_degrade(tmdb, client):
    tmdb.add("/discover/movie", movie_list_payload())
    r = await client.post(rpc("DiscoverMovies"), json={
        "sort_by": "²",
        "with_watch_monetization_types": ["--1", "FREE"],
    })
    assert r.status_code == 200
    params = tmdb.requests[-1].url.params
    assert "sort_by" not in params
    assert params["with_watch_monetization_types"] == "free"


async def test_ids_beyond_bigint_return_422(pool, client):
    r = await client.post(rpc("AddUserMovieReview"),
                          json={"id": 2**63, "rating": 5, "review": "x"},
                          headers=uid_header(1))
    assert r.status_code == 422
    r = await client.post(rpc("GetUserMovieReview"), json={"id": 100},
                          headers={"X-User-Id": str(2**63)})
    assert r.status_code == 422
    assert pool.calls == []
