import random
from typing import Dict

from movies_api.api.v1.catalog import RPC_PREFIX


def new_user() -> int:
    return random.randint(1, 10**9)


def new_movie() -> int:
    return random.randint(1, 10**6)


def uid_header(user_id: int) -> Dict[str, str]:
    return {"X-User-Id": str(user_id)}


def rpc(method: str) -> str:
    return f"{RPC_PREFIX}/{method}"


def movie_record(**overrides) -> dict:
    record = {
        "adult": False,
        "backdrop_path": "/back.jpg",
        "genre_ids": [18, 80],
        "id": 278,
        "original_language": "en",
        "original_title": "The Shawshank Redemption",
        "overview": "Imprisoned in the 1940s...",
        "popularity": 133.4,
        "poster_path": "/q6y0Go1tsGEsmtFryDOJo3dEmqu.jpg",
        "release_date": "1994-09-23",
        "title": "The Shawshank Redemption",
        "video": False,
        "vote_average": 8.7,
        "vote_count": 26000,
    }
    record.update(overrides)
    return record


def movie_list_payload(*records, page: int = 1) -> dict:
    return {
        "page": page,
        "results": list(records),
        "total_pages": 42,
        "total_results": 840,
    }
