from fastapi import Depends, Header, HTTPException, Request, status

from movies_api.core.call_context import CallContext, Identity
from movies_api.core.config import settings
from movies_api.models.user_reviews import BIGINT_MAX
from movies_api.services.movies_service import MoviesService


def identity_header(
        x_user_id: str | None = Header(None, alias="X-User-Id"),
) -> Identity | None:
    # заголовок ставит шлюз после проверки токена;
    # его отсутствие решает сервис (unauthenticated), а не валидация
    if x_user_id is None:
        return None
    try:
        user_id = int(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid X-User-Id")
    if not 0 < user_id <= BIGINT_MAX:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Invalid X-User-Id")
    return Identity(user_id=user_id)


def timeout_header(
        x_request_timeout_ms: int | None = Header(
            None, alias="X-Request-Timeout-Ms", ge=1),
) -> float:
    timeout_ms = x_request_timeout_ms or settings.request_timeout_ms
    return timeout_ms / 1000


async def get_call_context(
        request: Request,
        identity: Identity | None = Depends(identity_header),
        timeout_seconds: float = Depends(timeout_header),
) -> CallContext:
    # контекст собирается заново на каждый запрос
    return CallContext.with_timeout(
        timeout_seconds,
        identity=identity,
        is_disconnected=request.is_disconnected,
    )


def get_movies_service(request: Request) -> MoviesService:
    # единственный экземпляр собирается в lifespan
    return request.app.state.movies_service
