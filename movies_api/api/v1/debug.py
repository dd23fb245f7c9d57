from http import HTTPStatus
from fastapi import APIRouter, FastAPI
import sentry_sdk

router = APIRouter(tags=["debug"])


@router.get("/__sentry-test", status_code=HTTPStatus.NO_CONTENT)
async def sentry_test():
    sentry_sdk.capture_message("Sentry test ping from movies_service")
    return None


def include_debug_routes(app: FastAPI, enabled: bool) -> None:
    # подключаем эндпоинт только если явно разрешён
    if enabled:
        app.include_router(router)
