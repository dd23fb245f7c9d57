from functools import wraps
from http import HTTPStatus
from fastapi import HTTPException

from movies_api.services.errors import ErrorCode, RpcError

# у nginx это "client closed request"; в HTTPStatus такого кода нет
CLIENT_CLOSED_REQUEST = 499

ERRMAP: dict[ErrorCode, int] = {
    ErrorCode.not_found: HTTPStatus.NOT_FOUND,
    ErrorCode.already_exists: HTTPStatus.CONFLICT,
    ErrorCode.unauthenticated: HTTPStatus.UNAUTHORIZED,
    ErrorCode.canceled: CLIENT_CLOSED_REQUEST,
    ErrorCode.deadline_exceeded: HTTPStatus.GATEWAY_TIMEOUT,
    ErrorCode.internal: HTTPStatus.INTERNAL_SERVER_ERROR,
}


def rpc_error_to_http(error: RpcError) -> HTTPException:
    """RpcError -> HTTPException c телом {"code", "message"}."""
    status = ERRMAP.get(error.code, HTTPStatus.INTERNAL_SERVER_ERROR)
    message = error.message
    if error.code == ErrorCode.internal:
        # наружу внутренние детали не отдаём
        message = "internal_error"
    headers = None
    if error.code == ErrorCode.unauthenticated:
        headers = {"WWW-Authenticate": "Bearer"}
    return HTTPException(
        status_code=status,
        detail={"code": error.code.value, "message": message},
        headers=headers,
    )


def handle_rpc_errors(fn):
    """
    Декоратор для роутов: переводит RpcError сервиса в HTTPException.
    Остальные исключения сюда не доходят, сервис заворачивает их в internal.
    """
    @wraps(fn)
    async def wrapper(*args, **kwargs):
        try:
            return await fn(*args, **kwargs)
        except RpcError as e:
            raise rpc_error_to_http(e) from e
    return wrapper
