"""
Error types and the JSON error payload.

Every failure reaches the client as ``{"message": ..., "status": ...}``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ===== Client-facing messages =====

MSG_INVALID_CREDENTIALS = "Неверные учетные данные"
MSG_INVALID_TOKEN = "Неверный токен авторизации"
MSG_UNAUTHORIZED = "Неавторизован"
MSG_INVALID_INPUT = "Ошибка входных данных"
MSG_BAD_REQUEST = "Неверные входные данные"
MSG_NOT_FOUND = "Файл не найден"
MSG_TOO_LARGE = "Файл слишком большой"
MSG_INTERNAL = "Внутренняя ошибка сервера"


# ===== Exceptions =====

class CloudError(Exception):
    """Base class for errors that map onto an HTTP error payload."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = MSG_INTERNAL

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidCredentials(CloudError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = MSG_INVALID_CREDENTIALS


class InvalidToken(CloudError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = MSG_INVALID_TOKEN


class Unauthorized(CloudError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = MSG_UNAUTHORIZED


class InvalidInput(CloudError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = MSG_INVALID_INPUT


class NotFound(CloudError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = MSG_NOT_FOUND


class PayloadTooLarge(CloudError):
    status_code = status.HTTP_413_REQUEST_ENTITY_TOO_LARGE
    default_message = MSG_TOO_LARGE


# ===== Responses =====

def error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"message": message, "status": status_code},
    )


async def cloud_error_handler(request: Request, exc: CloudError) -> JSONResponse:
    logger.warning(
        "%s %s -> %d: %s",
        request.method, request.url.path, exc.status_code, exc.message,
    )
    return error_response(exc.message, exc.status_code)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("Invalid request %s %s: %s", request.method, request.url.path, exc.errors())
    return error_response(MSG_BAD_REQUEST, status.HTTP_400_BAD_REQUEST)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(MSG_INTERNAL, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CloudError, cloud_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = [
    "CloudError",
    "InvalidCredentials",
    "InvalidToken",
    "Unauthorized",
    "InvalidInput",
    "NotFound",
    "PayloadTooLarge",
    "error_response",
    "register_exception_handlers",
]
