import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from order_media_client.exceptions import (
    GENERIC_FAILURE_MESSAGE,
    AuthError,
    BackendError,
    DuplicateOrderError,
    NotFoundError,
    OrderValidationError,
    SubmissionFailedError,
)

logger = logging.getLogger(__name__)

LOGIN_ROUTE = "/seller/login"


class NotificationError(Exception):
    """Ошибка, которую пользователь видит как всплывающее уведомление."""

    def __init__(self, status_code: int, message: str, **extra):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.extra = extra


class SessionRequired(Exception):
    pass


def notification(message: str, level: str = "error", **extra) -> dict:
    return {"notification": {"level": level, "message": message}, **extra}


def _respond(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=notification(message, **extra))


def register_exception_handlers(app) -> None:
    @app.exception_handler(NotificationError)
    async def _notification_error(request: Request, exc: NotificationError):
        return _respond(exc.status_code, exc.message, **exc.extra)

    @app.exception_handler(OrderValidationError)
    async def _validation_error(request: Request, exc: OrderValidationError):
        return _respond(status.HTTP_422_UNPROCESSABLE_ENTITY, str(exc))

    @app.exception_handler(DuplicateOrderError)
    async def _duplicate_order(request: Request, exc: DuplicateOrderError):
        return _respond(status.HTTP_409_CONFLICT, str(exc))

    @app.exception_handler(NotFoundError)
    async def _not_found(request: Request, exc: NotFoundError):
        return _respond(status.HTTP_404_NOT_FOUND, str(exc))

    @app.exception_handler(SubmissionFailedError)
    async def _submission_failed(request: Request, exc: SubmissionFailedError):
        return _respond(status.HTTP_502_BAD_GATEWAY, str(exc))

    @app.exception_handler(BackendError)
    async def _backend_error(request: Request, exc: BackendError):
        logger.error(f"Backend call failed on {request.method} {request.url.path}: {exc}")
        return _respond(status.HTTP_502_BAD_GATEWAY, GENERIC_FAILURE_MESSAGE)

    @app.exception_handler(AuthError)
    async def _auth_error(request: Request, exc: AuthError):
        return _respond(status.HTTP_401_UNAUTHORIZED, str(exc))

    @app.exception_handler(SessionRequired)
    async def _session_required(request: Request, exc: SessionRequired):
        return RedirectResponse(LOGIN_ROUTE, status_code=status.HTTP_303_SEE_OTHER)
