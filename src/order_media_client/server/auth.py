import logging
from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer

from order_media_client.client import BackendClient
from order_media_client.exceptions import OrderClientError
from order_media_client.models.seller import AuthSession
from .deps import get_backend_client
from .notifications import SessionRequired

logger = logging.getLogger(__name__)

SESSION_COOKIE = "access_token"

# auto_error=False: отсутствие заголовка - это не 401, а редирект на логин
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/seller/login", auto_error=False)


async def get_current_session(
    request: Request,
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    client: Annotated[BackendClient, Depends(get_backend_client)],
) -> AuthSession:
    """
    Сторож защищённых маршрутов.

    1. Берёт токен из Authorization: Bearer или из cookie access_token.
    2. Проверяет его через AuthService.
    3. Любая ошибка при проверке считается отсутствием сессии:
       SessionRequired превращается в редирект на /seller/login.
    """
    token = token or request.cookies.get(SESSION_COOKIE)
    try:
        session = await client.auth.get_session(token)
    except OrderClientError as e:
        logger.warning(f"Session lookup failed, treating as signed out: {e}")
        session = None
    if session is None:
        raise SessionRequired()
    return session
