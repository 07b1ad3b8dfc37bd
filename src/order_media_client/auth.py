import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID

from jose import JWTError, jwt

from order_media_client.config import AuthConfig
from order_media_client.exceptions import AuthError
from order_media_client.models.seller import AuthSession, AuthUser
from order_media_client.repositories.auth.pg_repositoryUser import UserRepository, verify_password

logger = logging.getLogger(__name__)


class AuthService:
    """
    Email/password аутентификация: регистрация, вход и проверка сессии.
    Сессия - это подписанный JWT с `sub` = id пользователя.
    """

    def __init__(self, user_repo: UserRepository, config: AuthConfig):
        self._users = user_repo
        self._config = config

    def _issue_token(self, user: AuthUser) -> AuthSession:
        expires_at = datetime.now(timezone.utc) + timedelta(minutes=self._config.access_token_expire_minutes)
        token = jwt.encode(
            {"sub": str(user.id), "email": user.email, "exp": expires_at},
            self._config.secret_key,
            algorithm=self._config.algorithm,
        )
        return AuthSession(access_token=token, user=user, expires_at=expires_at)

    async def sign_up(self, email: str, password: str) -> AuthUser:
        if not email or not password:
            raise AuthError("Email and password are required.")
        user = await self._users.create_user(email, password)
        logger.info(f"Registered user {user.id}")
        return AuthUser.model_validate(user)

    async def sign_in(self, email: str, password: str) -> AuthSession:
        user = await self._users.get_by_email(email)
        if user is None or not verify_password(password, user.hashed_password):
            raise AuthError("Invalid login credentials")
        return self._issue_token(AuthUser.model_validate(user))

    async def get_session(self, token: str | None) -> Optional[AuthSession]:
        """Возвращает активную сессию или None, если токен пуст, просрочен или чужой."""
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._config.secret_key, algorithms=[self._config.algorithm])
            user_id = UUID(payload["sub"])
            expires_at = datetime.fromtimestamp(payload["exp"], tz=timezone.utc)
        except (JWTError, KeyError, TypeError, ValueError):
            return None
        user = await self._users.get_by_id(user_id)
        if user is None:
            return None
        return AuthSession(access_token=token, user=AuthUser.model_validate(user), expires_at=expires_at)
