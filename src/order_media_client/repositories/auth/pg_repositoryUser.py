# src/order_media_client/repositories/auth/pg_repositoryUser.py

import logging
from uuid import UUID
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession
from passlib.context import CryptContext

from order_media_client.db.users import AuthUserORM
from order_media_client.db.base import get_session
from order_media_client.exceptions import AuthError, DatabaseError

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    """Создает хеш из обычного пароля."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


class UserRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create_user(self, email: str, plain_password: str) -> AuthUserORM:
        user = AuthUserORM(email=email.strip().lower(), hashed_password=get_password_hash(plain_password))
        async with get_session(self._session_factory) as session:
            try:
                session.add(user)
                await session.commit()
                await session.refresh(user)
                return user
            except IntegrityError as e:
                await session.rollback()
                raise AuthError(f"User with email {email} already exists.") from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to create user: {e}") from e

    async def get_by_id(self, user_id: UUID) -> Optional[AuthUserORM]:
        async with get_session(self._session_factory) as session:
            try:
                result = await session.execute(select(AuthUserORM).where(AuthUserORM.id == user_id))
                return result.scalar_one_or_none()
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to load user {user_id}: {e}") from e

    async def get_by_email(self, email: str) -> Optional[AuthUserORM]:
        async with get_session(self._session_factory) as session:
            try:
                result = await session.execute(
                    select(AuthUserORM).where(AuthUserORM.email == email.strip().lower())
                )
                return result.scalar_one_or_none()
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to load user {email}: {e}") from e
