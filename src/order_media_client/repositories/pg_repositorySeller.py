from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from order_media_client.db.base import get_session
from order_media_client.db.users import SellerORM
from order_media_client.exceptions import DatabaseError
from order_media_client.models.seller import SellerInDB


class SellerRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def create(self, user_id: UUID, email: str) -> SellerInDB:
        seller = SellerORM(id=user_id, email=email)
        async with get_session(self._session_factory) as session:
            try:
                session.add(seller)
                await session.commit()
                return SellerInDB.model_validate(seller)
            except IntegrityError as e:
                await session.rollback()
                raise DatabaseError(f"Seller {email} already exists.") from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to create seller: {e}") from e

    async def get(self, user_id: UUID) -> Optional[SellerInDB]:
        async with get_session(self._session_factory) as session:
            result = await session.execute(select(SellerORM).where(SellerORM.id == user_id))
            seller = result.scalar_one_or_none()
            return SellerInDB.model_validate(seller) if seller else None
