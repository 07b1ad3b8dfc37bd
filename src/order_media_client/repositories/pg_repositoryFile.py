import logging
from typing import List
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from order_media_client.db.base import get_session
from order_media_client.db.orders import FileORM
from order_media_client.exceptions import DatabaseError
from order_media_client.models.order import FileInDB

logger = logging.getLogger(__name__)


class FileRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def add(self, order_pk: UUID, file_path: str, file_type: str) -> FileInDB:
        """Связывает загруженный объект с заказом."""
        record = FileORM(order_id=order_pk, file_path=file_path, file_type=file_type)
        async with get_session(self._session_factory) as session:
            try:
                session.add(record)
                await session.commit()
                await session.refresh(record)
                return record.to_pydantic()
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to link file '{file_path}' to order {order_pk}: {e}") from e

    async def list_for_order(self, order_pk: UUID) -> List[FileInDB]:
        async with get_session(self._session_factory) as session:
            try:
                stmt = select(FileORM).where(FileORM.order_id == order_pk).order_by(FileORM.created_at)
                result = await session.execute(stmt)
                return [f.to_pydantic() for f in result.scalars().all()]
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to list files of order {order_pk}: {e}") from e

    async def delete_for_order(self, order_pk: UUID) -> int:
        async with get_session(self._session_factory) as session:
            try:
                result = await session.execute(delete(FileORM).where(FileORM.order_id == order_pk))
                await session.commit()
                logger.debug(f"Deleted {result.rowcount} file records of order {order_pk}")
                return result.rowcount
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to delete files of order {order_pk}: {e}") from e
