import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker, AsyncSession

from order_media_client.db.base import get_session
from order_media_client.db.orders import OrderORM
from order_media_client.exceptions import DatabaseError, DuplicateOrderError
from order_media_client.models.order import OrderCreate, OrderInDB, OrderWithFiles

logger = logging.getLogger(__name__)


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class OrderRepository:
    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def exists(self, order_id: str) -> bool:
        """Есть ли заказ с точно таким клиентским order_id."""
        async with get_session(self._session_factory) as session:
            try:
                result = await session.execute(select(OrderORM.id).where(OrderORM.order_id == order_id).limit(1))
                return result.first() is not None
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to look up order {order_id!r}: {e}") from e

    async def create(self, payload: OrderCreate) -> OrderInDB:
        """
        Insert-if-absent: гонку двух одинаковых order_id решает уникальный
        индекс, нарушение превращается в DuplicateOrderError.
        """
        order = OrderORM(order_id=payload.order_id, song_request=payload.song_request)
        async with get_session(self._session_factory) as session:
            try:
                session.add(order)
                await session.commit()
                await session.refresh(order)
                logger.info(f"Created order {order.id} (order_id={order.order_id!r})")
                return order.to_pydantic()
            except IntegrityError as e:
                await session.rollback()
                raise DuplicateOrderError(payload.order_id) from e
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to create order: {e}") from e

    async def get(self, order_pk: UUID) -> Optional[OrderWithFiles]:
        async with get_session(self._session_factory) as session:
            try:
                order = await session.get(OrderORM, order_pk)
                return order.to_pydantic_with_files() if order else None
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to load order {order_pk}: {e}") from e

    async def list_with_files(self, search: str | None = None) -> List[OrderWithFiles]:
        """
        Все заказы с файлами, новые первыми. search сужает выборку до
        order_id, содержащих подстроку (без учёта регистра). Без пагинации.
        """
        async with get_session(self._session_factory) as session:
            stmt = select(OrderORM).order_by(OrderORM.created_at.desc())
            if search:
                stmt = stmt.where(OrderORM.order_id.ilike(f"%{_escape_like(search)}%", escape="\\"))
            try:
                result = await session.execute(stmt)
                return [o.to_pydantic_with_files() for o in result.scalars().all()]
            except SQLAlchemyError as e:
                raise DatabaseError(f"Failed to list orders: {e}") from e

    async def delete(self, order_pk: UUID) -> bool:
        async with get_session(self._session_factory) as session:
            try:
                result = await session.execute(delete(OrderORM).where(OrderORM.id == order_pk))
                await session.commit()
                return result.rowcount > 0
            except SQLAlchemyError as e:
                await session.rollback()
                raise DatabaseError(f"Failed to delete order {order_pk}: {e}") from e
