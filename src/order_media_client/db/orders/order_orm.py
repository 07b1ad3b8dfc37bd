from __future__ import annotations
from uuid import UUID, uuid4
from typing import List

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from order_media_client.db.base import Base, CreatedAt
from order_media_client.models.order import OrderInDB, OrderWithFiles

DEFAULT_ORDER_STATUS = "pending"


class OrderORM(Base):
    __tablename__ = "orders"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)  # ID на стороне сервера
    # ID, который вводит покупатель. Уникальность держит сама БД,
    # а не проверка "select, затем insert".
    order_id: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    song_request: Mapped[str] = mapped_column(Text, nullable=False, default="", server_default="")
    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=DEFAULT_ORDER_STATUS, server_default=DEFAULT_ORDER_STATUS
    )
    created_at: Mapped[CreatedAt]

    files: Mapped[List["FileORM"]] = relationship(
        "FileORM",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="FileORM.created_at",
        lazy="selectin",
    )

    def to_pydantic(self) -> OrderInDB:
        return OrderInDB.model_validate(self)

    def to_pydantic_with_files(self) -> OrderWithFiles:
        return OrderWithFiles.model_validate(self)
