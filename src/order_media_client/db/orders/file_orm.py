from __future__ import annotations
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from order_media_client.db.base import Base, CreatedAt
from order_media_client.models.order import FileInDB


class FileORM(Base):
    __tablename__ = "files"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    order_id: Mapped[UUID] = mapped_column(
        Uuid, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    # Ключ объекта в бакете, генерируется случайно и не зависит от имени файла
    file_path: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    file_type: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[CreatedAt]

    order: Mapped["OrderORM"] = relationship("OrderORM", back_populates="files")

    def to_pydantic(self) -> FileInDB:
        return FileInDB.model_validate(self)
