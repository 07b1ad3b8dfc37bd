from __future__ import annotations
from uuid import UUID

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, CreatedAt


class SellerORM(Base):
    __tablename__ = "sellers"

    # Совпадает с id пользователя в auth_users
    id: Mapped[UUID] = mapped_column(Uuid, ForeignKey("auth_users.id", ondelete="CASCADE"), primary_key=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    created_at: Mapped[CreatedAt]
