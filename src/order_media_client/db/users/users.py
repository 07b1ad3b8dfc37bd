from __future__ import annotations
from uuid import UUID, uuid4

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from ..base import Base, CreatedAt


class AuthUserORM(Base):
    """Учётная запись email/password. Продавец ссылается на неё по id."""
    __tablename__ = "auth_users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[CreatedAt]
