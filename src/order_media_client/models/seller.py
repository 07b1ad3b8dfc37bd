from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str


class SellerInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str


class AuthSession(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: AuthUser
    expires_at: datetime
