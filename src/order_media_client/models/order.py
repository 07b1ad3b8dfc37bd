from __future__ import annotations

from datetime import datetime
from typing import List
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class OrderCreate(BaseModel):
    order_id: str
    song_request: str = ""

    @field_validator("order_id", "song_request")
    @classmethod
    def _strip(cls, value: str) -> str:
        return value.strip()


class OrderInDB(OrderCreate):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    status: str
    created_at: datetime


class FileInDB(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    order_id: UUID  # ссылка на OrderInDB.id, а не на клиентский order_id
    file_path: str
    file_type: str

    @property
    def name(self) -> str:
        return self.file_path.rsplit("/", 1)[-1]


class OrderWithFiles(OrderInDB):
    files: List[FileInDB] = Field(default_factory=list)
