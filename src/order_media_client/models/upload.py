from __future__ import annotations

import mimetypes
from datetime import datetime
from pathlib import Path
from typing import List

from pydantic import BaseModel, Field

from .order import FileInDB, OrderInDB

THANK_YOU_ROUTE = "/thank-you"


class UploadItem(BaseModel):
    """Один выбранный покупателем файл: имя, MIME-тип и содержимое."""
    filename: str
    content_type: str = ""
    data: bytes = b""

    @property
    def size(self) -> int:
        return len(self.data)

    @property
    def extension(self) -> str:
        return Path(self.filename).suffix.lower().lstrip(".") or "bin"

    @property
    def mime_type(self) -> str:
        if self.content_type:
            return self.content_type
        guessed, _ = mimetypes.guess_type(self.filename)
        return guessed or "application/octet-stream"


class SelectionResult(BaseModel):
    accepted: List[UploadItem] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class SubmissionResult(BaseModel):
    order: OrderInDB
    files: List[FileInDB] = Field(default_factory=list)
    redirect_to: str = THANK_YOU_ROUTE


class DownloadLink(BaseModel):
    url: str
    file_path: str
    filename: str
    expires_in: int
    expires_at: datetime
