import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from order_media_client.auth import AuthService
from order_media_client.config import UploadConfig
from order_media_client.exceptions import DatabaseError, StorageError
from order_media_client.repositories import (
    OrderRepository,
    FileRepository,
    SellerRepository,
    MinioRepository,
)

logger = logging.getLogger(__name__)


class BackendClient:
    """
    Единая точка доступа к удалённому бэкенду: таблицы orders / files / sellers,
    бакет media и аутентификация. Workflow получают его явно, поэтому в тестах
    любой репозиторий подменяется in-memory реализацией.
    """

    def __init__(
        self,
        orders: OrderRepository | None = None,
        files: FileRepository | None = None,
        sellers: SellerRepository | None = None,
        storage: MinioRepository | None = None,
        auth: AuthService | None = None,
        uploads: UploadConfig | None = None,
        engine: AsyncEngine | None = None,
    ):
        self.orders = orders
        self.files = files
        self.sellers = sellers
        self.storage = storage
        self.auth = auth
        self.uploads = uploads or UploadConfig()
        self._engine = engine

    async def check_connections(self) -> dict[str, str]:
        """
        Проверяет доступность PostgreSQL и MinIO.
        Возвращает словарь со статусами.
        """
        statuses = {}

        try:
            if self._engine is None:
                raise DatabaseError("engine is not configured")
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            statuses["postgres"] = "ok"
        except (DatabaseError, SQLAlchemyError, OSError) as e:
            statuses["postgres"] = f"failed: {e}"

        try:
            await self.storage.check_connection()
            statuses["minio"] = "ok"
        except StorageError as e:
            statuses["minio"] = f"failed: {e}"

        return statuses

    async def aclose(self):
        if self._engine is not None:
            await self._engine.dispose()
