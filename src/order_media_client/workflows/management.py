import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, List
from uuid import UUID

from order_media_client.client import BackendClient
from order_media_client.exceptions import (
    DeletionNotConfirmedError,
    OrderNotFoundError,
    StoredObjectNotFoundError,
)
from order_media_client.models import DownloadLink, OrderWithFiles

logger = logging.getLogger(__name__)


class OrderManagementWorkflow:
    """Поиск, скачивание и удаление заказов продавцом."""

    def __init__(self, client: BackendClient, clock: Callable[[], datetime] | None = None):
        self._client = client
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def list_orders(self, search: str | None = None) -> List[OrderWithFiles]:
        term = (search or "").strip()
        orders = await self._client.orders.list_with_files(term or None)
        logger.debug(f"Fetched {len(orders)} order(s) for search {term!r}")
        return orders

    async def get_download_link(self, file_path: str) -> DownloadLink:
        """Ссылка действует signed_url_ttl_seconds (60 c); скачать нужно до истечения."""
        if not await self._client.storage.object_exists(file_path):
            raise StoredObjectNotFoundError(f"Object '{file_path}' not found")
        ttl = self._client.uploads.signed_url_ttl_seconds
        issued_at = self._clock()
        url = await self._client.storage.get_presigned_url(file_path, expires_in_seconds=ttl)
        return DownloadLink(
            url=url,
            file_path=file_path,
            filename=file_path.rsplit("/", 1)[-1] or "download",
            expires_in=ttl,
            expires_at=issued_at + timedelta(seconds=ttl),
        )

    async def delete_order(self, order_pk: UUID, confirmed: bool = False) -> None:
        """
        Удаляет заказ только после подтверждения. Каскаду БД не доверяем:
        сначала объекты в бакете, затем записи files, затем сам заказ.
        """
        if not confirmed:
            raise DeletionNotConfirmedError("Are you sure you want to delete this order?")
        order = await self._client.orders.get(order_pk)
        if order is None:
            raise OrderNotFoundError(f"Order {order_pk} not found")

        for f in order.files:
            await self._client.storage.remove_object(f.file_path)
        await self._client.files.delete_for_order(order_pk)
        if not await self._client.orders.delete(order_pk):
            raise OrderNotFoundError(f"Order {order_pk} not found")
        logger.info(f"Deleted order {order_pk} ({order.order_id!r}) with {len(order.files)} file(s)")
