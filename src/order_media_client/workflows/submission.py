import logging
from typing import Iterable, List, Sequence
from uuid import UUID, uuid4

from order_media_client.client import BackendClient
from order_media_client.exceptions import (
    BackendError,
    DuplicateOrderError,
    OrderValidationError,
    SubmissionFailedError,
)
from order_media_client.models import (
    FileInDB,
    OrderCreate,
    SelectionResult,
    SubmissionResult,
    UploadItem,
)

logger = logging.getLogger(__name__)

NO_FILES_MESSAGE = "Please upload at least one image or video"
EMPTY_ORDER_ID_MESSAGE = "Please enter your order ID"


def _format_limit(limit_bytes: int) -> str:
    mb = limit_bytes / (1024 * 1024)
    return f"{mb:g}MB"


def select_images(files: Iterable[UploadItem]) -> SelectionResult:
    result = SelectionResult()
    for item in files:
        if not item.mime_type.startswith("image/"):
            result.warnings.append(f'File "{item.filename}" is not an image')
            continue
        result.accepted.append(item)
    return result


def select_videos(files: Iterable[UploadItem], max_bytes: int) -> SelectionResult:
    """
    Отбор видео в момент выбора: файл больше лимита сразу исключается
    из набора и даёт отдельное предупреждение.
    """
    result = SelectionResult()
    for item in files:
        if not item.mime_type.startswith("video/"):
            result.warnings.append(f'File "{item.filename}" is not a video')
            continue
        if item.size > max_bytes:
            result.warnings.append(f'Video "{item.filename}" exceeds {_format_limit(max_bytes)} size limit')
            continue
        result.accepted.append(item)
    return result


class OrderSubmissionWorkflow:
    def __init__(self, client: BackendClient):
        self._client = client

    def build_object_path(self, order_pk: UUID, item: UploadItem) -> str:
        return f"{self._client.uploads.key_prefix}/{order_pk}/{uuid4().hex}.{item.extension}"

    async def submit_order(
        self,
        order_id: str,
        images: Sequence[UploadItem] = (),
        videos: Sequence[UploadItem] = (),
        song_request: str = "",
    ) -> SubmissionResult:
        """
        Создаёт заказ и загружает его файлы: сначала изображения, затем видео,
        по одному, в порядке выбора.

        images и videos ожидаются уже отобранными через select_images /
        select_videos; лимит на размер видео здесь проверяется повторно.
        """
        payload = OrderCreate(order_id=order_id, song_request=song_request)
        if not payload.order_id:
            raise OrderValidationError(EMPTY_ORDER_ID_MESSAGE)
        if not images and not videos:
            raise OrderValidationError(NO_FILES_MESSAGE)
        max_bytes = self._client.uploads.max_video_bytes
        for video in videos:
            if video.size > max_bytes:
                raise OrderValidationError(f'Video "{video.filename}" exceeds {_format_limit(max_bytes)} size limit')

        try:
            if await self._client.orders.exists(payload.order_id):
                raise DuplicateOrderError(payload.order_id)
            order = await self._client.orders.create(payload)
        except BackendError as e:
            logger.error(f"Order {payload.order_id!r} was not created: {e}")
            raise SubmissionFailedError() from e

        uploaded_paths: List[str] = []
        linked: List[FileInDB] = []
        try:
            for item in [*images, *videos]:
                object_path = self.build_object_path(order.id, item)
                await self._client.storage.put_object(object_path, item.data, content_type=item.mime_type)
                uploaded_paths.append(object_path)
                linked.append(await self._client.files.add(order.id, object_path, item.mime_type))
                logger.debug(f"Uploaded '{item.filename}' to '{object_path}'")
        except BackendError as e:
            logger.error(
                f"Upload for order {order.id} failed after {len(linked)} file(s): {e}"
            )
            if self._client.uploads.rollback_partial_orders:
                await self._rollback(order.id, uploaded_paths)
            raise SubmissionFailedError() from e

        logger.info(f"Order {order.id} submitted with {len(linked)} file(s)")
        return SubmissionResult(order=order, files=linked)

    async def _rollback(self, order_pk: UUID, uploaded_paths: List[str]):
        """Компенсация частичной загрузки: объекты, записи files, сам заказ."""
        for path in uploaded_paths:
            try:
                await self._client.storage.remove_object(path)
            except BackendError as e:
                logger.error(f"Rollback could not remove '{path}': {e}")
        try:
            await self._client.files.delete_for_order(order_pk)
            await self._client.orders.delete(order_pk)
            logger.info(f"Rolled back partial order {order_pk}")
        except BackendError as e:
            logger.error(f"Rollback could not delete order {order_pk}, it stays partial: {e}")
