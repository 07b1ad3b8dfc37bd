import logging
from datetime import timedelta
from io import BytesIO

import urllib3
from minio import Minio
from minio.error import MinioException, S3Error

from order_media_client.config import MinioConfig
from order_media_client.exceptions import StorageError
from order_media_client.utils.minio_async import run_io_bound

logger = logging.getLogger(__name__)

_MISSING_OBJECT_CODES = {"NoSuchKey", "NoSuchObject", "ResourceNotFound"}


class MinioRepository:
    """Бакет с медиафайлами заказов (по умолчанию 'media')."""

    def __init__(self, settings: MinioConfig, client: Minio | None = None):
        self._client = client or Minio(
            endpoint=settings.endpoint,
            access_key=settings.accesskey,
            secret_key=settings.secretkey,
            secure=settings.secure,
            region=settings.region,
        )
        self._bucket = settings.bucket

    @property
    def bucket(self) -> str:
        return self._bucket

    async def _ensure_bucket(self):
        exists = await run_io_bound(self._client.bucket_exists, self._bucket)
        if not exists:
            await run_io_bound(self._client.make_bucket, self._bucket)

    async def check_connection(self):
        """Проверяет соединение с MinIO и наличие бакета."""
        logger.debug(f"Checking MinIO connection and bucket '{self._bucket}' existence...")
        try:
            await self._ensure_bucket()
        except (MinioException, urllib3.exceptions.HTTPError) as e:
            logger.error(f"MinIO connection failed: {e}")
            raise StorageError(str(e)) from e

    async def put_object(self, object_name: str, data: bytes, content_type: str | None = None):
        try:
            await run_io_bound(
                self._client.put_object,
                self._bucket,
                object_name,
                BytesIO(data),
                len(data),
                content_type=content_type or "application/octet-stream",
            )
        except (MinioException, urllib3.exceptions.HTTPError) as e:
            raise StorageError(str(e)) from e

    async def object_exists(self, object_name: str) -> bool:
        try:
            await run_io_bound(self._client.stat_object, self._bucket, object_name)
            return True
        except S3Error as e:
            if e.code in _MISSING_OBJECT_CODES:
                return False
            raise StorageError(str(e)) from e
        except (MinioException, urllib3.exceptions.HTTPError) as e:
            raise StorageError(str(e)) from e

    async def remove_object(self, object_name: str):
        try:
            await run_io_bound(self._client.remove_object, self._bucket, object_name)
        except (MinioException, urllib3.exceptions.HTTPError) as e:
            raise StorageError(str(e)) from e

    async def get_presigned_url(self, object_name: str, expires_in_seconds: int = 60) -> str:
        """Генерирует временную ссылку для скачивания объекта."""
        try:
            return await run_io_bound(
                self._client.presigned_get_object,
                self._bucket,
                object_name,
                expires=timedelta(seconds=expires_in_seconds),
            )
        except (MinioException, urllib3.exceptions.HTTPError) as e:
            raise StorageError(str(e)) from e
