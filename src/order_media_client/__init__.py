# Файл: src/order_media_client/__init__.py

from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker

from .auth import AuthService
from .client import BackendClient
from .config import get_settings, BackendConfig, PostgresConfig, MinioConfig, AuthConfig, UploadConfig
from .repositories import (
    OrderRepository,
    FileRepository,
    SellerRepository,
    UserRepository,
    MinioRepository,
)
from .exceptions import *


def create_backend_client(config: Optional[BackendConfig] = None) -> BackendClient:
    """
    Фабричная функция для создания и конфигурации BackendClient.

    :param config: Единый объект с настройками.
                   Если не предоставлен, используются переменные окружения.
    :return: Сконфигурированный экземпляр BackendClient.
    """
    if config is None:
        config = get_settings().to_backend_config()

    engine = create_async_engine(
        config.postgres.get_pg_dsn(),
        pool_size=config.postgres.pool_size,
        max_overflow=config.postgres.max_overflow,
        pool_timeout=config.postgres.pool_timeout,
        pool_recycle=config.postgres.pool_recycle,
        pool_pre_ping=True,
        connect_args={
            "server_settings": {
                "application_name": config.postgres.application_name
            }
        },
    )
    session_factory = async_sessionmaker(bind=engine, expire_on_commit=False)

    return BackendClient(
        orders=OrderRepository(session_factory),
        files=FileRepository(session_factory),
        sellers=SellerRepository(session_factory),
        storage=MinioRepository(config.minio),
        auth=AuthService(UserRepository(session_factory), config.auth),
        uploads=config.uploads,
        engine=engine,
    )


__all__ = [
    "BackendClient", "create_backend_client", "AuthService",
    "BackendConfig", "PostgresConfig", "MinioConfig", "AuthConfig", "UploadConfig",
    "OrderClientError", "OrderValidationError", "DuplicateOrderError",
    "OrderNotFoundError", "DatabaseError", "StorageError", "AuthError",
]
