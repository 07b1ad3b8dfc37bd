# Файл: src/order_media_client/config.py

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


# --- 1. Настройки PostgreSQL (таблицы orders / files / sellers) ---
class PostgresConfig(BaseModel):
    user: str = "postgres"
    password: str = "postgres"
    host: str = "localhost"
    port: int = 5432
    db: str = "orders"

    pool_size: int = 5
    max_overflow: int = 5
    pool_timeout: int = 30
    pool_recycle: int = 1800
    application_name: str = "order_media_client"

    def get_pg_dsn(self) -> str:
        """Собирает DSN для SQLAlchemy из полей этого объекта."""
        return f"postgresql+asyncpg://{self.user}:{self.password}@{self.host}:{self.port}/{self.db}"


# --- 2. Объектное хранилище. Ключи доступа обязательны ---
class MinioConfig(BaseModel):
    endpoint: str = "localhost:9000"
    accesskey: str
    secretkey: str
    bucket: str = "media"
    secure: bool = False
    # С заданным регионом presigned-ссылки подписываются без сетевого запроса
    region: str = "us-east-1"


class AuthConfig(BaseModel):
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60


class UploadConfig(BaseModel):
    max_video_bytes: int = 3 * 1024 * 1024
    signed_url_ttl_seconds: int = Field(60, gt=0)
    key_prefix: str = "customer-files"
    rollback_partial_orders: bool = True


class BackendConfig(BaseModel):
    """Явная конфигурация клиента: одна переменная вместо набора env."""
    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    minio: MinioConfig
    auth: AuthConfig
    uploads: UploadConfig = Field(default_factory=UploadConfig)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    minio: MinioConfig
    auth: AuthConfig
    uploads: UploadConfig = Field(default_factory=UploadConfig)

    def to_backend_config(self) -> BackendConfig:
        return BackendConfig(
            postgres=self.postgres, minio=self.minio, auth=self.auth, uploads=self.uploads
        )


_cached_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """
    Возвращает синглтон-экземпляр настроек, создавая его при первом вызове.
    Если обязательные переменные (MINIO__ACCESSKEY, MINIO__SECRETKEY,
    AUTH__SECRET_KEY) не заданы, pydantic выбрасывает ValidationError.
    """
    global _cached_settings
    if _cached_settings is None:
        _cached_settings = Settings()
    return _cached_settings
