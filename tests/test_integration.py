"""
Сквозной сценарий на настоящих PostgreSQL и MinIO (testcontainers).
Запускается только с `-m integration` и при доступном Docker.
"""
import urllib.request

import pytest
import pytest_asyncio

from order_media_client import create_backend_client
from order_media_client.config import AuthConfig, BackendConfig, MinioConfig, PostgresConfig
from order_media_client.db.base import Base
from order_media_client.models import UploadItem
from order_media_client.workflows import OrderManagementWorkflow, OrderSubmissionWorkflow

testcontainers_postgres = pytest.importorskip("testcontainers.postgres")
testcontainers_minio = pytest.importorskip("testcontainers.minio")

pytestmark = pytest.mark.integration


@pytest.fixture(scope="module")
def backend_config():
    postgres = testcontainers_postgres.PostgresContainer("postgres:15")
    minio = testcontainers_minio.MinioContainer("minio/minio:latest", access_key="minioadmin", secret_key="minioadmin")
    try:
        postgres.start()
        minio.start()
    except Exception as e:
        pytest.skip(f"Docker is not available: {e}")

    minio_config = minio.get_config()
    yield BackendConfig(
        postgres=PostgresConfig(
            user=postgres.username,
            password=postgres.password,
            db=postgres.dbname,
            host=postgres.get_container_host_ip(),
            port=int(postgres.get_exposed_port(5432)),
        ),
        minio=MinioConfig(
            endpoint=minio_config["endpoint"].replace("http://", ""),
            accesskey=minio_config["access_key"],
            secretkey=minio_config["secret_key"],
        ),
        auth=AuthConfig(secret_key="integration"),
    )
    postgres.stop()
    minio.stop()


@pytest_asyncio.fixture
async def client(backend_config):
    client = create_backend_client(backend_config)
    async with client._engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await client.storage.check_connection()
    yield client
    async with client._engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await client.aclose()


@pytest.mark.asyncio
async def test_full_order_lifecycle(client):
    statuses = await client.check_connections()
    assert statuses == {"postgres": "ok", "minio": "ok"}

    submitted = await OrderSubmissionWorkflow(client).submit_order(
        "ABC577XYZ",
        images=[UploadItem(filename="key.jpg", content_type="image/jpeg", data=b"jpeg")],
        videos=[UploadItem(filename="clip.mp4", content_type="video/mp4", data=b"mp4")],
        song_request="Bernadya - Bulan",
    )
    management = OrderManagementWorkflow(client)

    [order] = await management.list_orders("577")
    assert order.id == submitted.order.id
    assert len(order.files) == 2

    link = await management.get_download_link(order.files[0].file_path)
    with urllib.request.urlopen(link.url) as resp:
        assert resp.read() == b"jpeg"

    await management.delete_order(order.id, confirmed=True)
    assert await management.list_orders() == []
    assert not await client.storage.object_exists(order.files[0].file_path)
