from contextlib import asynccontextmanager

from fastapi import FastAPI

from order_media_client import create_backend_client
from order_media_client.client import BackendClient
from order_media_client.config import get_settings
from order_media_client.logging import configure
from . import orders, seller
from .notifications import register_exception_handlers


def create_app(client: BackendClient | None = None) -> FastAPI:
    """
    Собирает приложение. Без явного client настройки читаются из окружения;
    отсутствие обязательных переменных роняет запуск с ValidationError.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = app.state.client is None
        if owned:
            settings = get_settings()
            configure(settings.log_level)
            app.state.client = create_backend_client(settings.to_backend_config())
        try:
            yield
        finally:
            if owned:
                await app.state.client.aclose()

    app = FastAPI(title="Order media service", lifespan=lifespan)
    app.state.client = client
    register_exception_handlers(app)
    app.include_router(orders.router)
    app.include_router(seller.router)
    return app
