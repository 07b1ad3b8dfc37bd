import asyncio
import logging
import sys

import typer
from pydantic import ValidationError
from rich.markup import escape

if sys.platform == "win32":
    asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())

from order_media_client import create_backend_client
from order_media_client.client import BackendClient
from order_media_client.config import BackendConfig, get_settings
from order_media_client.db.base import Base
from order_media_client.exceptions import OrderClientError
from order_media_client.logging import configure
from order_media_client.utils.cli_utils import get_rich_console


app = typer.Typer(help="CLI for order-media-client administration.")
logger = logging.getLogger(__name__)
console = get_rich_console()


def _load_config() -> BackendConfig:
    try:
        settings = get_settings()
    except ValidationError as e:
        missing = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
        console.print(f"[bold red]✖[/bold red] Missing backend configuration: {missing}")
        raise typer.Exit(code=1)
    configure(settings.log_level)
    return settings.to_backend_config()


def build_client() -> BackendClient:
    return create_backend_client(_load_config())


async def provision_seller(client: BackendClient, email: str, password: str):
    """Учётная запись в auth_users плюс строка в sellers с тем же id."""
    user = await client.auth.sign_up(email, password)
    seller = await client.sellers.create(user.id, user.email)
    return seller


@app.command()
def init():
    """Creates database tables and ensures the media bucket exists."""
    console.rule("[bold cyan]Service Initialization[/bold cyan]")
    client = build_client()

    async def _init():
        try:
            async with client._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
            console.log("[bold green]✔[/bold green] Database tables created successfully.")
            await client.storage.check_connection()
            console.log(f"[bold green]✔[/bold green] MinIO bucket '{client.storage.bucket}' is ready.")
        finally:
            await client.aclose()

    try:
        asyncio.run(_init())
    except Exception as e:
        console.log(f"[bold red]✖[/bold red] Initialization FAILED: {escape(str(e))}")
        raise typer.Exit(code=1)


@app.command()
def check():
    """Checks connectivity to PostgreSQL and MinIO."""
    console.rule("[bold cyan]Connection Check[/bold cyan]")
    client = build_client()

    async def _check():
        try:
            return await client.check_connections()
        finally:
            await client.aclose()

    statuses = asyncio.run(_check())
    failed = False
    for name, label in (("postgres", "PostgreSQL"), ("minio", "MinIO")):
        status = statuses.get(name, "unknown error")
        if status == "ok":
            console.print(f"[bold green]✔[/bold green] {label} connection: OK")
        else:
            failed = True
            console.print(f"[bold red]✖[/bold red] {label} connection: FAILED ({escape(status)})")
    if failed:
        raise typer.Exit(code=1)


@app.command("create-seller")
def create_seller(
    email: str = typer.Argument(..., help="Seller email"),
    password: str = typer.Argument(..., help="Seller password"),
):
    """Creates a seller account (auth user + sellers row)."""
    client = build_client()

    async def _create():
        try:
            return await provision_seller(client, email, password)
        finally:
            await client.aclose()

    try:
        seller = asyncio.run(_create())
    except OrderClientError as e:
        console.print(f"[bold red]✖[/bold red] Error creating seller account: {escape(str(e))}")
        raise typer.Exit(code=1)

    console.print("[bold green]✔[/bold green] Seller account created successfully!")
    console.print(f"Email: {seller.email}")
    console.print(f"User ID: {seller.id}")


if __name__ == "__main__":
    app()
