import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response
from fastapi.security import OAuth2PasswordRequestForm

from order_media_client.client import BackendClient
from order_media_client.exceptions import BackendError, StoredObjectNotFoundError
from order_media_client.models.seller import AuthSession
from order_media_client.workflows import OrderManagementWorkflow
from .auth import SESSION_COOKIE, get_current_session
from .deps import get_backend_client, get_management_workflow
from .notifications import NotificationError, notification

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/seller", tags=["Seller"])


@router.get("/login")
async def login_view():
    return {"view": "seller-login", "fields": ["username", "password"]}


@router.post("/login")
async def login(
    response: Response,
    form: Annotated[OAuth2PasswordRequestForm, Depends()],
    client: Annotated[BackendClient, Depends(get_backend_client)],
):
    session = await client.auth.sign_in(form.username, form.password)
    response.set_cookie(
        SESSION_COOKIE,
        session.access_token,
        httponly=True,
        samesite="lax",
        expires=session.expires_at,
    )
    return {"access_token": session.access_token, "token_type": session.token_type, "redirect_to": "/seller/dashboard"}


@router.get("/dashboard")
async def dashboard(
    session: Annotated[AuthSession, Depends(get_current_session)],
    workflow: Annotated[OrderManagementWorkflow, Depends(get_management_workflow)],
    search: str = "",
):
    try:
        orders = await workflow.list_orders(search)
    except BackendError as e:
        logger.error(f"Listing orders failed: {e}")
        raise NotificationError(502, "Failed to fetch orders") from e
    return {
        "seller": session.user.email,
        "search": search,
        "orders": [o.model_dump(mode="json") for o in orders],
    }


@router.get("/dashboard/download")
async def download_link(
    session: Annotated[AuthSession, Depends(get_current_session)],
    workflow: Annotated[OrderManagementWorkflow, Depends(get_management_workflow)],
    path: str = Query(..., min_length=1),
):
    try:
        link = await workflow.get_download_link(path)
    except StoredObjectNotFoundError as e:
        logger.warning(f"Download requested for missing object '{path}'")
        raise NotificationError(404, "Failed to download file") from e
    except BackendError as e:
        logger.error(f"Signing '{path}' failed: {e}")
        raise NotificationError(502, "Failed to download file") from e
    return link.model_dump(mode="json")


@router.delete("/dashboard/orders/{order_pk}")
async def delete_order(
    order_pk: UUID,
    session: Annotated[AuthSession, Depends(get_current_session)],
    workflow: Annotated[OrderManagementWorkflow, Depends(get_management_workflow)],
    confirm: bool = False,
):
    try:
        await workflow.delete_order(order_pk, confirmed=confirm)
    except BackendError as e:
        logger.error(f"Deleting order {order_pk} failed: {e}")
        raise NotificationError(502, "Failed to delete order") from e
    return notification("Order deleted successfully", level="success")
