from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from order_media_client.client import BackendClient
from order_media_client.exceptions import OrderValidationError
from order_media_client.models import UploadItem
from order_media_client.workflows import OrderSubmissionWorkflow, select_images, select_videos
from .deps import get_backend_client, get_submission_workflow
from .notifications import NotificationError, notification

router = APIRouter(tags=["Customer"])


async def _to_items(files: Optional[List[UploadFile]]) -> List[UploadItem]:
    items = []
    for f in files or []:
        if not f.filename:
            # пустое поле формы
            continue
        items.append(UploadItem(filename=f.filename, content_type=f.content_type or "", data=await f.read()))
    return items


@router.get("/")
async def customer_upload(client: Annotated[BackendClient, Depends(get_backend_client)]):
    return {
        "view": "customer-upload",
        "max_video_bytes": client.uploads.max_video_bytes,
        "fields": ["order_id", "images", "videos", "song_request"],
    }


@router.post("/orders", status_code=status.HTTP_201_CREATED)
async def submit_order(
    client: Annotated[BackendClient, Depends(get_backend_client)],
    workflow: Annotated[OrderSubmissionWorkflow, Depends(get_submission_workflow)],
    order_id: str = Form(""),
    song_request: str = Form(""),
    images: Optional[List[UploadFile]] = File(None),
    videos: Optional[List[UploadFile]] = File(None),
):
    image_selection = select_images(await _to_items(images))
    video_selection = select_videos(await _to_items(videos), client.uploads.max_video_bytes)

    warnings = image_selection.warnings + video_selection.warnings
    try:
        result = await workflow.submit_order(
            order_id,
            images=image_selection.accepted,
            videos=video_selection.accepted,
            song_request=song_request,
        )
    except OrderValidationError as e:
        # отклонённые при выборе файлы показываются вместе с ошибкой
        raise NotificationError(status.HTTP_422_UNPROCESSABLE_ENTITY, str(e), warnings=warnings) from e
    return {
        "order": result.order.model_dump(mode="json"),
        "files": [f.model_dump(mode="json") for f in result.files],
        "redirect_to": result.redirect_to,
        "warnings": warnings,
    }


@router.get("/thank-you")
async def thank_you():
    return {
        "view": "thank-you",
        **notification("Your files have been uploaded successfully.", level="success"),
        "return_to": "/",
    }
