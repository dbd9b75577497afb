"""Task attachment API routes."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from api.dependencies.auth import CurrentUser
from api.dependencies.services import get_attachment_service
from api.schemas.attachment import (
    AttachmentDetailResponse,
    AttachmentListResponse,
    AttachmentResponse,
)
from core.rate_limit import limiter
from domain.services.attachment_service import AttachmentService

router = APIRouter(prefix="/tasks/{task_id}/attachments", tags=["attachments"])


@router.get(
    "",
    response_model=AttachmentListResponse,
    summary="List attachments of a task",
    responses={404: {"description": "Task not found"}},
)
@limiter.limit("30/minute")  # type: ignore[untyped-decorator]
async def list_attachments(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentListResponse:
    """Attachments, newest first. Each carries a signed URL valid for one hour."""
    signed = await service.list_for_task(task_id, user.id)
    return AttachmentListResponse(
        attachments=[AttachmentResponse.from_signed(s) for s in signed]
    )


@router.post(
    "",
    response_model=AttachmentDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Upload an attachment",
    responses={
        400: {"description": "Missing, empty or oversized file"},
        404: {"description": "Task not found"},
        500: {"description": "Storage not configured"},
    },
)
@limiter.limit("10/minute")  # type: ignore[untyped-decorator]
async def upload_attachment(
    request: Request,
    task_id: UUID,
    user: CurrentUser,
    file: UploadFile | None = File(None),
    service: AttachmentService = Depends(get_attachment_service),
) -> AttachmentDetailResponse:
    """Upload one file (multipart field `file`, at most 10MB)."""
    data = None
    if file is not None:
        # One byte past the cap is enough to know it is too large
        data = await file.read(service.max_upload_bytes + 1)

    signed = await service.upload(
        task_id,
        user.id,
        file_name=file.filename if file else None,
        content_type=file.content_type if file else None,
        data=data,
    )
    return AttachmentDetailResponse(attachment=AttachmentResponse.from_signed(signed))
