"""Cover image upload route."""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, File, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from postdeck.configs import file_logger
from postdeck.dependencies import AdminDep, CoverImageServiceDep
from postdeck.managers import limiter
from postdeck.routes.posts import AUTH_RESPONSES
from postdeck.schemas import CoverImageUploadResponse

router = APIRouter(prefix="/admin/uploads", tags=["🖼️ Uploads"])

logger = file_logger(getLogger(__name__))


@router.post(
    "/cover-image",
    response_class=ORJSONResponse,
    response_model=CoverImageUploadResponse,
    status_code=HTTP_201_CREATED,
    summary="Upload a cover image",
    description=(
        "Store a cover image under a key derived from its content. Uploading the same "
        "bytes again returns the same key."
    ),
    responses={
        201: {
            "content": {
                "application/json": {
                    "example": {
                        "key": "private/900150983cd24fb0d6963f7d28e17f72",
                        "url": "/uploads/cover_image/private/900150983cd24fb0d6963f7d28e17f72",
                    },
                },
            },
        },
        413: {
            "description": "File too large",
            "content": {"application/json": {"example": {"error": "Cover image is too large. Maximum size is 5MB."}}},
        },
        415: {
            "description": "Unsupported media type",
            "content": {"application/json": {"example": {"error": "Unsupported cover image type 'text/plain'."}}},
        },
        500: {
            "description": "Bucket failure",
            "content": {"application/json": {"example": {"error": "Upload failed: Bucket not found"}}},
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_uploads_cover_image",
)
@limiter.limit("20/minute")
async def upload_cover_image(
    request: Request,
    admin: AdminDep,
    covers: CoverImageServiceDep,
    file: Annotated[UploadFile, File(description="Cover image file")],
) -> CoverImageUploadResponse:
    """
    Upload a cover image.

    Parameters
    ----------
    request : Request
        Current request context.
    admin : Identity
        Authorized administrator.
    covers : CoverImageService
        Cover image upload service.
    file : UploadFile
        Image file; its type and size are checked, its bytes are not decoded.

    Returns
    -------
    CoverImageUploadResponse
        Blob key and public URL.
    """
    uploaded = await covers.upload(file)
    logger.info(f"Cover image {uploaded.key} uploaded by {admin.subject_id}")
    return uploaded
