"""
Post Routes.

Public read endpoints and administrative mutations for posts.

Summary
-------
Endpoints include:
  - List posts (newest first)
  - Get post by id
  - Create post (multipart, with optional cover image file)
  - Update post
  - Delete post
  - Bulk delete posts

Dependencies
------------
  - `PostServiceDep`: Post lifecycle service bound to the session factory and blob store.
  - `AdminDep`: Resolves the caller and requires administrator privilege (401 before 403).
"""

from logging import getLogger
from typing import Annotated

from fastapi import APIRouter, Body, File, Form, Request, UploadFile
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from postdeck.configs import MAX_CONTENT_LENGTH, MAX_TITLE_LENGTH, file_logger
from postdeck.dependencies import (
    AdminDep,
    CoverImageServiceDep,
    PostQueryListDep,
    PostServiceDep,
)
from postdeck.managers import limiter
from postdeck.schemas import (
    BulkDeleteRequest,
    BulkDeleteResult,
    MessageResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
)

router = APIRouter(prefix="/posts", tags=["📝 Posts"])
admin_router = APIRouter(prefix="/admin/posts", tags=["🔐 Admin: Posts"])

logger = file_logger(getLogger(__name__))

POST_EXAMPLE = {
    "id": "550e8400-e29b-41d4-a716-446655440000",
    "title": "Post A",
    "content": "<p>Hello world</p>",
    "coverImageKey": "private/900150983cd24fb0d6963f7d28e17f72",
    "coverImageUrl": "/uploads/cover_image/private/900150983cd24fb0d6963f7d28e17f72",
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": None,
    "categories": [{"id": "cat1", "name": "Travel"}],
}

AUTH_RESPONSES: dict[int | str, dict] = {
    401: {
        "description": "Missing or invalid credential",
        "content": {"application/json": {"example": {"error": "Missing authorization credential"}}},
    },
    403: {
        "description": "Administrator privilege required",
        "content": {"application/json": {"example": {"error": "Administrator privilege required"}}},
    },
    429: {
        "description": "Rate limit exceeded",
        "content": {"application/json": {"example": {"error": "Rate limit exceeded"}}},
    },
}


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[PostResponse],
    summary="List posts",
    description="List posts newest first, each with its categories.",
    responses={200: {"content": {"application/json": {"example": [POST_EXAMPLE]}}}},
    operation_id="posts_list",
)
@limiter.limit("60/minute")
async def list_posts(
    request: Request,
    query: PostQueryListDep,
    service: PostServiceDep,
) -> list[PostResponse]:
    """
    List posts.

    Parameters
    ----------
    request : Request
        Current request context.
    query : PostListQuery
        Pagination parameters.
    service : PostService
        Post lifecycle service.

    Returns
    -------
    list[PostResponse]
        Posts ordered by creation time, newest first.
    """
    return await service.list_posts(skip=query.skip, limit=query.limit)


@router.get(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Get post by ID",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "Post with ID <id> not found"}}},
        },
    },
    operation_id="posts_get_by_id",
)
@limiter.limit("60/minute")
async def get_post(request: Request, post_id: str, service: PostServiceDep) -> PostResponse:
    return await service.get_post(post_id)


@admin_router.post(
    "",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a post",
    description=(
        "Create a post from a multipart form. A `cover_image` file is stored in the "
        "blob bucket before the post row is written; alternatively pass the "
        "`cover_image_key` returned by the cover image upload endpoint."
    ),
    responses={
        201: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        400: {
            "description": "Validation or referential error",
            "content": {
                "application/json": {
                    "example": {"error": "Categories not found: cat9", "missingIds": ["cat9"]},
                },
            },
        },
        500: {
            "description": "Storage failure",
            "content": {"application/json": {"example": {"error": "Upload failed: Bucket not found"}}},
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_posts_create",
)
@limiter.limit("20/minute")
async def create_post(
    request: Request,
    admin: AdminDep,
    service: PostServiceDep,
    covers: CoverImageServiceDep,
    title: Annotated[str, Form(max_length=MAX_TITLE_LENGTH)],
    content: Annotated[str, Form(max_length=MAX_CONTENT_LENGTH)],
    category_ids: Annotated[list[str] | None, Form(description="Repeat once per category")] = None,
    cover_image_key: Annotated[str | None, Form()] = None,
    cover_image: Annotated[UploadFile | None, File(description="Cover image file")] = None,
) -> PostResponse:
    """
    Create a post.

    Parameters
    ----------
    request : Request
        Current request context.
    admin : Identity
        Authorized administrator.
    service : PostService
        Post lifecycle service.
    covers : CoverImageService
        Validates the cover file's type and size.
    title, content : str
        Post text; blank values are rejected.
    category_ids : list[str] | None
        Complete set of category ids.
    cover_image_key : str | None
        Pre-resolved cover key, used when no file is sent.
    cover_image : UploadFile | None
        Cover image file.

    Returns
    -------
    PostResponse
        The created post.
    """
    data = PostCreate(
        title=title,
        content=content,
        category_ids=category_ids or [],
        cover_image_key=cover_image_key,
    )

    cover_bytes: bytes | None = None
    content_type = "application/octet-stream"
    if cover_image is not None:
        cover_bytes, content_type = await covers.read(cover_image)

    post = await service.create_post(data, cover_bytes, content_type)
    logger.info(f"Post {post.id} created by {admin.subject_id}")
    return post


@admin_router.put(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=PostResponse,
    summary="Update a post",
    description="Replace the title, content, cover key and categories of a post.",
    responses={
        200: {"content": {"application/json": {"example": POST_EXAMPLE}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "Post with ID <id> not found"}}},
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_posts_update",
)
@limiter.limit("20/minute")
async def update_post(
    request: Request,
    post_id: str,
    admin: AdminDep,
    service: PostServiceDep,
    post: Annotated[
        PostUpdate,
        Body(
            examples=[
                {
                    "title": "Post A",
                    "content": "<p>Updated</p>",
                    "coverImageKey": "private/900150983cd24fb0d6963f7d28e17f72",
                    "categoryIds": ["cat1"],
                },
            ],
        ),
    ],
) -> PostResponse:
    updated = await service.update_post(post_id, post)
    logger.info(f"Post {post_id} updated by {admin.subject_id}")
    return updated


@admin_router.delete(
    "/{post_id}",
    response_class=ORJSONResponse,
    response_model=MessageResponse,
    summary="Delete a post",
    description="Delete a post and its category associations. The cover image blob is kept.",
    responses={
        200: {"content": {"application/json": {"example": {"msg": "Post <id> deleted"}}}},
        404: {
            "description": "Not found",
            "content": {"application/json": {"example": {"error": "Post with ID <id> not found"}}},
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_posts_delete",
)
@limiter.limit("20/minute")
async def delete_post(
    request: Request,
    post_id: str,
    admin: AdminDep,
    service: PostServiceDep,
) -> MessageResponse:
    await service.delete_post(post_id)
    logger.info(f"Post {post_id} deleted by {admin.subject_id}")
    return MessageResponse(msg=f"Post {post_id} deleted")


@admin_router.post(
    "/bulk-delete",
    response_class=ORJSONResponse,
    response_model=BulkDeleteResult,
    summary="Delete several posts",
    description=(
        "Delete posts in the given order, stopping at the first failure. Posts deleted "
        "before the failure stay deleted; the response lists them with the failing id."
    ),
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"deleted": ["a", "b"], "failedId": "c", "error": "Post with ID c not found"},
                },
            },
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_posts_bulk_delete",
)
@limiter.limit("10/minute")
async def bulk_delete_posts(
    request: Request,
    admin: AdminDep,
    service: PostServiceDep,
    payload: BulkDeleteRequest,
) -> BulkDeleteResult:
    """
    Bulk delete posts.

    Returns
    -------
    BulkDeleteResult
        Ids deleted so far, plus the failing id and its error when the loop stopped early.
    """
    result = await service.bulk_delete(payload.ids)
    logger.info(f"Bulk delete by {admin.subject_id}: {len(result.deleted)} of {len(payload.ids)} post(s)")
    return result
