"""
Category Routes.

Public read endpoints and administrative mutations for categories.
Deleting a category detaches it from every post first; the posts remain.
"""

from logging import getLogger

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from postdeck.configs import file_logger
from postdeck.dependencies import AdminDep, CategoryServiceDep
from postdeck.managers import limiter
from postdeck.models import CategoryDB
from postdeck.routes.posts import AUTH_RESPONSES
from postdeck.schemas import (
    BulkDeleteRequest,
    BulkDeleteResult,
    CategoryCreate,
    CategoryDeleteResponse,
    CategoryResponse,
    CategoryUpdate,
)

router = APIRouter(prefix="/categories", tags=["🏷️ Categories"])
admin_router = APIRouter(prefix="/admin/categories", tags=["🔐 Admin: Categories"])

logger = file_logger(getLogger(__name__))

CATEGORY_EXAMPLE = {
    "id": "cat1",
    "name": "Travel",
    "createdAt": "2025-01-01T00:00:00Z",
    "updatedAt": None,
}

NOT_FOUND_RESPONSE = {
    404: {
        "description": "Not found",
        "content": {"application/json": {"example": {"error": "Category with ID <id> not found"}}},
    },
}


def db_category_to_response(category: CategoryDB) -> CategoryResponse:
    return CategoryResponse.model_validate(category, from_attributes=True)


@router.get(
    "",
    response_class=ORJSONResponse,
    response_model=list[CategoryResponse],
    summary="List categories",
    description="List every category ordered by name.",
    responses={200: {"content": {"application/json": {"example": [CATEGORY_EXAMPLE]}}}},
    operation_id="categories_list",
)
@limiter.limit("60/minute")
async def list_categories(request: Request, service: CategoryServiceDep) -> list[CategoryResponse]:
    return [db_category_to_response(c) for c in await service.list_categories()]


@router.get(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Get category by ID",
    responses={200: {"content": {"application/json": {"example": CATEGORY_EXAMPLE}}}, **NOT_FOUND_RESPONSE},
    operation_id="categories_get_by_id",
)
@limiter.limit("60/minute")
async def get_category(
    request: Request,
    category_id: str,
    service: CategoryServiceDep,
) -> CategoryResponse:
    return db_category_to_response(await service.get_category(category_id))


@admin_router.post(
    "",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    status_code=HTTP_201_CREATED,
    summary="Create a category",
    responses={
        201: {"content": {"application/json": {"example": CATEGORY_EXAMPLE}}},
        400: {
            "description": "Validation error",
            "content": {"application/json": {"example": {"error": "Name must not be empty", "field": "name"}}},
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_categories_create",
)
@limiter.limit("20/minute")
async def create_category(
    request: Request,
    admin: AdminDep,
    service: CategoryServiceDep,
    category: CategoryCreate,
) -> CategoryResponse:
    created = await service.create_category(category)
    logger.info(f"Category {created.id} created by {admin.subject_id}")
    return db_category_to_response(created)


@admin_router.put(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryResponse,
    summary="Rename a category",
    responses={
        200: {"content": {"application/json": {"example": CATEGORY_EXAMPLE}}},
        **NOT_FOUND_RESPONSE,
        **AUTH_RESPONSES,
    },
    operation_id="admin_categories_update",
)
@limiter.limit("20/minute")
async def update_category(
    request: Request,
    category_id: str,
    admin: AdminDep,
    service: CategoryServiceDep,
    category: CategoryUpdate,
) -> CategoryResponse:
    updated = await service.update_category(category_id, category)
    logger.info(f"Category {category_id} renamed by {admin.subject_id}")
    return db_category_to_response(updated)


@admin_router.delete(
    "/{category_id}",
    response_class=ORJSONResponse,
    response_model=CategoryDeleteResponse,
    summary="Delete a category",
    description="Detach the category from every post, then delete it. Posts are kept.",
    responses={
        200: {
            "content": {
                "application/json": {"example": {"msg": "Category Travel deleted", "detachedPosts": 3}},
            },
        },
        **NOT_FOUND_RESPONSE,
        **AUTH_RESPONSES,
    },
    operation_id="admin_categories_delete",
)
@limiter.limit("20/minute")
async def delete_category(
    request: Request,
    category_id: str,
    admin: AdminDep,
    service: CategoryServiceDep,
) -> CategoryDeleteResponse:
    result = await service.delete_category(category_id)
    logger.info(f"Category {category_id} deleted by {admin.subject_id}")
    return result


@admin_router.post(
    "/bulk-delete",
    response_class=ORJSONResponse,
    response_model=BulkDeleteResult,
    summary="Delete several categories",
    description="Delete categories in the given order, stopping at the first failure.",
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"deleted": ["cat1"], "failedId": "cat2", "error": "Category with ID cat2 not found"},
                },
            },
        },
        **AUTH_RESPONSES,
    },
    operation_id="admin_categories_bulk_delete",
)
@limiter.limit("10/minute")
async def bulk_delete_categories(
    request: Request,
    admin: AdminDep,
    service: CategoryServiceDep,
    payload: BulkDeleteRequest,
) -> BulkDeleteResult:
    result = await service.bulk_delete(payload.ids)
    logger.info(
        f"Bulk delete by {admin.subject_id}: {len(result.deleted)} of {len(payload.ids)} category(ies)",
    )
    return result
