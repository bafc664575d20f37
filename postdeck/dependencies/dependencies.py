"""Application dependencies for services, storage and authorization."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query, Request, Security
from fastapi.security import APIKeyHeader

from postdeck.clients.identity import IdentityProvider, get_identity_provider
from postdeck.db import SessionMaker, get_session_maker
from postdeck.schemas.auth import Identity
from postdeck.services import (
    AuthorizationGuard,
    BlobStore,
    CategoryService,
    CoverImageService,
    PostService,
    TagRelationManager,
)
from postdeck.services.storage import BlobBucket, get_bucket

# The admin front end sends the raw token, so the header is read as-is and
# an optional "Bearer " prefix is stripped by the guard
authorization_header = APIKeyHeader(
    name="Authorization",
    auto_error=False,
    description="Bearer token (the `Bearer ` prefix is optional)",
)

SessionMakerDep = Annotated[SessionMaker, Depends(get_session_maker)]


def get_blob_bucket(request: Request) -> BlobBucket:
    """Dependency returning the bucket created at startup, creating it on first use otherwise."""
    bucket = getattr(request.app.state, "bucket", None)
    if bucket is None:
        bucket = request.app.state.bucket = get_bucket()
    return bucket


BucketDep = Annotated[BlobBucket, Depends(get_blob_bucket)]


def get_blob_store(bucket: BucketDep) -> BlobStore:
    return BlobStore(bucket)


BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]


def get_identity_provider_state(request: Request) -> IdentityProvider:
    provider = getattr(request.app.state, "identity_provider", None)
    if provider is None:
        provider = request.app.state.identity_provider = get_identity_provider()
    return provider


IdentityProviderDep = Annotated[IdentityProvider, Depends(get_identity_provider_state)]


def get_guard(provider: IdentityProviderDep) -> AuthorizationGuard:
    return AuthorizationGuard(provider)


GuardDep = Annotated[AuthorizationGuard, Depends(get_guard)]


async def require_admin(
    guard: GuardDep,
    credential: Annotated[str | None, Security(authorization_header)],
) -> Identity:
    """
    Authorize the request for an administrative mutation.

    Parameters
    ----------
    guard : AuthorizationGuard
        Guard bound to the configured identity provider.
    credential : str | None
        Raw ``Authorization`` header value.

    Returns
    -------
    Identity
        The authenticated administrator.

    Raises
    ------
    UnauthenticatedError
        If the credential is missing or rejected (401).
    ForbiddenError
        If the identity lacks administrator privilege (403).
    """
    return await guard.authorize(credential)


AdminDep = Annotated[Identity, Depends(require_admin)]


def get_tag_manager() -> TagRelationManager:
    return TagRelationManager()


TagManagerDep = Annotated[TagRelationManager, Depends(get_tag_manager)]


def get_post_service(
    session_maker: SessionMakerDep,
    blob_store: BlobStoreDep,
    tags: TagManagerDep,
) -> PostService:
    return PostService(session_maker, blob_store, tags)


PostServiceDep = Annotated[PostService, Depends(get_post_service)]


def get_cover_image_service(blob_store: BlobStoreDep) -> CoverImageService:
    return CoverImageService(blob_store)


CoverImageServiceDep = Annotated[CoverImageService, Depends(get_cover_image_service)]


def get_category_service(
    session_maker: SessionMakerDep,
    tags: TagManagerDep,
) -> CategoryService:
    return CategoryService(session_maker, tags)


CategoryServiceDep = Annotated[CategoryService, Depends(get_category_service)]


@dataclass(frozen=True)
class PostListQuery:
    """
    Query container for post listing.

    Parameters
    ----------
    skip : int
        Number of records to skip.
    limit : int | None
        Maximum number of records to return; all when omitted.
    """

    skip: int = 0
    limit: int | None = None


def get_post_list_query(
    skip: Annotated[int, Query(ge=0, description="Number of records to skip")] = 0,
    limit: Annotated[
        int | None,
        Query(ge=1, le=100, description="Maximum number of records to return"),
    ] = None,
) -> PostListQuery:
    return PostListQuery(skip=skip, limit=limit)


PostQueryListDep = Annotated[PostListQuery, Depends(get_post_list_query)]
