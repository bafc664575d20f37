from postdeck.dependencies.dependencies import (
    AdminDep,
    BlobStoreDep,
    BucketDep,
    CategoryServiceDep,
    CoverImageServiceDep,
    GuardDep,
    IdentityProviderDep,
    PostListQuery,
    PostQueryListDep,
    PostServiceDep,
    SessionMakerDep,
    TagManagerDep,
    get_blob_bucket,
    get_blob_store,
    get_category_service,
    get_cover_image_service,
    get_guard,
    get_identity_provider_state,
    get_post_service,
    require_admin,
)

__all__ = [
    "AdminDep",
    "BlobStoreDep",
    "BucketDep",
    "CategoryServiceDep",
    "CoverImageServiceDep",
    "GuardDep",
    "IdentityProviderDep",
    "PostListQuery",
    "PostQueryListDep",
    "PostServiceDep",
    "SessionMakerDep",
    "TagManagerDep",
    "get_blob_bucket",
    "get_blob_store",
    "get_category_service",
    "get_cover_image_service",
    "get_guard",
    "get_identity_provider_state",
    "get_post_service",
    "require_admin",
]
