"""Postdeck Backend - blog content management API."""

from logging import getLogger

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from fastapi.staticfiles import StaticFiles
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from postdeck.configs import file_logger, settings
from postdeck.errors import (
    DanglingReferenceError,
    ForbiddenError,
    ImageTooLargeError,
    NotFoundError,
    StorageError,
    UnauthenticatedError,
    UnsupportedImageTypeError,
    ValidationError,
    auth_exception_handler,
    create_unexpected_handler,
    database_exception_handler,
    request_validation_exception_handler,
    upload_exception_handler,
    validation_exception_handler,
)
from postdeck.managers import limiter, rate_limit_exceeded_handler
from postdeck.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from postdeck.monitoring import configure_logging
from postdeck.routes import (
    admin_categories_router,
    admin_posts_router,
    categories_router,
    posts_router,
    uploads_router,
)
from postdeck.schemas import HealthCheckResponse
from postdeck.utils.helpers import today_str

configure_logging()

logger = file_logger(getLogger(__name__))

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog content management API: posts, categories and cover images",
    version=settings.APP_VERSION,
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestContextMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
# Trust X-Forwarded-* when deployed behind a proxy
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [
    posts_router,
    categories_router,
    admin_posts_router,
    admin_categories_router,
    uploads_router,
]

_ = [app.include_router(router) for router in routes]

if settings.STORAGE_PROVIDER == "local":
    app.mount(
        "/uploads",
        StaticFiles(directory=settings.UPLOADS_DIR, check_dir=False),
        name="uploads",
    )

errors = [
    (UnauthenticatedError, auth_exception_handler),
    (ForbiddenError, auth_exception_handler),
    (ValidationError, validation_exception_handler),
    (DanglingReferenceError, validation_exception_handler),
    (NotFoundError, database_exception_handler),
    (StorageError, upload_exception_handler),
    (ImageTooLargeError, upload_exception_handler),
    (UnsupportedImageTypeError, upload_exception_handler),
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (RequestValidationError, request_validation_exception_handler),
    (Exception, create_unexpected_handler(logger)),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter
limiter: Limiter = app.state.limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_model=HealthCheckResponse,
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {"version": "1.0.0", "status": "ok", "timestamp": "2025-01-01 00:00:00"},
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> HealthCheckResponse:
    """
    Health check endpoint.

    Returns
    -------
    HealthCheckResponse
        Application version, status and local timestamp.
    """
    return HealthCheckResponse(version=app.version, status="ok", timestamp=today_str())
