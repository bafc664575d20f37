from postdeck.middleware.middleware import (
    LoggingMiddleware,
    RequestContextMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)

__all__ = [
    "LoggingMiddleware",
    "RequestContextMiddleware",
    "SecurityHeadersMiddleware",
    "configure_cors",
    "lifespan",
]
