"""Blog Backend - blogs, comments, likes and JWT authentication on FastAPI."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from blog_backend.configs import settings
from blog_backend.errors import (
    BaseAppError,
    DatabaseError,
    PasswordHashingError,
    PermissionDeniedError,
    StorageError,
    UserAuthenticationError,
    auth_exception_handler,
    create_exception_handler,
    database_exception_handler,
    password_hashing_exception_handler,
    storage_exception_handler,
    validation_exception_handler,
)
from blog_backend.managers import limiter, rate_limit_exceeded_handler
from blog_backend.middleware import (
    LoggingMiddleware,
    SecurityHeadersMiddleware,
    configure_cors,
    lifespan,
)
from blog_backend.monitoring import get_logger
from blog_backend.routes import (
    auth_router,
    blog_router,
    comment_router,
    search_router,
    user_router,
)
from blog_backend.utils.helpers import today_str

app = FastAPI(
    title=settings.APP_NAME,
    description="Blog backend API",
    version="1.0.0",
    lifespan=lifespan,
    swagger_ui_parameters={
        "docExpansion": "none",
        "operationsSorter": "method",
    },
)

configure_cors(app)

app.add_middleware(LoggingMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")

routes = [
    auth_router,
    blog_router,
    comment_router,
    user_router,
    search_router,
]

_ = [app.include_router(router) for router in routes]

errors = [
    (RateLimitExceeded, rate_limit_exceeded_handler),
    (PasswordHashingError, password_hashing_exception_handler),
    (DatabaseError, database_exception_handler),
    (UserAuthenticationError, auth_exception_handler),
    (PermissionDeniedError, auth_exception_handler),
    (StorageError, storage_exception_handler),
    (BaseAppError, create_exception_handler(get_logger(__name__))),
    (RequestValidationError, validation_exception_handler),
]

_ = [app.add_exception_handler(exc_type, handler) for exc_type, handler in errors]

app.state.limiter = limiter


@app.get(
    "/health",
    tags=["🩺 Health"],
    summary="Health check endpoint",
    response_class=ORJSONResponse,
    responses={
        200: {
            "content": {
                "application/json": {
                    "example": {
                        "version": "1.0.0",
                        "status": "ok",
                        "environment": "development",
                        "timestamp": "2025-01-01 10:00:00",
                    },
                },
            },
        },
    },
    operation_id="health_check",
)
@limiter.exempt
async def health_check(request: Request) -> ORJSONResponse:
    """
    Liveness probe.

    Parameters
    ----------
    request : Request
        Current request context.

    Returns
    -------
    ORJSONResponse
        Version, status and server time.
    """
    return ORJSONResponse(
        {
            "version": app.version,
            "status": "ok",
            "environment": settings.ENVIRONMENT,
            "timestamp": today_str(),
        },
    )
