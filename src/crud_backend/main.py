"""
Composition root for the CRUD backend.

``create_app`` builds one store per entity type, wraps each in its service,
and mounts the routers. Stores live on ``app.state`` for the lifetime of the
application. The default ``app`` used by uvicorn is built on first access::

    uvicorn crud_backend.main:app
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .logging_config import setup_logging
from .repositories import (
    InMemoryTodoRepository,
    InMemoryUserRepository,
    TodoRepository,
    UserRepository,
)
from .routers import todos as todos_router
from .routers import users as users_router
from .routers.errors import INTERNAL_ERROR_MESSAGE
from .services import TodoService, UserService
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items."},
    {"name": "users", "description": "CRUD operations for users with unique usernames."},
]


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Malformed bodies and non-integer ids are client errors.

    Response format:
        {
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "ValidationError",
            "message": "Request validation failed",
            "detail": jsonable_encoder(exc.errors()),
        },
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render HTTP errors, including mapped domain errors, as {"error": message}."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log unexpected failures and answer with an opaque 500."""
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": INTERNAL_ERROR_MESSAGE},
    )


# PUBLIC_INTERFACE
def create_app(
    settings: Optional[Settings] = None,
    todo_repo: Optional[TodoRepository] = None,
    user_repo: Optional[UserRepository] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Repositories default to fresh in-memory stores; pass alternatives to
    swap the persistence backend.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        description="Backend API service for managing todos and users over pluggable repositories.",
        version=settings.app_version,
        openapi_tags=openapi_tags,
    )

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.state.settings = settings
    app.state.todo_repo = todo_repo or InMemoryTodoRepository()
    app.state.user_repo = user_repo or InMemoryUserRepository()
    app.state.todo_service = TodoService(app.state.todo_repo)
    app.state.user_service = UserService(app.state.user_repo)

    @app.get("/", summary="Health Check", tags=["health"])
    def health_check():
        """
        Health check endpoint.

        Returns:
            A JSON object indicating service health and current record counts.
        """
        return {
            "message": "Healthy",
            "todos": app.state.todo_repo.count(),
            "users": app.state.user_repo.count(),
        }

    app.include_router(todos_router.router)
    app.include_router(users_router.router)

    logger.info("Application %s %s configured", settings.app_name, settings.app_version)
    return app


def __getattr__(name: str):
    # Built on first access so importing this module never reads CONFIG_FILE
    if name == "app":
        globals()["app"] = create_app()
        return globals()["app"]
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
