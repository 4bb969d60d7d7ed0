from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .errors import TodoAPIError
from .logging_config import configure_logging
from .repositories import Repository, get_repository
from .routers import todos as todos_router
from .schemas import HealthOut
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)

openapi_tags = [
    {"name": "health", "description": "Service health and status endpoints."},
    {"name": "todos", "description": "CRUD operations for Todo items, completion and remaining items."},
]


def _error_body(error: str, message: str, detail: Optional[Any] = None) -> Dict[str, Any]:
    return {"error": error, "message": message, "detail": detail}


def _describe(errors: List[Dict[str, Any]]) -> str:
    """Flatten pydantic error entries into a single readable message."""
    parts = []
    for err in errors:
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Request validation failed"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Return 400 with a consistent JSON structure for request validation errors.

    Response format:
        {
            "error": "ValidationError",
            "message": "title: String should have at least 1 character",
            "detail": [... pydantic/fastapi error details ...]
        }
    """
    errors = jsonable_encoder(exc.errors())
    message = _describe(errors)
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, message)
    return JSONResponse(status_code=400, content=_error_body("ValidationError", message, errors))


async def todo_error_handler(request: Request, exc: TodoAPIError) -> JSONResponse:
    """Map domain errors (NotFound, ValidationError) to their HTTP status and JSON body."""
    logger.warning("%s on %s %s: %s", exc.error, request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error, exc.message, jsonable_encoder(exc.detail)),
    )


# PUBLIC_INTERFACE
def create_app(settings: Optional[Settings] = None, repository: Optional[Repository] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted.
        repository: Store shared by all requests; a fresh in-memory one when omitted.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Todo Backend",
        description="In-memory backend API service for managing todos.",
        version="0.1.0",
        openapi_tags=openapi_tags,
    )
    app.state.repository = repository if repository is not None else get_repository()

    allow_all = (settings.cors_allow_origins == ["*"]) or (len(settings.cors_allow_origins) == 0)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if allow_all else settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TodoAPIError, todo_error_handler)

    # PUBLIC_INTERFACE
    @app.get("/health", response_model=HealthOut, summary="Health Check", tags=["health"])
    def health_check(request: Request) -> HealthOut:
        """
        Health check endpoint.

        Returns:
            A JSON object with the service status and the current server time.
        """
        return HealthOut(status="ok", timestamp=request.app.state.repository.now())

    app.include_router(todos_router.router)
    app.include_router(todos_router.remaining_router)
    return app


_settings = get_settings()
configure_logging(_settings.log_level)

app = create_app(_settings)
