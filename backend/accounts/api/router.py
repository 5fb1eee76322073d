"""Router: builds the FastAPI application from prepared handlers.

Invariants:
    - Middleware order is fixed: RequestID → RealIP → RequestLogging → Recoverer
    - GET /health and POST /api/v1/auth/sign-up are the only routes
    - Routes registered explicitly (no auto-discovery)
"""

import logging

from fastapi import APIRouter, FastAPI
from starlette.middleware import Middleware

from accounts.api.error_handlers import register_error_handlers
from accounts.api.middleware import (
    RealIPMiddleware, RecovererMiddleware,
    RequestIDMiddleware, RequestLoggingMiddleware,
)
from accounts.api.routes import auth, health


def create_app(
    auth_handler: auth.AuthHandler, logger: logging.Logger | None = None,
) -> FastAPI:
    """Assemble the application. Middleware listed outermost first."""
    app = FastAPI(
        title="Accounts API",
        version="1.0.0",
        middleware=[
            Middleware(RequestIDMiddleware),
            Middleware(RealIPMiddleware),
            Middleware(RequestLoggingMiddleware, logger=logger),
            Middleware(RecovererMiddleware, logger=logger),
        ],
    )

    app.include_router(health.router)

    api_v1 = APIRouter(prefix="/api/v1")
    auth.register_routes(api_v1, auth_handler)
    app.include_router(api_v1)

    register_error_handlers(app)
    return app
