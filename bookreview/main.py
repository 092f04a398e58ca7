"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.

Key Concepts:
=============

1. Application Factory Pattern
   - create_app() returns a fully wired app with its own stores
   - Tests build a new app per test and never share state

2. Lifespan Events
   - startup/shutdown logging

3. Middleware Stack
   - Rate limiting (slowapi)
   - CORS
   - Server-side sessions under /customer

4. Exception Handlers
   - Domain errors become {"message": ...} with their status code
   - Request validation errors become 400
   - Anything else becomes 500 and is logged
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from bookreview.config import Settings, get_settings
from bookreview.exceptions import BookReviewError
from bookreview.routers import customer_router, general_router
from bookreview.services.latency import LatencySimulator
from bookreview.services.rate_limiter import limiter, rate_limit_exceeded_handler
from bookreview.services.security import TokenService
from bookreview.services.sessions import SessionMiddleware, SessionStore
from bookreview.stores import CatalogStore, UserDirectory

# =============================================================================
# Logging Configuration
# =============================================================================
settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan Events
# =============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Code before yield runs on startup, code after it on shutdown."""
    app_settings: Settings = app.state.settings

    # ----- STARTUP -----
    logger.info(f"Starting {app_settings.app_name}...")
    logger.info(f"Debug mode: {app_settings.debug}")
    logger.info(f"Catalog seeded with {len(app.state.catalog)} books")
    if app.state.latency.enabled:
        logger.warning(
            f"Simulated store latency enabled: {app_settings.simulated_delay_ms}ms, "
            f"failure rate {app_settings.simulated_failure_rate}"
        )

    yield

    # ----- SHUTDOWN -----
    logger.info(f"Shutting down {app_settings.app_name}...")


# =============================================================================
# Application Factory
# =============================================================================
def create_app(app_settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Every call builds new stores, so two apps never share users, reviews
    or sessions.

    Args:
        app_settings: Settings to use; defaults to the cached settings

    Returns:
        Configured FastAPI application instance
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        description="""
## Book Review API

Browse a fixed catalog of books and manage your own reviews.

### Public
- **Catalog**: list all books, look up by ISBN, search by author or title
- **Reviews**: read the reviews of any book
- **Registration**: create an account

### Customers
Log in at `/customer/login`; the session cookie then authorizes
`/customer/auth/review/{isbn}` to add, replace or delete your review.
        """,
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # -------------------------------------------------------------------------
    # Stores and Services
    # -------------------------------------------------------------------------
    app.state.settings = app_settings
    app.state.catalog = CatalogStore()
    app.state.users = UserDirectory()
    app.state.tokens = TokenService.from_settings(app_settings)
    app.state.sessions = SessionStore()
    app.state.latency = LatencySimulator(
        delay_ms=app_settings.simulated_delay_ms,
        failure_rate=app_settings.simulated_failure_rate,
    )

    # -------------------------------------------------------------------------
    # Rate Limiting
    # -------------------------------------------------------------------------
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # -------------------------------------------------------------------------
    # CORS Middleware
    # -------------------------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------------------------------
    # Sessions
    # -------------------------------------------------------------------------
    app.add_middleware(
        SessionMiddleware,
        store=app.state.sessions,
        cookie_name=app_settings.session_cookie_name,
        path_prefix=app_settings.session_path_prefix,
        https_only=app_settings.session_https_only,
    )

    # -------------------------------------------------------------------------
    # Exception Handlers
    # -------------------------------------------------------------------------
    @app.exception_handler(BookReviewError)
    async def book_review_exception_handler(
        request: Request,
        exc: BookReviewError,
    ) -> JSONResponse:
        """Render a domain error as {"message": ..., **details}."""
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        else:
            logger.info(
                f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}"
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_content(),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed input is a client error like any other missing field."""
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "message": "Invalid request",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Catch-all exception handler.

        In production, hide internal errors from users.
        In debug mode, show more details.
        """
        logger.error(f"Unhandled error: {exc}", exc_info=True)

        if app_settings.debug:
            return JSONResponse(
                status_code=500,
                content={"message": str(exc)},
            )

        return JSONResponse(
            status_code=500,
            content={"message": "An internal error occurred."},
        )

    # -------------------------------------------------------------------------
    # Register Routers
    # -------------------------------------------------------------------------
    app.include_router(customer_router)
    app.include_router(general_router)

    # -------------------------------------------------------------------------
    # Health Check Endpoint
    # -------------------------------------------------------------------------
    @app.get(
        "/health",
        tags=["Health"],
        summary="Health check",
        description="Check if the API is running and healthy.",
    )
    async def health_check() -> dict:
        """Liveness probe with a few store counters."""
        return {
            "status": "healthy",
            "app": app_settings.app_name,
            "books": len(app.state.catalog),
            "users": len(app.state.users),
            "sessions": len(app.state.sessions),
        }

    return app


# =============================================================================
# Application Instance
# =============================================================================
# This is what uvicorn imports: uvicorn bookreview.main:app

app = create_app()


# =============================================================================
# Development Server
# =============================================================================
# python -m bookreview.main

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "bookreview.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
