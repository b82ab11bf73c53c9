"""
FastAPI Application Entry Point

This module creates and configures the FastAPI application.
It sets up all routes, middleware, and exception handlers.

Design Decisions:
- Build the app from a factory so configuration is validated before serving
- Use lifespan events to create and release the review service
- Restrict CORS to the configured front-end origins
- Add helmet-style security headers to every response
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from reviewx import __version__
from reviewx.api import router as review_router
from reviewx.config import FatalConfigurationError, Settings, get_settings
from reviewx.logging_config import get_logger, setup_logging
from reviewx.services.review_service import ReviewService

logger = get_logger(__name__)

SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
}


def create_app(
    settings: Optional[Settings] = None,
    review_service: Optional[ReviewService] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Application settings (loaded from the environment when omitted)
        review_service: Prebuilt service (built from settings when omitted)

    Returns:
        Configured FastAPI application instance

    Raises:
        FatalConfigurationError: If the configuration is missing or invalid
    """
    if settings is None:
        try:
            settings = get_settings()
        except FatalConfigurationError as e:
            logger.critical("Configuration validation failed", error=str(e))
            raise

    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """
        Application lifespan manager.

        Creates the review service on startup and releases it on shutdown.
        """
        service = review_service or ReviewService.from_settings(settings)
        app.state.review_service = service

        logger.info(
            "Starting ReviewX",
            host=settings.host,
            port=settings.port,
            model=settings.gemini_model
        )

        yield

        logger.info("Shutting down ReviewX")
        await service.close()

    app = FastAPI(
        title="ReviewX",
        description="AI code review API backed by Gemini",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        """Attach security headers to every response."""
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    # Register routes
    app.include_router(review_router)

    # Add global exception handler
    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.error(
            "Unhandled exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            error_type=type(exc).__name__
        )

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"}
        )

    @app.get("/", response_class=PlainTextResponse)
    async def root() -> str:
        """Root endpoint."""
        return "ReviewX API is running"

    @app.get("/health")
    async def health_check():
        """
        Health check endpoint.

        Returns basic health status for load balancers and monitors.
        """
        return {
            "status": "healthy",
            "service": "reviewx",
            "version": __version__
        }

    return app
