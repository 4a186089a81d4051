"""FastAPI main application module.

Run with ``uvicorn src.vehicle_registry.presentation.api.main:create_app --factory``.
"""

from typing import Optional
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError

from ...domain.exceptions import AuthenticationError, NotFoundError, ValidationError
from ...infrastructure.logging import LoggingConfig, get_correlation_id, get_logger
from ...infrastructure.services import ServiceFactory
from .routes import health, auth, vehicles, administrators
from .config import Settings, get_settings
from .middleware.logging import RequestResponseLoggingMiddleware


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    settings: Settings = app.state.settings
    LoggingConfig.from_settings(settings).setup_logging()

    service_factory: ServiceFactory = app.state.service_factory
    logger.info(
        f"Starting Vehicle Registry API; tokens issued by {service_factory.token_service.issuer} "
        f"live {service_factory.token_service.lifetime}"
    )
    await service_factory.initialize()

    yield

    logger.info("Shutting down Vehicle Registry API")
    await app.state.service_factory.shutdown()


def add_exception_handlers(app: FastAPI) -> None:
    """Add custom exception handlers to the FastAPI application."""

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        """Handle authentication errors; the body never says what was wrong."""
        logger.warning(f"Authentication error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=401,
            content={
                "detail": "Not authenticated",
                "type": "authentication_error"
            },
            headers={"WWW-Authenticate": "Bearer"}
        )

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(request: Request, exc: NotFoundError):
        """Handle lookups of missing records."""
        logger.info(f"Not found on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=404,
            content={
                "detail": str(exc),
                "type": "not_found"
            }
        )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        """Handle validation errors from business logic."""
        logger.warning(f"Validation error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=400,
            content={
                "detail": str(exc),
                "type": "validation_error"
            }
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        """Report malformed payloads and query parameters as 400."""
        logger.warning(f"Request validation error on {request.url.path}")
        return JSONResponse(
            status_code=400,
            content={
                "detail": jsonable_encoder(exc.errors()),
                "type": "validation_error"
            }
        )

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        """Handle store failures without leaking details."""
        logger.error(f"Database error on {request.url.path}: {str(exc)}", exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "type": "database_error",
                "correlation_id": get_correlation_id()
            }
        )

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(request: Request, exc: RuntimeError):
        """Handle runtime errors from business logic."""
        logger.error(f"Runtime error on {request.url.path}: {str(exc)}")
        return JSONResponse(
            status_code=500,
            content={
                "detail": "Internal server error occurred",
                "type": "runtime_error",
                "correlation_id": get_correlation_id()
            }
        )


def create_app(
    settings: Optional[Settings] = None,
    service_factory: Optional[ServiceFactory] = None
) -> FastAPI:
    """Create and configure FastAPI application.

    Raises:
        ConfigurationError: if no settings are passed and the environment
            lacks the JWT key or issuer
    """
    settings = settings or get_settings()
    service_factory = service_factory or ServiceFactory.from_settings(settings)

    app = FastAPI(
        title="Vehicle Registry",
        description="Authenticated API for managing vehicle records",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        debug=settings.debug,
        lifespan=lifespan
    )
    app.state.settings = settings
    app.state.service_factory = service_factory

    add_exception_handlers(app)

    app.add_middleware(RequestResponseLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=settings.cors_methods,
        allow_headers=settings.cors_headers,
    )

    app.include_router(health.router, tags=["health"])
    app.include_router(
        auth.router,
        prefix=f"{settings.api_prefix}/auth",
        tags=["authentication"]
    )
    app.include_router(
        vehicles.router,
        prefix=f"{settings.api_prefix}/vehicles",
        tags=["vehicles"]
    )
    app.include_router(
        administrators.router,
        prefix=f"{settings.api_prefix}/administrators",
        tags=["administrators"]
    )

    return app
