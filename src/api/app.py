"""Validation API - FastAPI application entry point

Serves the validation demo endpoints. Requests whose fields break a rule
are answered with HTTP 400 and a problem-details body before any handler
runs.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.config import Settings, get_settings
from src.core.models import ValidationOutcome
from src.core.rules import RuleEngine, build_default_registry
from src.core.schema import PAYLOAD_ERROR_KEY, SchemaRegistry
from src.observability.logger import DEFAULT_LOGGER_NAME, get_logger, setup_logger
from src.observability.metrics import generate_metrics, get_content_type

from .routes import router
from .validation import TRACE_ID_HEADER, RequestRejected, ResponseTranslator, get_trace_id

VERSION = "0.1.0"


def create_app(settings: Settings | None = None, registry: SchemaRegistry | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        settings: Application settings (defaults to get_settings())
        registry: Request schemas served by the API (defaults to the built-in ones)

    Returns:
        Configured FastAPI app
    """
    settings = settings or get_settings()
    registry = registry or build_default_registry()
    setup_logger(DEFAULT_LOGGER_NAME, level=settings.log_level, format_type=settings.log_format)
    logger = get_logger(__name__)
    translator = ResponseTranslator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager for startup and shutdown events."""
        logger.info(
            "Starting validation API",
            extra={"environment": settings.environment, "port": settings.port},
        )
        for name in registry.names():
            logger.info(
                f"Loaded schema {name}",
                extra=RuleEngine(registry.get(name)).get_rule_summary(),
            )

        yield

        logger.info("Shutting down validation API")

    app = FastAPI(
        title=settings.app_name,
        description="Declarative field validation rules for request models and parameters",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/swagger" if settings.docs_enabled else None,
        redoc_url=None,
        openapi_url="/swagger/v1/swagger.json" if settings.docs_enabled else None,
    )
    app.state.schema_registry = registry
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", TRACE_ID_HEADER],
    )

    @app.middleware("http")
    async def trace_id_middleware(request: Request, call_next):
        trace_id = get_trace_id(request)
        response = await call_next(request)
        response.headers[TRACE_ID_HEADER] = trace_id
        return response

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for monitoring and load balancer probes."""
        return {
            "status": "healthy",
            "version": VERSION,
            "environment": settings.environment,
            "schemas": registry.names(),
        }

    @app.get("/metrics")
    async def metrics():
        """Prometheus metrics."""
        return Response(content=generate_metrics(), media_type=get_content_type())

    @app.exception_handler(RequestRejected)
    async def request_rejected_handler(request: Request, exc: RequestRejected):
        """Answer a rejected request with 400 and every failing field."""
        return translator.rejection_response(exc.outcome, get_trace_id(request))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        """Render framework-level validation errors in the same problem-details shape."""
        outcome = ValidationOutcome()
        for error in exc.errors():
            location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query")]
            field_name = ".".join(location) or PAYLOAD_ERROR_KEY
            outcome.add_error(field_name, error.get("msg", "Invalid value."))
        outcome.complete()

        logger.warning(
            "Rejected malformed request",
            extra={
                "path": request.url.path,
                "trace_id": get_trace_id(request),
                "failed_fields": outcome.failed_fields,
            },
        )
        return translator.rejection_response(outcome, get_trace_id(request))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Global exception handler for unhandled errors.

        Logs the error and returns a generic message; internal details are
        never exposed to clients.
        """
        trace_id = get_trace_id(request)
        logger.error(
            f"Unhandled exception: {type(exc).__name__}",
            extra={"path": request.url.path, "method": request.method, "trace_id": trace_id},
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            headers={TRACE_ID_HEADER: trace_id},
            content={
                "success": False,
                "error": "internal_error",
                "message": "An unexpected error occurred. Please try again.",
            },
        )

    return app


app = create_app()
