"""FastAPI application setup."""

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared import (
    AuthError,
    RelayException,
    ValidationError,
    create_error_response,
    get_logger,
    setup_logging,
)
from infrastructure.config.settings import Settings, get_settings
from domains.shopify.client import ShopifyClient


logger = get_logger(__name__)


def _status_for(exc: RelayException) -> int:
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, AuthError):
        return 401
    return 500


def _first_validation_error(exc: RequestValidationError) -> ValidationError:
    """Collapse FastAPI's request errors into a single ValidationError."""
    errors = exc.errors()
    if not errors:
        return ValidationError("body", "invalid request body")
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part != "body"]
    field = ".".join(loc) or "body"
    message = first.get("msg", "invalid value")
    if first.get("type") == "json_invalid":
        return ValidationError("body", "request body is not valid JSON")
    return ValidationError(field, f"{field}: {message}", details={"errors": len(errors)})


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    setup_logging(
        log_level=settings.log_level,
        json_logs=settings.log_json
    )

    logger.info(
        "Starting Custom Product Relay",
        environment=settings.app_env,
        store=settings.shopify_store,
        api_version=settings.shopify_api_version
    )
    if not settings.webhook_verification_enabled:
        logger.warning("webhook_verification_disabled", reason="SHOPIFY_WEBHOOK_SECRET not set")
    if not settings.admin_key_required:
        logger.warning("admin_key_disabled", reason="ADMIN_KEY not set")

    owns_client = getattr(app.state, "shopify_client", None) is None
    if owns_client:
        app.state.shopify_client = ShopifyClient(
            store_url=settings.shopify_store,
            access_token=settings.shopify_admin_api_token,
            api_version=settings.shopify_api_version,
            timeout=settings.shopify_timeout
        )

    yield

    logger.info("Shutting down Custom Product Relay")

    if owns_client:
        await app.state.shopify_client.close()
        app.state.shopify_client = None


def create_app(
    settings: Optional[Settings] = None,
    shopify_client: Optional[ShopifyClient] = None
) -> FastAPI:
    """Create FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        debug=settings.debug
    )
    app.state.settings = settings
    app.state.shopify_client = shopify_client

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RelayException)
    async def relay_exception_handler(request: Request, exc: RelayException):
        status_code = _status_for(exc)
        if status_code >= 500:
            logger.error(
                "request_error",
                path=request.url.path,
                error_type=type(exc).__name__,
                error_message=str(exc)
            )
        else:
            logger.warning(
                "request_rejected",
                path=request.url.path,
                error_type=type(exc).__name__,
                error_message=str(exc)
            )
        return JSONResponse(status_code=status_code, content=create_error_response(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        error = _first_validation_error(exc)
        logger.warning(
            "request_rejected",
            path=request.url.path,
            error_type=type(exc).__name__,
            error_message=error.message
        )
        return JSONResponse(status_code=400, content=create_error_response(error))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error_type=type(exc).__name__,
            error_message=str(exc)
        )
        return JSONResponse(status_code=500, content=create_error_response(exc))

    from domains.shopify.routes import router as shopify_router
    app.include_router(shopify_router, tags=["shopify"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"ok": True}

    return app
