"""
Purchase Order Fulfillment - Main FastAPI Application
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.middleware.base import BaseHTTPMiddleware

from pof.api import router as odata_router
from pof.core.settings import settings
from pof.exceptions import CoreServiceError, POFException
from pof.integrations.gtt_core_service import GTTCoreServiceClient
from pof.logging_config import setup_logging, get_logger
from pof.services.collaborators import InboundDeliveryItemHandler, LocationService

# Setup structured logging
setup_logging()
logger = get_logger(__name__)


# ===================
# Security Headers Middleware
# ===================

class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        # Prevent clickjacking
        response.headers["X-Frame-Options"] = "DENY"
        # Prevent MIME type sniffing
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # HSTS in production
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(
        f"Starting {settings.PROJECT_NAME} API",
        extra={
            "version": settings.VERSION,
            "environment": settings.ENVIRONMENT,
            "core_service": app.state.core_client.base_url,
            "location_service": app.state.location_service is not None,
            "inbound_delivery_item_handler": app.state.inbound_delivery_item_handler is not None,
        }
    )
    yield
    logger.info(f"Shutting down {settings.PROJECT_NAME} API")


# ===================
# Exception Handlers
# ===================

async def core_service_exception_handler(request: Request, exc: CoreServiceError):
    """Hand the core service's own error response back to the caller."""
    logger.warning(
        f"Core service error on {request.url.path}: {exc.message}",
        extra={"error_code": exc.error_code, "details": exc.details},
    )
    if exc.upstream_status is None or exc.upstream_body is None:
        error_dict = exc.to_dict()
        error_dict["timestamp"] = _timestamp()
        return JSONResponse(status_code=exc.status_code, content=error_dict)
    if isinstance(exc.upstream_body, (dict, list)):
        return JSONResponse(status_code=exc.upstream_status, content=exc.upstream_body)
    return PlainTextResponse(status_code=exc.upstream_status, content=str(exc.upstream_body))


async def pof_exception_handler(request: Request, exc: POFException):
    logger.warning(
        f"POF Exception: {exc.error_code} - {exc.message}",
        extra={"error_code": exc.error_code, "details": exc.details, "path": request.url.path}
    )
    error_dict = exc.to_dict()
    error_dict["timestamp"] = _timestamp()
    return JSONResponse(status_code=exc.status_code, content=error_dict)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        errors.append({"field": field, "message": error["msg"], "type": error["type"]})
    logger.warning("Validation error on %s", request.url.path, extra={"errors": errors})
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {"errors": errors},
            "timestamp": _timestamp(),
        },
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unexpected error on {request.url.path}: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "INTERNAL_ERROR",
            "message": "An unexpected error occurred. Please try again later.",
            "timestamp": _timestamp(),
        },
    )


def create_app(
    core_client: Optional[GTTCoreServiceClient] = None,
    *,
    location_service: Optional[LocationService] = None,
    inbound_delivery_item_handler: Optional[InboundDeliveryItemHandler] = None,
) -> FastAPI:
    """
    Build the application.

    The location service and the inbound delivery item handler are supplied
    by the host; without them, reads that need locations or inbound delivery
    timings answer 503.
    """
    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        description="Purchase order item reads enriched with locations and deletion state",
        version=settings.VERSION,
        lifespan=lifespan,
    )
    app.state.core_client = core_client or GTTCoreServiceClient()
    app.state.location_service = location_service
    app.state.inbound_delivery_item_handler = inbound_delivery_item_handler

    # Security headers middleware (outermost)
    app.add_middleware(SecurityHeadersMiddleware)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "Origin", "X-Requested-With"],
    )

    app.add_exception_handler(CoreServiceError, core_service_exception_handler)
    app.add_exception_handler(POFException, pof_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # OData routes
    app.include_router(odata_router, prefix=settings.ODATA_ROOT)

    @app.get("/")
    async def root():
        return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION, "status": "online"}

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("pof.main:app", host="0.0.0.0", port=8001, reload=settings.DEBUG)
