"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from apogee.api.middleware.auth import PortalAuthMiddleware
from apogee.api.v1 import benefit_designer, customer, quoting
from apogee.core.config import settings
from apogee.core.constants import SERVICE_ALLOWED_ROLES, ServiceName
from apogee.core.errors import PortalError
from apogee.core.logging import get_logger, setup_logging

API_PREFIX = "/api/v1"

SERVICE_ROUTERS = {
    ServiceName.QUOTING: quoting.routers,
    ServiceName.BENEFIT_DESIGNER: benefit_designer.routers,
    ServiceName.CUSTOMER: customer.routers,
}

SERVICE_TITLES = {
    ServiceName.QUOTING: "Quoting API",
    ServiceName.BENEFIT_DESIGNER: "Benefit Designer API",
    ServiceName.CUSTOMER: "Customer Service API",
}

logger = get_logger(__name__)


def create_app(service: str) -> FastAPI:
    """Build the app for one of the three services."""
    service = ServiceName(service)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown lifecycle hooks."""
        setup_logging("DEBUG" if settings.APP_ENV == "development" else "INFO")
        startup_logger = get_logger("startup")
        startup_logger.info("Application starting", service=service.value, env=settings.APP_ENV)
        yield
        startup_logger.info("Application shutting down", service=service.value)

    app = FastAPI(
        title=SERVICE_TITLES[service],
        description="Insurance portal: quoting, benefit design and policy administration",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(PortalAuthMiddleware, allowed_roles=SERVICE_ALLOWED_ROLES[service])
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Restrict in production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    for router in SERVICE_ROUTERS[service]:
        app.include_router(router, prefix=API_PREFIX)

    @app.exception_handler(PortalError)
    async def portal_error_handler(request: Request, exc: PortalError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning("Upstream failure", path=request.url.path, message=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error", path=request.url.path, method=request.method)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "InternalError", "message": "Internal Server Error"},
        )

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Public health-check endpoint."""
        return {"status": "ok", "service": service.value, "env": settings.APP_ENV}

    @app.get("/unauthorized", tags=["Health"], status_code=status.HTTP_403_FORBIDDEN)
    async def unauthorized() -> dict[str, str]:
        """Landing page for authenticated users without a role for this service."""
        return {"error": "Forbidden", "message": "You do not have access to this service"}

    return app


app = create_app(settings.SERVICE_NAME)
