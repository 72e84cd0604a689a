"""
FastAPI Application Entry Point.

This is the main application file for the Cort Backend.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from cort_backend.app.core.config import settings
from cort_backend.app.api.v1.router import router as api_v1_router
from cort_backend.app.core.identity import SupabaseIdentityProvider
from cort_backend.app.core.observability import ObservabilityMiddleware, configure_logging
from cort_backend.app.db.session import engine, Base
from cort_backend.app.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    integrity_exception_handler,
    generic_exception_handler
)

# Import models to ensure they are registered with Base
from cort_backend.app.models.company import Company
from cort_backend.app.models.user import User
from cort_backend.app.models.vehicle import Vehicle
from cort_backend.app.models.route import Route
from cort_backend.app.models.chauffeur_booking import ChauffeurBooking
from cort_backend.app.models.driver_profile import DriverProfile
from cort_backend.app.models.shuttle_contract import ShuttleContract

configure_logging(settings.log_level)
logger = logging.getLogger("cort")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for application startup/shutdown.
    
    1. Creates database tables on startup.
    2. Creates the identity provider client (the only process-wide client).
    3. Closes the client and disposes the engine on shutdown.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    
    app.state.identity_provider = SupabaseIdentityProvider.from_settings(settings)
    logger.info("%s %s started", settings.app_name, settings.api_version)
    yield
    try:
        await app.state.identity_provider.close()
    finally:
        await engine.dispose()


# Initialize FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.api_version,
    debug=settings.debug,
    description="Role-gated backend for companies and vehicles",
    lifespan=lifespan,
)

app.add_middleware(ObservabilityMiddleware)

# Register global exception handlers
app.add_exception_handler(AppException, app_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(IntegrityError, integrity_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)


@app.get("/health", tags=["Health"])
async def health_check():
    """
    Health check endpoint.
    
    Returns:
        dict: Status and application information
    """
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.api_version,
    }


# Include API v1 router
app.include_router(api_v1_router, prefix=f"/{settings.api_version}")
