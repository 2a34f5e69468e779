"""
Main FastAPI application for the ride-hailing dashboard backend.
Passengers post orders, drivers bid on them, passengers pick a bid and pay.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
import logging
from typing import AsyncGenerator

from ridehail.core.config import settings
from ridehail.core.database import engine, Base
from ridehail.core.exceptions import RideHailError
from ridehail.core.logging import setup_logging
from ridehail.api.v1.api import api_router
from ridehail.api.v1.schemas import ErrorResponse, HealthResponse
from ridehail.models import order, subscription, user  # noqa: F401  register tables

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    # Startup
    logger.info("Starting Ride Hailing API...")

    # Create database tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    await engine.dispose()

# Create FastAPI app
app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="Ride-hailing backend with driver bidding, subscriptions and QRIS payments",
    version=settings.VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.exception_handler(RideHailError)
async def ride_hail_error_handler(request: Request, exc: RideHailError):
    """Render business errors with a machine-checkable code."""
    logger.warning(f"{request.method} {request.url.path} failed: {exc.code}: {exc.message}")
    body = ErrorResponse(error=exc.code, message=exc.message, details=exc.details)
    return JSONResponse(status_code=exc.status_code, content=body.model_dump())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Render request validation failures in the same envelope as business errors."""
    body = ErrorResponse(
        error="validation_error",
        message="Request validation failed",
        details={"errors": jsonable_encoder(exc.errors())},
    )
    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=body.model_dump())

@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(f"{request.method} {request.url.path} database error: {exc}")
    body = ErrorResponse(error="database_error", message="Internal database error")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=body.model_dump())

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_STR)

@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"{settings.PROJECT_NAME} API",
        "version": settings.VERSION,
        "docs": "/docs"
    }

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    database_connected = True
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        database_connected = False

    return HealthResponse(
        status="healthy" if database_connected else "degraded",
        service="ride-hailing",
        timestamp=datetime.now(timezone.utc),
        database_connected=database_connected,
    )

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "ridehail.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development(),
        log_level=settings.LOG_LEVEL.lower()
    )
