"""
FastAPI application entry point
"""

import logging
from contextlib import asynccontextmanager

import redis
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .api.errors import register_exception_handlers
from .api.router import api_router
from .api.routes import payments
from .application.use_cases.catalog_use_cases import seed_shoutout_types
from .core.config import settings
from .core.logging_config import configure_logging
from .db.database import SessionLocal
from .infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl

# Import all ORM models to ensure relationships are resolved
from .infrastructure import orm  # noqa: F401

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events"""
    # Startup - migrations handle database schema
    configure_logging()
    logger.info("Starting %s %s (%s)", settings.PROJECT_NAME, settings.VERSION, settings.ENVIRONMENT)
    if not settings.TESTING:
        db = SessionLocal()
        try:
            await seed_shoutout_types(UnitOfWorkImpl(db))
        finally:
            db.close()
    yield
    # Shutdown
    logger.info("Shutting down %s", settings.PROJECT_NAME)


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_HOSTS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Include API routes
app.include_router(api_router, prefix=settings.API_V1_PREFIX)

# Provider return URLs live at the site root, outside the API prefix
app.include_router(payments.router, prefix="/payment", tags=["payments"])


@app.get("/")
async def root():
    """Root endpoint"""
    return {"message": f"{settings.PROJECT_NAME} API", "version": settings.VERSION}


@app.get("/health")
async def health_check():
    """Health check endpoint that verifies database and Redis connectivity"""
    db = SessionLocal()
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        db_status = "unhealthy"
    finally:
        db.close()

    # Redis is optional; report it without failing the check
    try:
        redis.from_url(settings.REDIS_URL, socket_connect_timeout=1).ping()
        redis_status = "healthy"
    except redis.RedisError as e:
        logger.warning("Redis health check failed: %s", e)
        redis_status = "unhealthy"

    return {
        "status": "healthy" if db_status == "healthy" else "degraded",
        "database": db_status,
        "redis": redis_status,
        "version": settings.VERSION
    }


if __name__ == "__main__":
    uvicorn.run(
        "shoutmarket.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower()
    )
