"""
FastAPI application initialization
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from api.routes import health, stats, content
from api.middleware import RequestContextMiddleware
from core.config import settings
from core.exceptions import ETLException
from core.logging import setup_logging
from schemas.api import ErrorResponse
import logging

setup_logging(verbose=settings.LOG_LEVEL.upper() == "DEBUG")

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Yahska Site Data API",
    description="Read-only view of the migrated site database",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(RequestContextMiddleware)

# Include routers
app.include_router(health.router)
app.include_router(stats.router)
app.include_router(content.router)


@app.exception_handler(ETLException)
async def etl_exception_handler(request: Request, exc: ETLException):
    logger.error(f"{exc.__class__.__name__}: {exc.message}")
    body = ErrorResponse(
        error_type=exc.__class__.__name__,
        message=exc.message,
        context=exc.context,
        request_id=getattr(request.state, "request_id", None),
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


@app.on_event("startup")
async def startup_event():
    """Application startup event"""
    logger.info("Starting site data API")
    logger.info(f"Environment: {settings.ENVIRONMENT}")
    logger.info(f"Database: {settings.DATABASE_URL.split('@')[-1]}")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "Yahska Site Data API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health",
        "endpoints": {
            "stats": "/stats",
            "content": "/content"
        }
    }
