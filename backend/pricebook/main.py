"""
FastAPI application entry point for the Pricebook data store.

This module initializes the FastAPI app with middleware, CORS, logging,
and registers the table routers.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from pricebook.config import settings
from pricebook.database import init_db
from pricebook.dependencies import require_api_key
from pricebook.logger import setup_logging
from pricebook.routers import categories, products

setup_logging(
    level=settings.LOG_LEVEL,
    enable_file=settings.ENABLE_FILE_LOGGING,
    log_dir=settings.LOG_DIR,
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for startup and shutdown events.
    """
    # Startup
    logger.info("Initializing database...")
    init_db()
    logger.info("Database initialized successfully")

    yield

    # Shutdown
    logger.info("Shutting down store...")


# Create FastAPI app
app = FastAPI(
    title="Pricebook Store API",
    description="Categories and products for the Pricebook catalog",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Add GZip compression (data: image URLs can be large)
app.add_middleware(GZipMiddleware, minimum_size=1000)

# Register routers
app.include_router(
    categories.router,
    prefix=f"{settings.API_PREFIX}/categories",
    tags=["categories"],
    dependencies=[Depends(require_api_key)],
)
app.include_router(
    products.router,
    prefix=f"{settings.API_PREFIX}/products",
    tags=["products"],
    dependencies=[Depends(require_api_key)],
)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Global exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal Server Error"},
    )


@app.get("/")
async def root():
    """Root endpoint for health check."""
    return {"message": "Pricebook Store API", "status": "running"}


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "pricebook.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info",
    )
