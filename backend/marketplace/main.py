"""
FastAPI application entry point.

WHAT: Main application setup and wiring
WHY: Host the marketplace store and drive its snapshot/restore lifecycle
HOW: Create FastAPI app, register middleware, routers, handlers
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .core.config import settings
from .core.database import init_db, close_db
from .core.snapshot_repository import SnapshotRepository
from .core.store import MarketplaceStore
from .utils.logger import setup_logging, get_logger
from .middleware.error_handler import register_exception_handlers
from .api.v1.router import api_router

# Setup logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    WHAT: Restore the store on startup, snapshot it on shutdown
    WHY: No request may reach the store between snapshot and restore
    HOW: Restore runs before the first request, snapshot after the last
    """
    logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
    init_db()

    store = MarketplaceStore()
    repository = SnapshotRepository()
    if settings.RESTORE_ON_STARTUP:
        snapshot = repository.load()
        if snapshot is not None:
            store.restore(snapshot)
    app.state.store = store
    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application")
    if settings.SNAPSHOT_ON_SHUTDOWN:
        repository.save(store.snapshot())
    close_db()
    logger.info("Application shutdown complete")


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register exception handlers
register_exception_handlers(app)

# Include API router
app.include_router(api_router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "marketplace.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
