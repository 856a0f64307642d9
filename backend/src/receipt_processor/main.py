"""
FastAPI application entry point.

This is the main application that ties together all components:
- API routes for receipt submission and point lookup
- Receipt store lifecycle management
- Error handling and logging
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from receipt_processor import __version__
from receipt_processor.api.error_handlers import register_error_handlers
from receipt_processor.api.routes import debug, health, receipts
from receipt_processor.config import Settings, get_settings
from receipt_processor.domain.scoring import ScoringEngine
from receipt_processor.infrastructure.store import create_store
from receipt_processor.services import ReceiptService

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown tasks:
    - Initialize the receipt store (creates tables for the SQL backend)
    - Release store resources on shutdown
    """
    settings: Settings = app.state.settings
    store = app.state.receipt_service.store

    logger.info(f"Starting Receipt Processor v{__version__}")
    logger.info(f"Store backend: {store.name}")
    logger.info(f"Per-item receipt bonuses: {settings.per_item_receipt_bonuses}")
    logger.info(f"Debug mode: {settings.debug}")

    await store.init()

    yield  # Application runs here

    # Shutdown
    logger.info("Shutting down Receipt Processor")
    await store.close()


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Explicit settings; loaded from the environment if None.

    Returns:
        Configured FastAPI instance ready to serve requests.
    """
    settings = settings or get_settings()
    logging.getLogger().setLevel(settings.log_level)

    app = FastAPI(
        title="Receipt Processor API",
        description=(
            "Validates submitted purchase receipts, scores them with the "
            "reward-points rules and keeps the result for later lookup."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # One store per application instance
    app.state.settings = settings
    app.state.receipt_service = ReceiptService(
        store=create_store(settings),
        engine=ScoringEngine(per_item_receipt_bonuses=settings.per_item_receipt_bonuses),
        strict_calendar=settings.strict_calendar,
    )

    # Register routers
    app.include_router(health.router)
    app.include_router(receipts.router)

    # Debug router (only in debug mode)
    if settings.debug:
        app.include_router(debug.router)

    register_error_handlers(app, debug=settings.debug)

    return app


# Create the application instance
app = create_app()


# Development server entry point
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "receipt_processor.main:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )
