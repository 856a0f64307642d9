"""
Health check endpoint.

Provides system health status for monitoring and load balancers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from receipt_processor import __version__
from receipt_processor.api.deps import get_receipt_service
from receipt_processor.api.schemas import HealthResponse
from receipt_processor.services import ReceiptService

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(
    service: Annotated[ReceiptService, Depends(get_receipt_service)],
) -> HealthResponse:
    """Check system health and report the active store backend."""
    return HealthResponse(
        status="healthy",
        version=__version__,
        store=service.store.name,
    )
