"""
Debug endpoints for development and testing.

These endpoints are only available when DEBUG=true.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from receipt_processor.api.deps import get_app_settings, get_receipt_service
from receipt_processor.api.schemas import DatabaseDumpResponse, ReceiptResponse
from receipt_processor.config import Settings
from receipt_processor.services import ReceiptService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["debug"])


@router.get("/db", response_model=DatabaseDumpResponse)
async def dump_database(
    service: Annotated[ReceiptService, Depends(get_receipt_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> DatabaseDumpResponse:
    """
    Dump every stored receipt keyed by identifier.

    Only available in debug mode.
    """
    if not settings.debug:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Debug endpoints are disabled in production",
        )

    receipts = await service.dump()
    logger.debug(f"Dumping {len(receipts)} stored receipt(s)")

    return DatabaseDumpResponse(
        database={
            receipt_id: ReceiptResponse.model_validate(receipt.to_dict())
            for receipt_id, receipt in receipts.items()
        }
    )
