"""
Receipt endpoints.

Handles receipt submission and point lookup.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from receipt_processor.api.deps import get_receipt_service
from receipt_processor.api.schemas import (
    ErrorResponse,
    PointsResponse,
    ProcessReceiptResponse,
    ReceiptResponse,
    ReceiptSubmission,
)
from receipt_processor.services import ReceiptService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipts", tags=["receipts"])


@router.post(
    "/process",
    response_model=ProcessReceiptResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": ErrorResponse, "description": "Receipt failed validation"},
    },
)
async def process_receipt(
    submission: ReceiptSubmission,
    service: Annotated[ReceiptService, Depends(get_receipt_service)],
) -> ProcessReceiptResponse:
    """
    Submit a receipt for scoring.

    **Process:**
    1. Validate required fields, date/time formats and amounts
    2. Check that item prices sum to the total
    3. Score the receipt
    4. Store it under a new identifier

    All validation failures are reported together in a single 400 response.
    """
    processed = await service.process(submission.to_raw())

    return ProcessReceiptResponse(
        id=processed.receipt_id,
        receipt=ReceiptResponse.model_validate(processed.receipt.to_dict()),
    )


@router.get(
    "/{receipt_id}/points",
    response_model=PointsResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Unknown receipt id"},
    },
)
async def get_points(
    receipt_id: str,
    service: Annotated[ReceiptService, Depends(get_receipt_service)],
) -> PointsResponse:
    """Return the points awarded to a previously submitted receipt."""
    points = await service.get_points(receipt_id)
    return PointsResponse(points=points)
