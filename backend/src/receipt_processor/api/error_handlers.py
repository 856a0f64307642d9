"""
Exception handlers for FastAPI.

Rejected receipts, unknown identifiers and undecodable request bodies
are all answered with 400 and the ErrorResponse envelope.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from receipt_processor.api.schemas import ErrorResponse, FailureResponse
from receipt_processor.domain.models import FailureCode
from receipt_processor.services import ReceiptNotFound, ReceiptRejected

logger = logging.getLogger(__name__)


def _error_response(content: ErrorResponse, status_code: int) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content.model_dump(exclude_none=True),
    )


async def receipt_rejected_handler(request: Request, exc: ReceiptRejected) -> JSONResponse:
    return _error_response(
        ErrorResponse(
            error="Invalid receipt",
            detail=str(exc),
            failures=[FailureResponse(**failure.to_dict()) for failure in exc.failures],
        ),
        status.HTTP_400_BAD_REQUEST,
    )


async def receipt_not_found_handler(request: Request, exc: ReceiptNotFound) -> JSONResponse:
    return _error_response(
        ErrorResponse(error="That receipt does not exist.", id=exc.receipt_id),
        status.HTTP_400_BAD_REQUEST,
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Map undecodable or non-object bodies to MalformedPayload failures."""
    failures = []
    for error in exc.errors():
        # Drop the leading "body" segment so paths match the receipt JSON
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        failures.append(
            FailureResponse(
                code=FailureCode.MALFORMED_PAYLOAD.value,
                field=".".join(location),
                message=error.get("msg", "invalid value"),
            )
        )
    logger.warning(f"Malformed request to {request.url.path}: {len(failures)} error(s)")
    return _error_response(
        ErrorResponse(
            error="Invalid receipt",
            detail="; ".join(f"{f.field}: {f.message}" if f.field else f.message for f in failures),
            failures=failures,
        ),
        status.HTTP_400_BAD_REQUEST,
    )


def register_error_handlers(app: FastAPI, debug: bool = False) -> None:
    """Attach every handler, including the catch-all for unhandled errors."""
    app.add_exception_handler(ReceiptRejected, receipt_rejected_handler)
    app.add_exception_handler(ReceiptNotFound, receipt_not_found_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Catch-all exception handler for unhandled errors."""
        logger.exception(f"Unhandled error: {exc}")

        # Don't expose internal errors in production
        if debug:
            detail = str(exc)
        else:
            detail = "An internal error occurred"

        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal Server Error",
                "detail": detail,
            },
        )
