"""
Receipt processing orchestrator service.

Coordinates the full pipeline for one submitted receipt:
1. Validation of structure, formats and totals
2. Scoring of the accepted receipt
3. Storage under a generated identifier

A rejected receipt never reaches the scoring engine or the store.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from receipt_processor.domain.models import Receipt, ValidationFailure, ValidationResult
from receipt_processor.domain.scoring import ScoringEngine
from receipt_processor.domain.validation import validate_receipt
from receipt_processor.infrastructure.store import ReceiptStore

logger = logging.getLogger(__name__)


class ReceiptProcessorError(Exception):
    """Base class for errors surfaced to API callers."""


class ReceiptRejected(ReceiptProcessorError):
    """A submitted receipt failed one or more validation checks."""

    def __init__(self, failures: list[ValidationFailure]) -> None:
        self.failures = failures
        super().__init__("; ".join(f.message for f in failures))


class ReceiptNotFound(ReceiptProcessorError):
    """No receipt is stored under the requested identifier."""

    def __init__(self, receipt_id: str) -> None:
        self.receipt_id = receipt_id
        super().__init__(f"Receipt not found: {receipt_id}")


@dataclass(frozen=True)
class ProcessedReceipt:
    """A stored receipt together with its identifier."""
    receipt_id: str
    receipt: Receipt

    @property
    def points(self) -> int:
        return self.receipt.points


class ReceiptService:
    """
    High-level service for receipt submission and point lookup.

    Args:
        store: Backend holding scored receipts
        engine: Scoring engine; a default engine is created if None
        strict_calendar: Also require real calendar dates and clock times
    """

    def __init__(
        self,
        store: ReceiptStore,
        engine: ScoringEngine | None = None,
        strict_calendar: bool = False,
    ) -> None:
        self.store = store
        self.engine = engine or ScoringEngine()
        self.strict_calendar = strict_calendar

    def evaluate(self, raw: Mapping[str, Any]) -> ValidationResult:
        """
        Validate and, when accepted, score a receipt without storing it.

        The returned result carries the scored receipt on acceptance.
        """
        result = validate_receipt(raw, strict_calendar=self.strict_calendar)
        if not result.accepted:
            return result

        points = self.engine.score(result.receipt)
        result.receipt = result.receipt.with_points(points)
        return result

    async def process(self, raw: Mapping[str, Any]) -> ProcessedReceipt:
        """
        Validate, score and store a submitted receipt.

        Raises:
            ReceiptRejected: If any validation check failed
        """
        result = self.evaluate(raw)
        if not result.accepted:
            codes = ", ".join(code.value for code in result.failure_codes)
            logger.warning(f"Receipt rejected: {codes}")
            raise ReceiptRejected(result.failures)

        receipt_id = await self.store.save(result.receipt)
        logger.info(f"Stored receipt {receipt_id} with {result.receipt.points} points")
        return ProcessedReceipt(receipt_id=receipt_id, receipt=result.receipt)

    async def get_points(self, receipt_id: str) -> int:
        """
        Look up the points awarded to a stored receipt.

        Raises:
            ReceiptNotFound: If the identifier is unknown
        """
        receipt = await self.store.get(receipt_id)
        if receipt is None:
            raise ReceiptNotFound(receipt_id)
        return receipt.points

    async def dump(self) -> dict[str, Receipt]:
        """Every stored receipt keyed by identifier."""
        return await self.store.dump()
