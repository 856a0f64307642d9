"""
Services package - Orchestration of validation, scoring and storage.
"""

from .processing import (
    ProcessedReceipt,
    ReceiptNotFound,
    ReceiptProcessorError,
    ReceiptRejected,
    ReceiptService,
)

__all__ = [
    "ReceiptService",
    "ProcessedReceipt",
    "ReceiptProcessorError",
    "ReceiptRejected",
    "ReceiptNotFound",
]
