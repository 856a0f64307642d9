"""
FastAPI dependencies.

The receipt service (and the store behind it) lives on app.state and is
created per application instance in create_app.
"""

from fastapi import Request

from receipt_processor.config import Settings
from receipt_processor.services import ReceiptService


def get_receipt_service(request: Request) -> ReceiptService:
    """Get the receipt service bound to this application."""
    return request.app.state.receipt_service


def get_app_settings(request: Request) -> Settings:
    """Get the settings this application was created with."""
    return request.app.state.settings
