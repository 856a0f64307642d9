"""
Infrastructure package - storage backends for scored receipts.
"""

from .store import DatabaseReceiptStore, InMemoryReceiptStore, ReceiptStore, create_store

__all__ = ["ReceiptStore", "InMemoryReceiptStore", "DatabaseReceiptStore", "create_store"]
