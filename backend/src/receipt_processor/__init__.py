"""
Receipt Processor - reward points for submitted purchase receipts.
"""

__version__ = "0.1.0"
