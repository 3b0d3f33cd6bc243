"""
Domain service interfaces for the marketplace.
"""

from .document_storage import DocumentStorage

__all__ = [
    "DocumentStorage",
]
