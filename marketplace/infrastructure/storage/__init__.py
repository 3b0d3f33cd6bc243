"""
Document storage adapters.
"""

from .local_document_storage import LocalDocumentStorage, build_document_path, sanitize_filename

__all__ = [
    "LocalDocumentStorage",
    "build_document_path",
    "sanitize_filename",
]
