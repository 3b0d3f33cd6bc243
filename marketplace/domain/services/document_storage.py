"""
Document storage interface.
Profiles only ever hold the URL returned by the store, never file bytes.
"""

from abc import ABC, abstractmethod


class DocumentStorage(ABC):
    """Blob store for profile documents."""

    @abstractmethod
    async def upload_bytes(self, path: str, content: bytes, content_type: str) -> str:
        """
        Store ``content`` under ``path``.
        Returns the URL the document can be retrieved from.
        """
        pass

    @abstractmethod
    async def delete(self, path: str) -> bool:
        """Remove a stored document. Returns False if nothing was stored there."""
        pass
