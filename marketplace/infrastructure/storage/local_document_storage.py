"""
Filesystem implementation of document storage.
Files are written under ``<root>/<bucket>/`` and served from ``<base_url>/<bucket>/``.
"""

import asyncio
import hashlib
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from marketplace.config import settings
from marketplace.domain.models.base import ValidationError
from marketplace.domain.services.document_storage import DocumentStorage


logger = logging.getLogger(__name__)

SAFE_CHARS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789._-"


def sanitize_filename(filename: str) -> str:
    """Sanitize filename for safe storage."""
    safe_name = "".join(c if c in SAFE_CHARS else "_" for c in filename)

    # Ensure reasonable length
    if len(safe_name) > 200:
        name_part = Path(safe_name).stem[:180]
        ext_part = Path(safe_name).suffix
        safe_name = f"{name_part}{ext_part}"

    return safe_name


def build_document_path(profile_id: str, document_type: str, filename: str) -> str:
    """Unique storage path: ``<profile>/<slot>/<name>_<hash><ext>``."""
    safe_filename = sanitize_filename(filename)
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S%f")
    hash_part = hashlib.md5(f"{profile_id}{safe_filename}{timestamp}".encode()).hexdigest()[:8]

    name = Path(safe_filename).stem
    extension = Path(safe_filename).suffix.lower()
    return "/".join([sanitize_filename(profile_id), document_type, f"{name}_{hash_part}{extension}"])


class LocalDocumentStorage(DocumentStorage):
    """Stores documents on the local filesystem."""

    def __init__(
        self,
        root: Optional[str] = None,
        base_url: Optional[str] = None,
        bucket: Optional[str] = None,
    ):
        self.root = Path(root or settings.document_storage_path)
        self.base_url = (base_url if base_url is not None else settings.document_base_url).rstrip("/")
        self.bucket = bucket or settings.document_storage_bucket

    def _resolve(self, path: str) -> Path:
        bucket_dir = (self.root / self.bucket).resolve()
        target = (bucket_dir / path).resolve()
        if bucket_dir not in target.parents:
            raise ValidationError(f"Invalid storage path: {path}", "path")
        return target

    async def upload_bytes(self, path: str, content: bytes, content_type: str) -> str:
        if not content:
            raise ValidationError("File content is empty", "content")

        target = self._resolve(path)
        await asyncio.to_thread(self._write, target, content)

        logger.info(f"Stored document {path} ({len(content)} bytes, {content_type})")
        return f"{self.base_url}/{self.bucket}/{path}"

    @staticmethod
    def _write(target: Path, content: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)

    async def delete(self, path: str) -> bool:
        target = self._resolve(path)
        if not target.exists():
            return False
        await asyncio.to_thread(target.unlink)
        logger.info(f"Deleted document {path}")
        return True
