"""Unit tests for LocalDocumentStorage."""

import pytest

from marketplace.domain.models.base import ValidationError
from marketplace.infrastructure.storage.local_document_storage import (
    LocalDocumentStorage,
    build_document_path,
    sanitize_filename,
)


@pytest.fixture
def storage(tmp_path):
    return LocalDocumentStorage(root=str(tmp_path), base_url="/documents/", bucket="profile-documents")


class TestDocumentPaths:
    """Test storage path helpers."""

    def test_sanitize_filename(self):
        """Test unsafe characters are replaced."""
        assert sanitize_filename("my passport (1).pdf") == "my_passport__1_.pdf"
        assert sanitize_filename("../../etc/passwd") == ".._.._etc_passwd"

    def test_long_filename_keeps_extension(self):
        """Test long names are shortened but keep their extension."""
        safe = sanitize_filename("a" * 300 + ".pdf")

        assert len(safe) <= 200
        assert safe.endswith(".pdf")

    def test_build_document_path(self):
        """Test paths are grouped by profile and slot and made unique."""
        path = build_document_path("a1", "business_license", "License Scan.PDF")

        profile_dir, slot, name = path.split("/")
        assert profile_dir == "a1"
        assert slot == "business_license"
        assert name.startswith("License_Scan_")
        assert name.endswith(".pdf")


class TestLocalDocumentStorage:
    """Test filesystem storage."""

    @pytest.mark.asyncio
    async def test_upload_and_delete(self, storage, tmp_path):
        """Test a file is written, served under the bucket and removed again."""
        url = await storage.upload_bytes("a1/business_license/license.pdf", b"%PDF", "application/pdf")

        stored = tmp_path / "profile-documents" / "a1" / "business_license" / "license.pdf"
        assert url == "/documents/profile-documents/a1/business_license/license.pdf"
        assert stored.read_bytes() == b"%PDF"

        assert await storage.delete("a1/business_license/license.pdf") is True
        assert not stored.exists()
        assert await storage.delete("a1/business_license/license.pdf") is False

    @pytest.mark.asyncio
    async def test_empty_content(self, storage):
        """Test empty files are refused."""
        with pytest.raises(ValidationError, match="File content is empty"):
            await storage.upload_bytes("a1/tax_certificate/tax.pdf", b"", "application/pdf")

    @pytest.mark.asyncio
    async def test_path_traversal(self, storage):
        """Test paths escaping the bucket are refused."""
        with pytest.raises(ValidationError, match="Invalid storage path"):
            await storage.upload_bytes("../outside.pdf", b"data", "application/pdf")
