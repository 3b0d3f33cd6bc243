"""Unit tests for profile use cases."""

import pytest
from unittest.mock import AsyncMock

from marketplace.application.dto.profile_dto import (
    ArchiveProfileRequestDTO,
    CreateProfileRequestDTO,
    ListProfilesByStatusRequestDTO,
    ProfileActionRequestDTO,
    RecordReviewRequestDTO,
    RejectProfileRequestDTO,
    UpdateProfileSectionRequestDTO,
    UploadProfileDocumentRequestDTO,
)
from marketplace.application.use_cases.profile_use_cases import (
    ArchiveProfileUseCase,
    CreateProfileUseCase,
    GetProfileUseCase,
    ListProfilesByStatusUseCase,
    RecordProfileReviewUseCase,
    RejectProfileUseCase,
    SubmitProfileForVerificationUseCase,
    UpdateProfileSectionUseCase,
    UploadProfileDocumentUseCase,
    VerifyProfileUseCase,
)
from marketplace.config import Settings
from marketplace.domain.models.agency_profile import AgencyProfile
from marketplace.domain.models.base import ConcurrencyError
from marketplace.domain.models.profile_status import ProfileStatus
from marketplace.domain.services.document_storage import DocumentStorage
from marketplace.infrastructure.repositories.in_memory_profile_repository import InMemoryProfileRepository

from conftest import make_agency, make_maid


@pytest.fixture
def repository():
    return InMemoryProfileRepository()


@pytest.fixture
def storage():
    storage = AsyncMock(spec=DocumentStorage)
    storage.upload_bytes.return_value = "/documents/profile-documents/a1/business_license/license_abc.pdf"
    storage.delete.return_value = True
    return storage


@pytest.fixture
def upload_settings():
    return Settings(_env_file=None, max_document_size_mb=1, allowed_document_extensions=".pdf,.png")


async def seed(repository, profile):
    await repository.save(profile)
    profile.pull_domain_events()
    return profile


def as_user(use_case, user_id="u1", roles=None):
    use_case.set_current_user(user_id, roles)
    return use_case


class TestCreateProfileUseCase:
    """Test profile creation."""

    @pytest.mark.asyncio
    async def test_create_profile(self, repository, event_dispatcher, recording_handler):
        """Test a draft profile is stored and its creation announced."""
        use_case = as_user(CreateProfileUseCase(repository, event_dispatcher))

        result = await use_case.execute(CreateProfileRequestDTO(kind="agency", profile_id="a1", full_name="Acme"))

        assert result.success is True
        assert result.data.id == "a1"
        assert result.data.kind == "agency"
        assert result.data.status == "draft"
        assert result.data.version == 1
        assert result.data.user_id == "u1"
        stored = await repository.load("a1")
        assert stored.full_name == "Acme"
        assert [e.type for e in recording_handler.events] == ["AgencyProfileCreated"]

    @pytest.mark.asyncio
    async def test_create_generates_id(self, repository, event_dispatcher):
        """Test an ID is generated when none is supplied."""
        use_case = as_user(CreateProfileUseCase(repository, event_dispatcher), "u2")

        result = await use_case.execute(CreateProfileRequestDTO(kind="maid"))

        assert result.success is True
        assert result.data.id
        assert (await repository.load(result.data.id)).user_id == "u2"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, repository, event_dispatcher, recording_handler):
        """Test an existing ID is refused and nothing is announced."""
        await seed(repository, make_agency())
        use_case = as_user(CreateProfileUseCase(repository, event_dispatcher))

        result = await use_case.execute(CreateProfileRequestDTO(kind="agency", profile_id="a1"))

        assert result.success is False
        assert result.error_code == "DUPLICATE_ENTITY"
        assert recording_handler.events == []

    @pytest.mark.asyncio
    async def test_create_requires_user(self, repository, event_dispatcher):
        """Test an anonymous caller cannot create profiles."""
        use_case = CreateProfileUseCase(repository, event_dispatcher)

        result = await use_case.execute(CreateProfileRequestDTO(kind="sponsor"))

        assert result.success is False
        assert result.error_code == "AUTHENTICATION_REQUIRED"


class TestUpdateProfileSectionUseCase:
    """Test section updates."""

    @pytest.mark.asyncio
    async def test_owner_updates_section(self, repository, event_dispatcher, recording_handler):
        """Test the owner can update a section and the version advances."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher))

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="a1", section="Basic_Info", changes={"full_name": "Acme", "city": "Dubai"}
        ))

        assert result.success is True
        assert result.data.version == 2
        assert result.data.data["full_name"] == "Acme"
        assert recording_handler.events[0].updated_fields == ("full_name", "city")

    @pytest.mark.asyncio
    async def test_admin_may_update(self, repository, event_dispatcher):
        """Test admins may update profiles they do not own."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher), "admin1", ["admin"])

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="a1", section="license_info", changes={"license_number": "LIC-1"}
        ))

        assert result.success is True

    @pytest.mark.asyncio
    async def test_other_user_denied(self, repository, event_dispatcher, recording_handler):
        """Test other users cannot update the profile."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher), "intruder")

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="a1", section="basic_info", changes={"full_name": "Hacked"}
        ))

        assert result.success is False
        assert result.error_code == "PERMISSION_DENIED"
        assert (await repository.load("a1")).full_name is None
        assert recording_handler.events == []

    @pytest.mark.asyncio
    async def test_unknown_section(self, repository, event_dispatcher):
        """Test unknown section names are validation errors."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher))

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="a1", section="budget", changes={}
        ))

        assert result.success is False
        assert result.error_code == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_missing_profile(self, repository, event_dispatcher):
        """Test updating an unknown profile."""
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher))

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="nope", section="basic_info", changes={}
        ))

        assert result.error_code == "ENTITY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_lost_update_publishes_nothing(self, repository, event_dispatcher, recording_handler):
        """Test a failed save surfaces as a concurrency error without events."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        repository.save = AsyncMock(side_effect=ConcurrencyError("Profile", "a1", 1, 2))
        use_case = as_user(UpdateProfileSectionUseCase(repository, event_dispatcher))

        result = await use_case.execute(UpdateProfileSectionRequestDTO(
            profile_id="a1", section="basic_info", changes={"full_name": "Acme"}
        ))

        assert result.success is False
        assert result.error_code == "CONCURRENT_MODIFICATION"
        assert recording_handler.events == []
        assert event_dispatcher.get_event_log() == []


class TestVerificationUseCases:
    """Test submission, verification, rejection and archiving."""

    @pytest.mark.asyncio
    async def test_submit_complete_profile(self, repository, event_dispatcher, recording_handler):
        """Test the owner submits a complete profile."""
        await seed(repository, make_agency())
        use_case = as_user(SubmitProfileForVerificationUseCase(repository, event_dispatcher))

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.success is True
        assert result.data.status == "under_review"
        assert [e.type for e in recording_handler.events] == ["AgencyProfileSubmitted"]

    @pytest.mark.asyncio
    async def test_submit_incomplete_profile(self, repository, event_dispatcher):
        """Test an incomplete profile cannot be submitted."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(SubmitProfileForVerificationUseCase(repository, event_dispatcher))

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.success is False
        assert result.error_code == "INCOMPLETE_PROFILE"
        assert (await repository.load("a1")).status == ProfileStatus.DRAFT

    @pytest.mark.asyncio
    async def test_verify_requires_admin(self, repository, event_dispatcher):
        """Test owners cannot verify their own profile."""
        await seed(repository, make_agency(status=ProfileStatus.UNDER_REVIEW))
        use_case = as_user(VerifyProfileUseCase(repository, event_dispatcher))

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.success is False
        assert result.error_code == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_admin_verifies(self, repository, event_dispatcher, recording_handler):
        """Test an admin approves a profile under review."""
        await seed(repository, make_maid(status=ProfileStatus.UNDER_REVIEW))
        use_case = as_user(VerifyProfileUseCase(repository, event_dispatcher), "admin1", ["admin"])

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="m1"))

        assert result.success is True
        assert result.data.status == "active"
        assert result.data.is_verified is True
        assert recording_handler.events[0].verified_by == "admin1"

    @pytest.mark.asyncio
    async def test_verify_wrong_state(self, repository, event_dispatcher):
        """Test verifying a draft is an invalid state error."""
        await seed(repository, make_agency())
        use_case = as_user(VerifyProfileUseCase(repository, event_dispatcher), "admin1", ["admin"])

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.error_code == "INVALID_STATE"

    @pytest.mark.asyncio
    async def test_admin_rejects(self, repository, event_dispatcher):
        """Test an admin rejects with a reason."""
        await seed(repository, make_agency(status=ProfileStatus.UNDER_REVIEW))
        use_case = as_user(RejectProfileUseCase(repository, event_dispatcher), "admin1", ["admin"])

        result = await use_case.execute(RejectProfileRequestDTO(profile_id="a1", reason="License expired"))

        assert result.success is True
        assert result.data.status == "rejected"
        assert result.data.rejection_reason == "License expired"

    @pytest.mark.asyncio
    async def test_owner_archives(self, repository, event_dispatcher):
        """Test owners can archive and a second archive fails."""
        await seed(repository, make_agency())
        use_case = as_user(ArchiveProfileUseCase(repository, event_dispatcher))

        first = await use_case.execute(ArchiveProfileRequestDTO(profile_id="a1", reason="closing"))
        second = await use_case.execute(ArchiveProfileRequestDTO(profile_id="a1"))

        assert first.success is True
        assert first.data.status == "archived"
        assert second.error_code == "ALREADY_ARCHIVED"


class TestRecordProfileReviewUseCase:
    """Test review recording."""

    @pytest.mark.asyncio
    async def test_review_updates_rating(self, repository, event_dispatcher):
        """Test another user's review updates the running rating."""
        await seed(repository, make_agency())
        use_case = as_user(RecordProfileReviewUseCase(repository, event_dispatcher), "u3")

        await use_case.execute(RecordReviewRequestDTO(profile_id="a1", rating=5))
        result = await use_case.execute(RecordReviewRequestDTO(profile_id="a1", rating=3))

        assert result.data.rating == 4.0
        assert result.data.total_reviews == 2

    @pytest.mark.asyncio
    async def test_self_review_forbidden(self, repository, event_dispatcher):
        """Test owners cannot review themselves."""
        await seed(repository, make_agency())
        use_case = as_user(RecordProfileReviewUseCase(repository, event_dispatcher))

        result = await use_case.execute(RecordReviewRequestDTO(profile_id="a1", rating=5))

        assert result.error_code == "SELF_REVIEW"

    @pytest.mark.asyncio
    async def test_out_of_range_rating(self, repository, event_dispatcher):
        """Test ratings above 5 are rejected by the aggregate."""
        await seed(repository, make_agency())
        use_case = as_user(RecordProfileReviewUseCase(repository, event_dispatcher), "u3")

        result = await use_case.execute(RecordReviewRequestDTO(profile_id="a1", rating=7))

        assert result.error_code == "INVALID_RATING"
        assert result.error == "Rating must be between 0 and 5"


class TestUploadProfileDocumentUseCase:
    """Test document uploads."""

    def request(self, **overrides):
        values = dict(
            profile_id="a1",
            document_type="business_license",
            filename="license.pdf",
            content=b"%PDF-1.7",
            content_type="application/pdf",
        )
        values.update(overrides)
        return UploadProfileDocumentRequestDTO(**values)

    @pytest.mark.asyncio
    async def test_upload(self, repository, storage, event_dispatcher, recording_handler, upload_settings):
        """Test the file is stored and its URL recorded."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UploadProfileDocumentUseCase(repository, storage, event_dispatcher, upload_settings))

        result = await use_case.execute(self.request())

        assert result.success is True
        assert result.data.documents["business_license"] == storage.upload_bytes.return_value
        path = storage.upload_bytes.await_args.args[0]
        assert path.startswith("a1/business_license/license_")
        assert path.endswith(".pdf")
        assert recording_handler.events[0].type == "AgencyDocumentUploaded"

    @pytest.mark.asyncio
    async def test_disallowed_extension(self, repository, storage, event_dispatcher, upload_settings):
        """Test disallowed file types never reach storage."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UploadProfileDocumentUseCase(repository, storage, event_dispatcher, upload_settings))

        result = await use_case.execute(self.request(filename="license.exe"))

        assert result.error_code == "INVALID_FILE_TYPE"
        storage.upload_bytes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_too_large(self, repository, storage, event_dispatcher, upload_settings):
        """Test files over the size limit are refused."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UploadProfileDocumentUseCase(repository, storage, event_dispatcher, upload_settings))

        result = await use_case.execute(self.request(content=b"x" * (1024 * 1024 + 1)))

        assert result.error_code == "FILE_TOO_LARGE"
        storage.upload_bytes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_slot(self, repository, storage, event_dispatcher, upload_settings):
        """Test a slot of another kind is refused before storing anything."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(UploadProfileDocumentUseCase(repository, storage, event_dispatcher, upload_settings))

        result = await use_case.execute(self.request(document_type="passport_copy"))

        assert result.error_code == "INVALID_DOCUMENT_TYPE"
        storage.upload_bytes.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_failed_save_removes_file(
        self, repository, storage, event_dispatcher, recording_handler, upload_settings
    ):
        """Test the stored file is deleted when the profile cannot be saved."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        repository.save = AsyncMock(side_effect=ConcurrencyError("Profile", "a1", 1, 2))
        use_case = as_user(UploadProfileDocumentUseCase(repository, storage, event_dispatcher, upload_settings))

        result = await use_case.execute(self.request())

        assert result.error_code == "CONCURRENT_MODIFICATION"
        path = storage.upload_bytes.await_args.args[0]
        storage.delete.assert_awaited_once_with(path)
        assert recording_handler.events == []


class TestProfileQueries:
    """Test read use cases."""

    @pytest.mark.asyncio
    async def test_owner_reads_profile(self, repository):
        """Test the owner can read the profile with its missing fields."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(GetProfileUseCase(repository))

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.success is True
        assert result.data.completion_percentage == 9
        assert "license_number" in result.data.missing_fields

    @pytest.mark.asyncio
    async def test_other_user_cannot_read(self, repository):
        """Test reads are limited to owners and admins."""
        await seed(repository, AgencyProfile(id="a1", user_id="u1"))
        use_case = as_user(GetProfileUseCase(repository), "u9")

        result = await use_case.execute(ProfileActionRequestDTO(profile_id="a1"))

        assert result.error_code == "PERMISSION_DENIED"

    @pytest.mark.asyncio
    async def test_review_queue(self, repository):
        """Test admins list profiles under review, paginated."""
        await seed(repository, make_agency(id="a1", status=ProfileStatus.UNDER_REVIEW))
        await seed(repository, make_agency(id="a2", status=ProfileStatus.UNDER_REVIEW))
        await seed(repository, make_agency(id="a3"))
        await seed(repository, make_maid(status=ProfileStatus.UNDER_REVIEW))
        use_case = as_user(ListProfilesByStatusUseCase(repository), "admin1", ["admin"])

        result = await use_case.execute(ListProfilesByStatusRequestDTO(kind="agency", page_size=1))

        assert result.success is True
        assert result.data.total == 2
        assert result.data.total_pages == 2
        assert result.data.has_next is True
        assert len(result.data.items) == 1
        assert result.data.items[0].status == "under_review"

    @pytest.mark.asyncio
    async def test_review_queue_requires_admin(self, repository):
        """Test non-admins cannot list the review queue."""
        use_case = as_user(ListProfilesByStatusUseCase(repository))

        result = await use_case.execute(ListProfilesByStatusRequestDTO(kind="maid"))

        assert result.error_code == "PERMISSION_DENIED"
