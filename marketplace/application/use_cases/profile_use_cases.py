"""
Profile use cases for the application layer.

Every command follows the same sequence: load the profile, call one
aggregate method, pull its events, save with the version check, then
publish the events. A failed save publishes nothing.
"""

import logging
import uuid
from pathlib import Path
from typing import List, Optional

from marketplace.application.use_cases.base_use_case import (
    ADMIN_ROLE,
    AuthorizedUseCase,
    CommandUseCase,
    PaginatedQueryUseCase,
    QueryUseCase,
)
from marketplace.application.dto.base_dto import ListResponseDTO
from marketplace.application.dto.profile_dto import (
    ArchiveProfileRequestDTO,
    CreateProfileRequestDTO,
    ListProfilesByStatusRequestDTO,
    ProfileActionRequestDTO,
    ProfileResponseDTO,
    RecordReviewRequestDTO,
    RejectProfileRequestDTO,
    UpdateProfileSectionRequestDTO,
    UploadProfileDocumentRequestDTO,
)
from marketplace.config import Settings, get_settings
from marketplace.domain.events.base import EventDispatcher
from marketplace.domain.models.base import BusinessRuleViolation, ValidationError
from marketplace.domain.models.profile import ProfileAggregate
from marketplace.domain.models.profile_factory import profile_class_for
from marketplace.domain.repositories.profile_repository import ProfileRepository
from marketplace.domain.services.document_storage import DocumentStorage
from marketplace.infrastructure.storage.local_document_storage import build_document_path


logger = logging.getLogger(__name__)


class ProfileCommandUseCase(AuthorizedUseCase, CommandUseCase):
    """Shared load/authorize/save plumbing for profile commands."""

    def __init__(self, profile_repository: ProfileRepository, event_dispatcher: Optional[EventDispatcher] = None):
        super().__init__()
        self.profile_repository = profile_repository
        self.event_dispatcher = event_dispatcher

    async def _load_profile(self, profile_id: str) -> ProfileAggregate:
        profile = await self.profile_repository.load(profile_id)
        self._authorize(profile)
        return profile

    def _authorize(self, profile: ProfileAggregate) -> None:
        """Owners and admins may act on a profile. Override for stricter rules."""
        self._require_owner_or_role(profile.user_id, ADMIN_ROLE)

    async def _commit(self, profile: ProfileAggregate) -> ProfileResponseDTO:
        events = profile.pull_domain_events()
        await self.profile_repository.save(profile)
        self.events.extend(events)

        logger.info(
            f"{self.__class__.__name__}: saved {profile.KIND.value} profile {profile.id} "
            f"at version {profile.version} ({len(events)} event(s))"
        )
        return ProfileResponseDTO.from_profile(profile)


class CreateProfileUseCase(ProfileCommandUseCase):
    """Use case for opening a new draft profile for the current user."""

    def _authorize(self, profile: ProfileAggregate) -> None:
        pass

    async def _execute_command_logic(self, request: CreateProfileRequestDTO) -> ProfileResponseDTO:
        profile_class = profile_class_for(request.kind)
        initial_values = {
            name: value
            for name, value in {
                "full_name": request.full_name,
                "email": request.email,
                "phone": request.phone,
            }.items()
            if value is not None
        }

        profile = profile_class.create(
            id=request.profile_id or str(uuid.uuid4()),
            user_id=self.current_user_id,
            **initial_values,
        )
        return await self._commit(profile)


class UpdateProfileSectionUseCase(ProfileCommandUseCase):
    """Use case for applying a partial update to one profile section."""

    async def _execute_command_logic(self, request: UpdateProfileSectionRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)

        update = profile.build_update(request.section, request.changes)
        profile.apply_update(update)

        return await self._commit(profile)


class UploadProfileDocumentUseCase(ProfileCommandUseCase):
    """
    Use case for storing a document file and recording its URL on the profile.
    The stored file is removed again if the profile cannot be saved.
    """

    def __init__(
        self,
        profile_repository: ProfileRepository,
        document_storage: DocumentStorage,
        event_dispatcher: Optional[EventDispatcher] = None,
        settings: Optional[Settings] = None,
    ):
        super().__init__(profile_repository, event_dispatcher)
        self.document_storage = document_storage
        self.settings = settings or get_settings()

    async def _validate_request(self, request: UploadProfileDocumentRequestDTO) -> None:
        await super()._validate_request(request)

        extension = Path(request.filename).suffix.lower()
        if extension not in self.settings.allowed_document_extensions:
            raise ValidationError(
                f"File type not allowed: {extension or request.filename}",
                "filename",
                "INVALID_FILE_TYPE",
            )
        if not request.content:
            raise ValidationError("File content is empty", "content")
        if len(request.content) > self.settings.max_document_size_bytes:
            raise ValidationError(
                f"File too large. Maximum size: {self.settings.max_document_size_mb}MB",
                "content",
                "FILE_TOO_LARGE",
            )

    async def _execute_command_logic(self, request: UploadProfileDocumentRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.validate_document_type(request.document_type)

        path = build_document_path(profile.id, request.document_type, request.filename)
        url = await self.document_storage.upload_bytes(path, request.content, request.content_type)

        try:
            profile.upload_document(request.document_type, url)
            return await self._commit(profile)
        except Exception:
            logger.warning(f"Removing orphaned document {path} after failed save of profile {profile.id}")
            await self.document_storage.delete(path)
            raise


class SubmitProfileForVerificationUseCase(ProfileCommandUseCase):
    """Use case for sending a complete draft profile to review."""

    async def _execute_command_logic(self, request: ProfileActionRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.submit_for_verification()
        return await self._commit(profile)


class VerifyProfileUseCase(ProfileCommandUseCase):
    """Use case for approving a profile under review (admin only)."""

    async def _check_authorization(self, request: ProfileActionRequestDTO) -> None:
        self._require_role(ADMIN_ROLE)

    async def _execute_command_logic(self, request: ProfileActionRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.verify(verified_by=self.current_user_id)
        return await self._commit(profile)


class RejectProfileUseCase(ProfileCommandUseCase):
    """Use case for rejecting a profile under review (admin only)."""

    async def _check_authorization(self, request: RejectProfileRequestDTO) -> None:
        self._require_role(ADMIN_ROLE)

    async def _execute_command_logic(self, request: RejectProfileRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.reject(reason=request.reason, rejected_by=self.current_user_id)
        return await self._commit(profile)


class ArchiveProfileUseCase(ProfileCommandUseCase):
    """Use case for archiving a profile (owner or admin)."""

    async def _execute_command_logic(self, request: ArchiveProfileRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.archive(request.reason)
        return await self._commit(profile)


class RecordProfileReviewUseCase(ProfileCommandUseCase):
    """Use case for folding a review score into a profile's rating."""

    def _authorize(self, profile: ProfileAggregate) -> None:
        if profile.user_id == self.current_user_id:
            raise BusinessRuleViolation("Cannot review your own profile", "SELF_REVIEW")

    async def _execute_command_logic(self, request: RecordReviewRequestDTO) -> ProfileResponseDTO:
        profile = await self._load_profile(request.profile_id)
        profile.update_rating(request.rating)
        return await self._commit(profile)


class GetProfileUseCase(AuthorizedUseCase, QueryUseCase):
    """Use case for reading a single profile (owner or admin)."""

    def __init__(self, profile_repository: ProfileRepository):
        super().__init__()
        self.profile_repository = profile_repository

    async def _execute_business_logic(self, request: ProfileActionRequestDTO) -> ProfileResponseDTO:
        profile = await self.profile_repository.load(request.profile_id)
        self._require_owner_or_role(profile.user_id, ADMIN_ROLE)
        return ProfileResponseDTO.from_profile(profile)


class ListProfilesByStatusUseCase(AuthorizedUseCase, PaginatedQueryUseCase):
    """Use case for listing profiles in one status, e.g. the review queue (admin only)."""

    def __init__(self, profile_repository: ProfileRepository):
        super().__init__()
        self.profile_repository = profile_repository

    async def _check_authorization(self, request: ListProfilesByStatusRequestDTO) -> None:
        self._require_role(ADMIN_ROLE)

    async def _execute_business_logic(
        self, request: ListProfilesByStatusRequestDTO
    ) -> ListResponseDTO[ProfileResponseDTO]:
        profiles: List[ProfileAggregate] = await self.profile_repository.find_by_status(
            request.kind, request.status
        )
        page = profiles[request.offset:request.offset + request.limit]

        return ListResponseDTO[ProfileResponseDTO].create(
            items=[ProfileResponseDTO.from_profile(profile) for profile in page],
            total=len(profiles),
            page=request.page,
            page_size=request.page_size,
        )
