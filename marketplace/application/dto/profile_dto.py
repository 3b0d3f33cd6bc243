"""
Profile DTOs for the application layer.
Data Transfer Objects for profile-related operations.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime
from pydantic import Field, field_validator

from .base_dto import RequestDTO, ResponseDTO, ListRequestDTO
from marketplace.domain.models.profile import ProfileAggregate, ProfileKind
from marketplace.domain.models.profile_status import ProfileStatus


class CreateProfileRequestDTO(RequestDTO):
    """DTO for opening a new profile for the current user."""

    kind: ProfileKind = Field(description="Profile kind")
    profile_id: Optional[str] = Field(default=None, max_length=64, description="Client-chosen profile ID")
    full_name: Optional[str] = Field(default=None, max_length=255, description="Display name")
    email: Optional[str] = Field(default=None, max_length=255, description="Contact email")
    phone: Optional[str] = Field(default=None, max_length=32, description="Contact phone")


class UpdateProfileSectionRequestDTO(RequestDTO):
    """
    DTO for a partial update of one profile section.
    Keys absent from ``changes`` are left untouched.
    """

    profile_id: str = Field(min_length=1, description="Profile ID")
    section: str = Field(min_length=1, description="Section name, e.g. basic_info")
    changes: Dict[str, Any] = Field(default_factory=dict, description="Supplied field values")

    @field_validator('section')
    @classmethod
    def normalize_section(cls, v: str) -> str:
        return v.strip().lower()


class UploadProfileDocumentRequestDTO(RequestDTO):
    """DTO for uploading a document file into a profile slot."""

    profile_id: str = Field(min_length=1, description="Profile ID")
    document_type: str = Field(min_length=1, description="Document slot name")
    filename: str = Field(min_length=1, max_length=255, description="Original file name")
    content: bytes = Field(description="File content")
    content_type: str = Field(default="application/octet-stream", description="MIME type")


class ProfileActionRequestDTO(RequestDTO):
    """DTO for actions that only need the profile ID."""

    profile_id: str = Field(min_length=1, description="Profile ID")


class RejectProfileRequestDTO(ProfileActionRequestDTO):
    reason: str = Field(min_length=1, max_length=2000, description="Reason shown to the owner")


class ArchiveProfileRequestDTO(ProfileActionRequestDTO):
    reason: Optional[str] = Field(default=None, max_length=2000, description="Archive reason")


class RecordReviewRequestDTO(ProfileActionRequestDTO):
    rating: float = Field(description="Review score from 0 to 5")


class ListProfilesByStatusRequestDTO(ListRequestDTO):
    """DTO for listing profiles of one kind in one status (e.g. the review queue)."""

    kind: ProfileKind = Field(description="Profile kind")
    status: ProfileStatus = Field(default=ProfileStatus.UNDER_REVIEW, description="Profile status")


class ProfileResponseDTO(ResponseDTO):
    """DTO for profile responses."""

    kind: str = Field(description="Profile kind")
    user_id: str = Field(description="Owning account")
    status: str = Field(description="Lifecycle status")
    completion_percentage: int = Field(description="Share of required fields filled")
    missing_fields: List[str] = Field(default_factory=list, description="Required fields still empty")
    is_verified: bool = Field(default=False, description="Whether an admin approved the profile")
    verified_at: Optional[datetime] = Field(default=None, description="Approval time")
    rejection_reason: Optional[str] = Field(default=None, description="Reason of the last rejection")
    rating: float = Field(default=0.0, description="Average review score")
    total_reviews: int = Field(default=0, description="Number of reviews")
    documents: Dict[str, Optional[str]] = Field(default_factory=dict, description="Document URLs by slot")
    version: int = Field(description="Optimistic-locking version")
    data: Dict[str, Any] = Field(default_factory=dict, description="Full profile state")

    @classmethod
    def from_profile(cls, profile: ProfileAggregate) -> "ProfileResponseDTO":
        return cls(
            id=profile.id,
            kind=profile.KIND.value,
            user_id=profile.user_id,
            status=profile.status.to_string(),
            completion_percentage=profile.completion_percentage,
            missing_fields=profile.missing_required_fields(),
            is_verified=profile.is_verified,
            verified_at=profile.verified_at,
            rejection_reason=profile.rejection_reason,
            rating=profile.rating,
            total_reviews=profile.total_reviews,
            documents=profile.documents,
            version=profile.version,
            data=profile.to_dict(),
            created_at=profile.created_at,
            updated_at=profile.updated_at,
        )
