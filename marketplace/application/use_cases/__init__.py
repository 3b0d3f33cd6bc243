"""
Application layer use cases.
Orchestrates profile aggregates, persistence and event publishing.
"""

from .base_use_case import (
    ADMIN_ROLE,
    BaseUseCase,
    QueryUseCase,
    CommandUseCase,
    PaginatedQueryUseCase,
    AuthorizedUseCase,
    UseCaseResult,
)
from .profile_use_cases import (
    ProfileCommandUseCase,
    CreateProfileUseCase,
    UpdateProfileSectionUseCase,
    UploadProfileDocumentUseCase,
    SubmitProfileForVerificationUseCase,
    VerifyProfileUseCase,
    RejectProfileUseCase,
    ArchiveProfileUseCase,
    RecordProfileReviewUseCase,
    GetProfileUseCase,
    ListProfilesByStatusUseCase,
)

__all__ = [
    # Base Use Cases
    "ADMIN_ROLE",
    "BaseUseCase",
    "QueryUseCase",
    "CommandUseCase",
    "PaginatedQueryUseCase",
    "AuthorizedUseCase",
    "UseCaseResult",

    # Profile Use Cases
    "ProfileCommandUseCase",
    "CreateProfileUseCase",
    "UpdateProfileSectionUseCase",
    "UploadProfileDocumentUseCase",
    "SubmitProfileForVerificationUseCase",
    "VerifyProfileUseCase",
    "RejectProfileUseCase",
    "ArchiveProfileUseCase",
    "RecordProfileReviewUseCase",
    "GetProfileUseCase",
    "ListProfilesByStatusUseCase",
]
