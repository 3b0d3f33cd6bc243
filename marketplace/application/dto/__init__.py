"""
Data Transfer Objects for the application layer.
"""

from .base_dto import BaseDTO, RequestDTO, ResponseDTO, ListRequestDTO, ListResponseDTO
from .profile_dto import (
    CreateProfileRequestDTO,
    UpdateProfileSectionRequestDTO,
    UploadProfileDocumentRequestDTO,
    ProfileActionRequestDTO,
    RejectProfileRequestDTO,
    ArchiveProfileRequestDTO,
    RecordReviewRequestDTO,
    ListProfilesByStatusRequestDTO,
    ProfileResponseDTO,
)

__all__ = [
    "BaseDTO",
    "RequestDTO",
    "ResponseDTO",
    "ListRequestDTO",
    "ListResponseDTO",
    "CreateProfileRequestDTO",
    "UpdateProfileSectionRequestDTO",
    "UploadProfileDocumentRequestDTO",
    "ProfileActionRequestDTO",
    "RejectProfileRequestDTO",
    "ArchiveProfileRequestDTO",
    "RecordReviewRequestDTO",
    "ListProfilesByStatusRequestDTO",
    "ProfileResponseDTO",
]
