"""
Domain models for the marketplace profiles.
This module exports the profile aggregates, their partial updates and errors.
"""

# Base classes
from .base import (
    AggregateRoot,
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DuplicateEntityError,
    ConcurrencyError,
)

from .profile_status import ProfileStatus

from .exceptions import (
    ProfileDomainError,
    InvalidStateError,
    AlreadyArchivedError,
    ArchivedProfileError,
    IncompleteProfileError,
    InvalidLicenseError,
    InvalidPassportError,
    IneligibleAgeError,
    InvalidBudgetError,
    InvalidDocumentTypeError,
    InvalidRatingError,
)

from .profile import ProfileAggregate, ProfileKind, PartialUpdate

from .agency_profile import (
    AgencyProfile,
    AgencyBasicInfoUpdate,
    AgencyLicenseInfoUpdate,
    AgencyBusinessInfoUpdate,
)

from .maid_profile import (
    MaidProfile,
    MaidAvailability,
    MaidPersonalInfoUpdate,
    MaidSkillsUpdate,
    MaidPassportUpdate,
    MaidAvailabilityUpdate,
    MaidEmploymentPreferencesUpdate,
)

from .sponsor_profile import (
    SponsorProfile,
    SponsorBasicInfoUpdate,
    SponsorFamilyInfoUpdate,
    SponsorPreferencesUpdate,
    SponsorBudgetUpdate,
    SponsorIdentityUpdate,
)

from .profile_factory import PROFILE_CLASSES, profile_class_for, profile_from_dict

__all__ = [
    # Base classes
    "AggregateRoot",
    "DomainException",
    "ValidationError",
    "BusinessRuleViolation",
    "EntityNotFoundError",
    "DuplicateEntityError",
    "ConcurrencyError",

    # Status and errors
    "ProfileStatus",
    "ProfileDomainError",
    "InvalidStateError",
    "AlreadyArchivedError",
    "ArchivedProfileError",
    "IncompleteProfileError",
    "InvalidLicenseError",
    "InvalidPassportError",
    "IneligibleAgeError",
    "InvalidBudgetError",
    "InvalidDocumentTypeError",
    "InvalidRatingError",

    # Profiles
    "ProfileAggregate",
    "ProfileKind",
    "PartialUpdate",
    "AgencyProfile",
    "AgencyBasicInfoUpdate",
    "AgencyLicenseInfoUpdate",
    "AgencyBusinessInfoUpdate",
    "MaidProfile",
    "MaidAvailability",
    "MaidPersonalInfoUpdate",
    "MaidSkillsUpdate",
    "MaidPassportUpdate",
    "MaidAvailabilityUpdate",
    "MaidEmploymentPreferencesUpdate",
    "SponsorProfile",
    "SponsorBasicInfoUpdate",
    "SponsorFamilyInfoUpdate",
    "SponsorPreferencesUpdate",
    "SponsorBudgetUpdate",
    "SponsorIdentityUpdate",
    "PROFILE_CLASSES",
    "profile_class_for",
    "profile_from_dict",
]
