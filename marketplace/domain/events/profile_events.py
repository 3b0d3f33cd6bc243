"""
Domain events emitted by profile aggregates.

Every profile kind owns a closed set of events. The lifecycle, document,
rating and field-update families share a payload shape across kinds and
differ only in their ``event_type``; counter events are kind-specific.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Type

from .base import DomainEvent


# Shared families

@dataclass(frozen=True)
class ProfileCreated(DomainEvent):
    """A new profile was opened for an account."""

    profile_id: str
    user_id: str


@dataclass(frozen=True)
class ProfileFieldsUpdated(DomainEvent):
    """A partial update was applied. ``updated_fields`` is informational."""

    profile_id: str
    updated_fields: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ProfileDocumentUploaded(DomainEvent):
    profile_id: str
    document_type: str
    document_url: str


@dataclass(frozen=True)
class ProfileSubmitted(DomainEvent):
    profile_id: str
    user_id: str


@dataclass(frozen=True)
class ProfileVerified(DomainEvent):
    profile_id: str
    user_id: str
    verified_by: str


@dataclass(frozen=True)
class ProfileRejected(DomainEvent):
    profile_id: str
    user_id: str
    reason: str
    rejected_by: str


@dataclass(frozen=True)
class ProfileArchived(DomainEvent):
    profile_id: str
    reason: Optional[str] = None


@dataclass(frozen=True)
class ProfileRatingUpdated(DomainEvent):
    profile_id: str
    rating: float
    total_reviews: int


class ProfileEventSet(NamedTuple):
    """The event classes a profile kind emits for its shared behaviour."""

    created: Type[ProfileCreated]
    updated: Type[ProfileFieldsUpdated]
    document_uploaded: Type[ProfileDocumentUploaded]
    submitted: Type[ProfileSubmitted]
    verified: Type[ProfileVerified]
    rejected: Type[ProfileRejected]
    archived: Type[ProfileArchived]
    rating_updated: Type[ProfileRatingUpdated]


# Agency

class AgencyProfileCreated(ProfileCreated):
    event_type = "AgencyProfileCreated"


class AgencyProfileUpdated(ProfileFieldsUpdated):
    event_type = "AgencyProfileUpdated"


@dataclass(frozen=True)
class AgencyLicenseUpdated(ProfileFieldsUpdated):
    event_type = "AgencyLicenseUpdated"

    license_number: Optional[str] = None
    is_license_valid: bool = False


class AgencyBusinessInfoUpdated(ProfileFieldsUpdated):
    event_type = "AgencyBusinessInfoUpdated"


class AgencyDocumentUploaded(ProfileDocumentUploaded):
    event_type = "AgencyDocumentUploaded"


class AgencyProfileSubmitted(ProfileSubmitted):
    event_type = "AgencyProfileSubmitted"


class AgencyProfileVerified(ProfileVerified):
    event_type = "AgencyProfileVerified"


class AgencyProfileRejected(ProfileRejected):
    event_type = "AgencyProfileRejected"


class AgencyProfileArchived(ProfileArchived):
    event_type = "AgencyProfileArchived"


class AgencyRatingUpdated(ProfileRatingUpdated):
    event_type = "AgencyRatingUpdated"


@dataclass(frozen=True)
class MaidAddedToAgency(DomainEvent):
    event_type = "MaidAddedToAgency"

    agency_id: str
    maid_id: str
    active_maids: int


@dataclass(frozen=True)
class MaidRemovedFromAgency(DomainEvent):
    event_type = "MaidRemovedFromAgency"

    agency_id: str
    maid_id: str
    active_maids: int


@dataclass(frozen=True)
class AgencyPlacementRecorded(DomainEvent):
    event_type = "AgencyPlacementRecorded"

    agency_id: str
    total_placements: int


AGENCY_EVENTS = ProfileEventSet(
    created=AgencyProfileCreated,
    updated=AgencyProfileUpdated,
    document_uploaded=AgencyDocumentUploaded,
    submitted=AgencyProfileSubmitted,
    verified=AgencyProfileVerified,
    rejected=AgencyProfileRejected,
    archived=AgencyProfileArchived,
    rating_updated=AgencyRatingUpdated,
)


# Maid

class MaidProfileCreated(ProfileCreated):
    event_type = "MaidProfileCreated"


class MaidProfileUpdated(ProfileFieldsUpdated):
    event_type = "MaidProfileUpdated"


class MaidSkillsUpdated(ProfileFieldsUpdated):
    event_type = "MaidSkillsUpdated"


@dataclass(frozen=True)
class MaidPassportUpdated(ProfileFieldsUpdated):
    event_type = "MaidPassportUpdated"

    is_passport_valid: bool = False


@dataclass(frozen=True)
class MaidAvailabilityUpdated(ProfileFieldsUpdated):
    event_type = "MaidAvailabilityUpdated"

    availability_status: Optional[str] = None


class MaidEmploymentPreferencesUpdated(ProfileFieldsUpdated):
    event_type = "MaidEmploymentPreferencesUpdated"


class MaidDocumentUploaded(ProfileDocumentUploaded):
    event_type = "MaidDocumentUploaded"


class MaidProfileSubmitted(ProfileSubmitted):
    event_type = "MaidProfileSubmitted"


class MaidProfileVerified(ProfileVerified):
    event_type = "MaidProfileVerified"


class MaidProfileRejected(ProfileRejected):
    event_type = "MaidProfileRejected"


class MaidProfileArchived(ProfileArchived):
    event_type = "MaidProfileArchived"


class MaidRatingUpdated(ProfileRatingUpdated):
    event_type = "MaidRatingUpdated"


@dataclass(frozen=True)
class MaidAssignedToAgency(DomainEvent):
    event_type = "MaidAssignedToAgency"

    maid_id: str
    agency_id: str


@dataclass(frozen=True)
class MaidReleasedFromAgency(DomainEvent):
    event_type = "MaidReleasedFromAgency"

    maid_id: str
    agency_id: Optional[str] = None


@dataclass(frozen=True)
class MaidPlacementRecorded(DomainEvent):
    event_type = "MaidPlacementRecorded"

    maid_id: str
    sponsor_id: str
    total_placements: int


@dataclass(frozen=True)
class MaidProfileViewed(DomainEvent):
    event_type = "MaidProfileViewed"

    profile_id: str
    profile_views: int


MAID_EVENTS = ProfileEventSet(
    created=MaidProfileCreated,
    updated=MaidProfileUpdated,
    document_uploaded=MaidDocumentUploaded,
    submitted=MaidProfileSubmitted,
    verified=MaidProfileVerified,
    rejected=MaidProfileRejected,
    archived=MaidProfileArchived,
    rating_updated=MaidRatingUpdated,
)


# Sponsor

class SponsorProfileCreated(ProfileCreated):
    event_type = "SponsorProfileCreated"


class SponsorProfileUpdated(ProfileFieldsUpdated):
    event_type = "SponsorProfileUpdated"


class SponsorFamilyInfoUpdated(ProfileFieldsUpdated):
    event_type = "SponsorFamilyInfoUpdated"


class SponsorPreferencesUpdated(ProfileFieldsUpdated):
    event_type = "SponsorPreferencesUpdated"


@dataclass(frozen=True)
class SponsorBudgetUpdated(ProfileFieldsUpdated):
    event_type = "SponsorBudgetUpdated"

    salary_budget_min: Optional[float] = None
    salary_budget_max: Optional[float] = None
    currency: Optional[str] = None


class SponsorIdentityUpdated(ProfileFieldsUpdated):
    event_type = "SponsorIdentityUpdated"


class SponsorDocumentUploaded(ProfileDocumentUploaded):
    event_type = "SponsorDocumentUploaded"


class SponsorProfileSubmitted(ProfileSubmitted):
    event_type = "SponsorProfileSubmitted"


class SponsorProfileVerified(ProfileVerified):
    event_type = "SponsorProfileVerified"


class SponsorProfileRejected(ProfileRejected):
    event_type = "SponsorProfileRejected"


class SponsorProfileArchived(ProfileArchived):
    event_type = "SponsorProfileArchived"


class SponsorRatingUpdated(ProfileRatingUpdated):
    event_type = "SponsorRatingUpdated"


@dataclass(frozen=True)
class SponsorJobPostingOpened(DomainEvent):
    event_type = "SponsorJobPostingOpened"

    sponsor_id: str
    job_id: str
    active_job_postings: int


@dataclass(frozen=True)
class SponsorJobPostingClosed(DomainEvent):
    event_type = "SponsorJobPostingClosed"

    sponsor_id: str
    job_id: str
    active_job_postings: int


@dataclass(frozen=True)
class SponsorHireRecorded(DomainEvent):
    event_type = "SponsorHireRecorded"

    sponsor_id: str
    maid_id: str
    total_hires: int


SPONSOR_EVENTS = ProfileEventSet(
    created=SponsorProfileCreated,
    updated=SponsorProfileUpdated,
    document_uploaded=SponsorDocumentUploaded,
    submitted=SponsorProfileSubmitted,
    verified=SponsorProfileVerified,
    rejected=SponsorProfileRejected,
    archived=SponsorProfileArchived,
    rating_updated=SponsorRatingUpdated,
)


VERIFICATION_EVENT_TYPES = tuple(
    event_class.event_type
    for events in (AGENCY_EVENTS, MAID_EVENTS, SPONSOR_EVENTS)
    for event_class in (events.submitted, events.verified, events.rejected)
)
