"""
Agency profile aggregate.

Agencies place maids with sponsors. An agency can only be submitted for
verification once its profile is complete and its license is valid.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from marketplace.domain.events.profile_events import (
    AGENCY_EVENTS,
    AgencyBusinessInfoUpdated,
    AgencyLicenseUpdated,
    AgencyPlacementRecorded,
    MaidAddedToAgency,
    MaidRemovedFromAgency,
)

from .base import ValidationError, parse_datetime, utcnow
from .exceptions import InvalidLicenseError
from .profile import PartialUpdate, ProfileAggregate, ProfileKind, require_reference


DEFAULT_AGENCY_COUNTRY = "ET"


@dataclass(frozen=True)
class AgencyBasicInfoUpdate(PartialUpdate):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class AgencyLicenseInfoUpdate(PartialUpdate):
    license_number: Optional[str] = None
    license_expiry: Optional[object] = None
    registration_number: Optional[str] = None


@dataclass(frozen=True)
class AgencyBusinessInfoUpdate(PartialUpdate):
    year_established: Optional[int] = None
    services_offered: Optional[List[str]] = None
    operating_countries: Optional[List[str]] = None
    specializations: Optional[List[str]] = None


@dataclass(eq=False, kw_only=True)
class AgencyProfile(ProfileAggregate):
    """
    Agency profile aggregate root.

    Tracks licensing, business details and placement statistics. The
    license validity flag is derived and recomputed on every license change,
    on reconstruction and before submission.
    """

    KIND = ProfileKind.AGENCY
    REQUIRED_FIELDS = (
        "full_name",
        "license_number",
        "license_expiry",
        "registration_number",
        "phone",
        "email",
        "country",
        "city",
        "address",
        "business_license",
        "tax_certificate",
    )
    DOCUMENT_TYPES = ("business_license", "tax_certificate", "insurance_certificate")
    EVENTS = AGENCY_EVENTS

    website: Optional[str] = None
    country: Optional[str] = DEFAULT_AGENCY_COUNTRY

    # License
    license_number: Optional[str] = None
    license_expiry: Optional[datetime] = None
    registration_number: Optional[str] = None

    # Business info
    year_established: Optional[int] = None
    services_offered: List[str] = field(default_factory=list)
    operating_countries: List[str] = field(default_factory=list)
    specializations: List[str] = field(default_factory=list)

    # Documents
    business_license: Optional[str] = None
    tax_certificate: Optional[str] = None
    insurance_certificate: Optional[str] = None

    # Statistics
    total_placements: int = 0
    active_maids: int = 0

    # Derived
    is_license_valid: bool = False

    def __post_init__(self):
        if self.country is None:
            self.country = DEFAULT_AGENCY_COUNTRY
        self.license_expiry = parse_datetime(self.license_expiry, "license_expiry")
        self.services_offered = list(self.services_offered or [])
        self.operating_countries = list(self.operating_countries or [])
        self.specializations = list(self.specializations or [])
        self.total_placements = int(self.total_placements or 0)
        self.active_maids = max(0, int(self.active_maids or 0))
        super().__post_init__()

    def _refresh_derived_fields(self) -> None:
        self._validate_license()
        super()._refresh_derived_fields()

    def _validate_license(self) -> None:
        if not self.license_number or not self.license_expiry:
            self.is_license_valid = False
            return
        self.is_license_valid = self.license_expiry > utcnow()

    def days_until_license_expiry(self) -> Optional[int]:
        """Whole days left on the license; negative once expired."""
        if not self.license_expiry:
            return None
        return (self.license_expiry - utcnow()).days

    # Updates

    def update_basic_info(self, update: AgencyBasicInfoUpdate) -> None:
        """Update contact details. Archived profiles are read-only here."""
        self._ensure_not_archived("update basic info")

        changed = self._merge(update.supplied())
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(self.EVENTS.updated, changed)

    def update_license_info(self, update: AgencyLicenseInfoUpdate) -> None:
        """Update license details and recompute license validity."""
        values = update.supplied()
        if "license_expiry" in values:
            values["license_expiry"] = parse_datetime(values["license_expiry"], "license_expiry")

        changed = self._merge(values)
        self._validate_license()
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(
            AgencyLicenseUpdated,
            changed,
            license_number=self.license_number,
            is_license_valid=self.is_license_valid,
        )

    def update_business_info(self, update: AgencyBusinessInfoUpdate) -> None:
        values = update.supplied()
        year = values.get("year_established")
        if year is not None:
            if isinstance(year, bool) or not isinstance(year, int):
                raise ValidationError("Year established must be a whole year", "year_established")
            if year > utcnow().year:
                raise ValidationError("Year established cannot be in the future", "year_established")

        changed = self._merge(values)
        self.mark_as_updated()

        self._record_fields_updated(AgencyBusinessInfoUpdated, changed)

    UPDATE_SECTIONS = {
        "basic_info": (AgencyBasicInfoUpdate, "update_basic_info"),
        "license_info": (AgencyLicenseInfoUpdate, "update_license_info"),
        "business_info": (AgencyBusinessInfoUpdate, "update_business_info"),
    }

    # Lifecycle

    def _assert_submittable(self) -> None:
        self._validate_license()
        if not self.is_license_valid:
            raise InvalidLicenseError(self.id, self.license_expiry)

    # Counters

    def add_maid(self, maid_id: str) -> None:
        require_reference(maid_id, "maid_id")

        self.active_maids += 1
        self.mark_as_updated()

        self._record_event(MaidAddedToAgency(
            aggregate_id=self.id,
            agency_id=self.id,
            maid_id=maid_id,
            active_maids=self.active_maids,
        ))

    def remove_maid(self, maid_id: str) -> None:
        """Decrement the active maid count. Never drops below zero."""
        require_reference(maid_id, "maid_id")

        if self.active_maids > 0:
            self.active_maids -= 1
        self.mark_as_updated()

        self._record_event(MaidRemovedFromAgency(
            aggregate_id=self.id,
            agency_id=self.id,
            maid_id=maid_id,
            active_maids=self.active_maids,
        ))

    def record_placement(self) -> None:
        self.total_placements += 1
        self.mark_as_updated()

        self._record_event(AgencyPlacementRecorded(
            aggregate_id=self.id,
            agency_id=self.id,
            total_placements=self.total_placements,
        ))
