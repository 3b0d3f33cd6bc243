"""
Maid profile aggregate.

A maid (domestic-worker candidate) lists skills, languages and salary
expectations, and may be represented by an agency. Submission requires a
valid passport and an age within the placeable range.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, List, Optional

from marketplace.domain.events.profile_events import (
    MAID_EVENTS,
    MaidAssignedToAgency,
    MaidAvailabilityUpdated,
    MaidEmploymentPreferencesUpdated,
    MaidPassportUpdated,
    MaidPlacementRecorded,
    MaidProfileViewed,
    MaidReleasedFromAgency,
    MaidSkillsUpdated,
)

from .base import ValidationError, parse_date, utcnow
from .exceptions import IneligibleAgeError, InvalidPassportError
from .profile import PartialUpdate, ProfileAggregate, ProfileKind, require_reference


MIN_WORKING_AGE = 21
MAX_WORKING_AGE = 55


class MaidAvailability(str, Enum):
    AVAILABLE = "available"
    AVAILABLE_SOON = "available_soon"
    HIRED = "hired"
    UNAVAILABLE = "unavailable"

    @classmethod
    def parse(cls, value: Any) -> Optional["MaidAvailability"]:
        """Strict conversion; unknown values raise ValidationError."""
        if value is None or isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(member.value for member in cls)
            raise ValidationError(
                f"Invalid availability status: {value}. Expected one of: {allowed}",
                "availability_status",
            )


@dataclass(frozen=True)
class MaidPersonalInfoUpdate(PartialUpdate):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    date_of_birth: Optional[Any] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    marital_status: Optional[str] = None
    education_level: Optional[str] = None
    about_me: Optional[str] = None


@dataclass(frozen=True)
class MaidSkillsUpdate(PartialUpdate):
    skills: Optional[List[str]] = None
    languages: Optional[List[str]] = None
    experience_years: Optional[int] = None
    primary_profession: Optional[str] = None


@dataclass(frozen=True)
class MaidPassportUpdate(PartialUpdate):
    passport_number: Optional[str] = None
    passport_expiry: Optional[Any] = None
    visa_status: Optional[str] = None


@dataclass(frozen=True)
class MaidAvailabilityUpdate(PartialUpdate):
    availability_status: Optional[Any] = None
    available_from: Optional[Any] = None


@dataclass(frozen=True)
class MaidEmploymentPreferencesUpdate(PartialUpdate):
    salary_expectation: Optional[float] = None
    currency: Optional[str] = None
    preferred_countries: Optional[List[str]] = None


def calculate_age(date_of_birth: Optional[date], today: Optional[date] = None) -> Optional[int]:
    if date_of_birth is None:
        return None
    today = today or utcnow().date()
    had_birthday = (today.month, today.day) >= (date_of_birth.month, date_of_birth.day)
    return today.year - date_of_birth.year - (0 if had_birthday else 1)


@dataclass(eq=False, kw_only=True)
class MaidProfile(ProfileAggregate):
    """Maid profile aggregate root."""

    KIND = ProfileKind.MAID
    REQUIRED_FIELDS = (
        "full_name",
        "date_of_birth",
        "nationality",
        "phone",
        "languages",
        "skills",
        "experience_years",
        "primary_profession",
        "availability_status",
        "salary_expectation",
        "passport_number",
        "passport_expiry",
        "passport_copy",
        "profile_photo",
    )
    DOCUMENT_TYPES = (
        "passport_copy",
        "profile_photo",
        "medical_certificate",
        "reference_letter",
        "intro_video",
    )
    EVENTS = MAID_EVENTS

    # Personal info
    date_of_birth: Optional[date] = None
    nationality: Optional[str] = None
    religion: Optional[str] = None
    marital_status: Optional[str] = None
    education_level: Optional[str] = None
    about_me: Optional[str] = None

    # Skills
    skills: List[str] = field(default_factory=list)
    languages: List[str] = field(default_factory=list)
    experience_years: Optional[int] = None
    primary_profession: Optional[str] = None

    # Availability and employment
    availability_status: Optional[MaidAvailability] = None
    available_from: Optional[date] = None
    salary_expectation: Optional[float] = None
    currency: str = "USD"
    preferred_countries: List[str] = field(default_factory=list)

    # Passport
    passport_number: Optional[str] = None
    passport_expiry: Optional[date] = None
    visa_status: Optional[str] = None

    # Representation
    agency_id: Optional[str] = None

    # Documents
    passport_copy: Optional[str] = None
    profile_photo: Optional[str] = None
    medical_certificate: Optional[str] = None
    reference_letter: Optional[str] = None
    intro_video: Optional[str] = None

    # Statistics
    total_placements: int = 0
    profile_views: int = 0

    # Derived
    is_passport_valid: bool = False

    def __post_init__(self):
        self.date_of_birth = parse_date(self.date_of_birth, "date_of_birth")
        self.available_from = parse_date(self.available_from, "available_from")
        self.passport_expiry = parse_date(self.passport_expiry, "passport_expiry")
        self.availability_status = MaidAvailability.parse(self.availability_status)
        self.skills = list(self.skills or [])
        self.languages = list(self.languages or [])
        self.preferred_countries = list(self.preferred_countries or [])
        self.total_placements = int(self.total_placements or 0)
        self.profile_views = int(self.profile_views or 0)
        super().__post_init__()

    def _refresh_derived_fields(self) -> None:
        self._validate_passport()
        super()._refresh_derived_fields()

    def _validate_passport(self) -> None:
        if not self.passport_number or not self.passport_expiry:
            self.is_passport_valid = False
            return
        self.is_passport_valid = self.passport_expiry > utcnow().date()

    def age(self, today: Optional[date] = None) -> Optional[int]:
        return calculate_age(self.date_of_birth, today)

    @property
    def is_available(self) -> bool:
        return self.availability_status in (MaidAvailability.AVAILABLE, MaidAvailability.AVAILABLE_SOON)

    # Updates

    def update_personal_info(self, update: MaidPersonalInfoUpdate) -> None:
        """Update personal details. Archived profiles are read-only here."""
        self._ensure_not_archived("update personal info")

        values = update.supplied()
        if "date_of_birth" in values:
            values["date_of_birth"] = parse_date(values["date_of_birth"], "date_of_birth")
            if values["date_of_birth"] and values["date_of_birth"] > utcnow().date():
                raise ValidationError("Date of birth cannot be in the future", "date_of_birth")

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(self.EVENTS.updated, changed)

    def update_skills(self, update: MaidSkillsUpdate) -> None:
        values = update.supplied()
        years = values.get("experience_years")
        if years is not None and (isinstance(years, bool) or not isinstance(years, int) or years < 0):
            raise ValidationError("Experience years must be a non-negative whole number", "experience_years")

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(MaidSkillsUpdated, changed)

    def update_passport_info(self, update: MaidPassportUpdate) -> None:
        """Update passport details and recompute passport validity."""
        values = update.supplied()
        if "passport_expiry" in values:
            values["passport_expiry"] = parse_date(values["passport_expiry"], "passport_expiry")

        changed = self._merge(values)
        self._validate_passport()
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(
            MaidPassportUpdated,
            changed,
            is_passport_valid=self.is_passport_valid,
        )

    def update_availability(self, update: MaidAvailabilityUpdate) -> None:
        values = update.supplied()
        if "availability_status" in values:
            values["availability_status"] = MaidAvailability.parse(values["availability_status"])
        if "available_from" in values:
            values["available_from"] = parse_date(values["available_from"], "available_from")

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(
            MaidAvailabilityUpdated,
            changed,
            availability_status=self.availability_status.value if self.availability_status else None,
        )

    def update_employment_preferences(self, update: MaidEmploymentPreferencesUpdate) -> None:
        values = update.supplied()
        salary = values.get("salary_expectation")
        if salary is not None and (isinstance(salary, bool) or not isinstance(salary, (int, float)) or salary < 0):
            raise ValidationError("Salary expectation cannot be negative", "salary_expectation")

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(MaidEmploymentPreferencesUpdated, changed)

    UPDATE_SECTIONS = {
        "personal_info": (MaidPersonalInfoUpdate, "update_personal_info"),
        "skills": (MaidSkillsUpdate, "update_skills"),
        "passport_info": (MaidPassportUpdate, "update_passport_info"),
        "availability": (MaidAvailabilityUpdate, "update_availability"),
        "employment_preferences": (MaidEmploymentPreferencesUpdate, "update_employment_preferences"),
    }

    # Lifecycle

    def _assert_submittable(self) -> None:
        self._validate_passport()
        if not self.is_passport_valid:
            raise InvalidPassportError(self.id, self.passport_expiry)

        age = self.age()
        if age is None or not MIN_WORKING_AGE <= age <= MAX_WORKING_AGE:
            raise IneligibleAgeError(self.id, age, MIN_WORKING_AGE, MAX_WORKING_AGE)

    # Agency representation and statistics

    def assign_to_agency(self, agency_id: str) -> None:
        require_reference(agency_id, "agency_id")

        self.agency_id = agency_id
        self.mark_as_updated()

        self._record_event(MaidAssignedToAgency(
            aggregate_id=self.id,
            maid_id=self.id,
            agency_id=agency_id,
        ))

    def release_from_agency(self) -> None:
        """Drop agency representation. Releasing an independent maid still records the event."""
        previous_agency = self.agency_id
        self.agency_id = None
        self.mark_as_updated()

        self._record_event(MaidReleasedFromAgency(
            aggregate_id=self.id,
            maid_id=self.id,
            agency_id=previous_agency,
        ))

    def record_placement(self, sponsor_id: str) -> None:
        """Count a placement with a sponsor and mark the maid as hired."""
        require_reference(sponsor_id, "sponsor_id")

        self.total_placements += 1
        self.availability_status = MaidAvailability.HIRED
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_event(MaidPlacementRecorded(
            aggregate_id=self.id,
            maid_id=self.id,
            sponsor_id=sponsor_id,
            total_placements=self.total_placements,
        ))

    def record_profile_view(self) -> None:
        self.profile_views += 1
        self.mark_as_updated()

        self._record_event(MaidProfileViewed(
            aggregate_id=self.id,
            profile_id=self.id,
            profile_views=self.profile_views,
        ))
