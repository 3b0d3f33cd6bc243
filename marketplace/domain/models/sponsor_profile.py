"""
Sponsor profile aggregate.

A sponsor is a household looking to hire. Its profile describes the
family, the preferred candidate and the salary budget, and carries the
identity documents checked during verification.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from marketplace.domain.events.profile_events import (
    SPONSOR_EVENTS,
    SponsorBudgetUpdated,
    SponsorFamilyInfoUpdated,
    SponsorHireRecorded,
    SponsorIdentityUpdated,
    SponsorJobPostingClosed,
    SponsorJobPostingOpened,
    SponsorPreferencesUpdated,
)

from .base import ValidationError
from .exceptions import InvalidBudgetError
from .profile import PartialUpdate, ProfileAggregate, ProfileKind, require_reference


@dataclass(frozen=True)
class SponsorBasicInfoUpdate(PartialUpdate):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    religion: Optional[str] = None


@dataclass(frozen=True)
class SponsorFamilyInfoUpdate(PartialUpdate):
    family_size: Optional[int] = None
    children_count: Optional[int] = None
    children_ages: Optional[List[int]] = None
    has_pets: Optional[bool] = None
    pet_types: Optional[List[str]] = None
    accommodation_type: Optional[str] = None


@dataclass(frozen=True)
class SponsorPreferencesUpdate(PartialUpdate):
    preferred_nationalities: Optional[List[str]] = None
    preferred_languages: Optional[List[str]] = None
    required_skills: Optional[List[str]] = None
    preferred_experience_years: Optional[int] = None
    live_in_required: Optional[bool] = None
    working_hours: Optional[str] = None
    days_off: Optional[str] = None


@dataclass(frozen=True)
class SponsorBudgetUpdate(PartialUpdate):
    salary_budget_min: Optional[float] = None
    salary_budget_max: Optional[float] = None
    currency: Optional[str] = None


@dataclass(frozen=True)
class SponsorIdentityUpdate(PartialUpdate):
    id_type: Optional[str] = None
    id_number: Optional[str] = None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(eq=False, kw_only=True)
class SponsorProfile(ProfileAggregate):
    """Sponsor profile aggregate root."""

    KIND = ProfileKind.SPONSOR
    REQUIRED_FIELDS = (
        "full_name",
        "phone",
        "email",
        "country",
        "city",
        "family_size",
        "accommodation_type",
        "required_skills",
        "salary_budget_min",
        "salary_budget_max",
        "id_number",
        "id_document_front",
        "id_document_back",
    )
    DOCUMENT_TYPES = ("id_document_front", "id_document_back", "employment_proof")
    EVENTS = SPONSOR_EVENTS

    religion: Optional[str] = None

    # Household
    family_size: int = 1
    children_count: int = 0
    children_ages: List[int] = field(default_factory=list)
    has_pets: bool = False
    pet_types: List[str] = field(default_factory=list)
    accommodation_type: Optional[str] = None

    # Candidate preferences
    preferred_nationalities: List[str] = field(default_factory=list)
    preferred_languages: List[str] = field(default_factory=list)
    required_skills: List[str] = field(default_factory=list)
    preferred_experience_years: Optional[int] = None
    live_in_required: bool = True
    working_hours: Optional[str] = None
    days_off: Optional[str] = None

    # Budget
    salary_budget_min: Optional[float] = None
    salary_budget_max: Optional[float] = None
    currency: str = "USD"

    # Identity
    id_type: Optional[str] = None
    id_number: Optional[str] = None

    # Documents
    id_document_front: Optional[str] = None
    id_document_back: Optional[str] = None
    employment_proof: Optional[str] = None

    # Statistics
    active_job_postings: int = 0
    total_hires: int = 0

    def __post_init__(self):
        self.children_ages = list(self.children_ages or [])
        self.pet_types = list(self.pet_types or [])
        self.preferred_nationalities = list(self.preferred_nationalities or [])
        self.preferred_languages = list(self.preferred_languages or [])
        self.required_skills = list(self.required_skills or [])
        self.has_pets = bool(self.has_pets)
        self.live_in_required = bool(self.live_in_required)
        self.active_job_postings = max(0, int(self.active_job_postings or 0))
        self.total_hires = int(self.total_hires or 0)
        super().__post_init__()

    @property
    def has_valid_budget(self) -> bool:
        """Both bounds present, non-negative and ordered."""
        low, high = self.salary_budget_min, self.salary_budget_max
        if not _is_number(low) or not _is_number(high):
            return False
        return 0 <= low <= high

    # Updates

    def update_basic_info(self, update: SponsorBasicInfoUpdate) -> None:
        """Update contact details. Archived profiles are read-only here."""
        self._ensure_not_archived("update basic info")

        changed = self._merge(update.supplied())
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(self.EVENTS.updated, changed)

    def update_family_info(self, update: SponsorFamilyInfoUpdate) -> None:
        values = update.supplied()
        self._validate_family(values)

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(SponsorFamilyInfoUpdated, changed)

    def _validate_family(self, values: Dict[str, Any]) -> None:
        family_size = values.get("family_size", self.family_size)
        children_count = values.get("children_count", self.children_count)
        children_ages = values.get("children_ages", self.children_ages)

        if not _is_number(family_size) or family_size < 1:
            raise ValidationError("Family size must be at least 1", "family_size")
        if not _is_number(children_count) or children_count < 0:
            raise ValidationError("Children count cannot be negative", "children_count")
        if len(children_ages) > children_count:
            raise ValidationError("More children ages than children", "children_ages")
        if any(not _is_number(age) or age < 0 for age in children_ages):
            raise ValidationError("Children ages cannot be negative", "children_ages")

    def update_preferences(self, update: SponsorPreferencesUpdate) -> None:
        values = update.supplied()
        years = values.get("preferred_experience_years")
        if years is not None and (not _is_number(years) or years < 0):
            raise ValidationError(
                "Preferred experience years cannot be negative", "preferred_experience_years"
            )

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(SponsorPreferencesUpdated, changed)

    def update_budget(self, update: SponsorBudgetUpdate) -> None:
        """Update the salary budget. The merged bounds must stay ordered."""
        values = update.supplied()
        low = values.get("salary_budget_min", self.salary_budget_min)
        high = values.get("salary_budget_max", self.salary_budget_max)

        for bound in (low, high):
            if bound is not None and (not _is_number(bound) or bound < 0):
                raise InvalidBudgetError(self.id, "Salary budget cannot be negative")
        if low is not None and high is not None and low > high:
            raise InvalidBudgetError(self.id, "Minimum budget cannot exceed maximum budget")

        changed = self._merge(values)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(
            SponsorBudgetUpdated,
            changed,
            salary_budget_min=self.salary_budget_min,
            salary_budget_max=self.salary_budget_max,
            currency=self.currency,
        )

    def update_identity(self, update: SponsorIdentityUpdate) -> None:
        changed = self._merge(update.supplied())
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_fields_updated(SponsorIdentityUpdated, changed)

    UPDATE_SECTIONS = {
        "basic_info": (SponsorBasicInfoUpdate, "update_basic_info"),
        "family_info": (SponsorFamilyInfoUpdate, "update_family_info"),
        "preferences": (SponsorPreferencesUpdate, "update_preferences"),
        "budget": (SponsorBudgetUpdate, "update_budget"),
        "identity": (SponsorIdentityUpdate, "update_identity"),
    }

    # Lifecycle

    def _assert_submittable(self) -> None:
        if not self.has_valid_budget:
            raise InvalidBudgetError(
                self.id, "Salary budget must be set with minimum not above maximum"
            )

    # Job postings and hires

    def open_job_posting(self, job_id: str) -> None:
        require_reference(job_id, "job_id")

        self.active_job_postings += 1
        self.mark_as_updated()

        self._record_event(SponsorJobPostingOpened(
            aggregate_id=self.id,
            sponsor_id=self.id,
            job_id=job_id,
            active_job_postings=self.active_job_postings,
        ))

    def close_job_posting(self, job_id: str) -> None:
        """Decrement open postings. Never drops below zero."""
        require_reference(job_id, "job_id")

        if self.active_job_postings > 0:
            self.active_job_postings -= 1
        self.mark_as_updated()

        self._record_event(SponsorJobPostingClosed(
            aggregate_id=self.id,
            sponsor_id=self.id,
            job_id=job_id,
            active_job_postings=self.active_job_postings,
        ))

    def record_hire(self, maid_id: str) -> None:
        require_reference(maid_id, "maid_id")

        self.total_hires += 1
        self.mark_as_updated()

        self._record_event(SponsorHireRecorded(
            aggregate_id=self.id,
            sponsor_id=self.id,
            maid_id=maid_id,
            total_hires=self.total_hires,
        ))
