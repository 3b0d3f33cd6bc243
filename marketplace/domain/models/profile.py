"""
Profile aggregate base.

Shared behaviour of the agency, maid and sponsor profiles: identity,
contact details, the verification lifecycle, completion scoring, the
running rating and the domain-event buffer. Aggregates never perform I/O;
use cases load them, call one method, pull events, save and publish.
"""

import math
from dataclasses import dataclass, fields
from decimal import Decimal, ROUND_HALF_UP
from enum import Enum
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from marketplace.domain.events.profile_events import ProfileEventSet

from .base import AggregateRoot, ValidationError, parse_datetime, to_primitive, utcnow
from .exceptions import (
    AlreadyArchivedError,
    ArchivedProfileError,
    IncompleteProfileError,
    InvalidDocumentTypeError,
    InvalidRatingError,
    InvalidStateError,
)
from .profile_status import ProfileStatus


class ProfileKind(str, Enum):
    """The three sides of the marketplace."""
    AGENCY = "agency"
    MAID = "maid"
    SPONSOR = "sponsor"


_IDENTITY_FIELDS = ("id", "user_id")

MAX_RATING = 5.0


def is_filled(value: Any) -> bool:
    """A required field counts as filled unless it is None, blank or an empty collection."""
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) > 0
    return True


def round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def require_reference(value: Any, field_name: str) -> None:
    """Reject a missing or blank identifier of a related record."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required", field_name)


@dataclass(frozen=True)
class PartialUpdate:
    """
    Base class for partial-update objects.

    A field left as None was not supplied and leaves the profile untouched;
    any other value, including 0, "" and [], is applied as given.
    """

    def supplied(self) -> Dict[str, Any]:
        """Supplied fields, in declaration order."""
        values = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                values[f.name] = list(value) if isinstance(value, (list, tuple)) else value
        return values

    def changed_fields(self) -> List[str]:
        return list(self.supplied())


@dataclass(eq=False, kw_only=True)
class ProfileAggregate(AggregateRoot):
    """
    Base aggregate root for marketplace profiles.

    Subclasses declare REQUIRED_FIELDS (drives completion scoring),
    DOCUMENT_TYPES (the named document slots), EVENTS (their closed event
    set) and UPDATE_SECTIONS (partial-update type and handler per section).
    """

    KIND: ClassVar[ProfileKind]
    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ()
    DOCUMENT_TYPES: ClassVar[Tuple[str, ...]] = ()
    EVENTS: ClassVar[ProfileEventSet]
    UPDATE_SECTIONS: ClassVar[Dict[str, Tuple[Type[PartialUpdate], str]]] = {}

    # Identity (immutable)
    id: str
    user_id: str

    # Contact information
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None

    # Status
    status: ProfileStatus = ProfileStatus.DRAFT
    is_verified: bool = False
    verified_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    # Derived, recomputed from current field values
    completion_percentage: int = 0

    # Reviews
    rating: float = 0.0
    total_reviews: int = 0

    def __post_init__(self):
        """Normalize reconstructed state and recompute derived fields."""
        super().__post_init__()

        if not self.id or not str(self.id).strip():
            raise ValidationError("Profile ID is required", "id")
        if not self.user_id or not str(self.user_id).strip():
            raise ValidationError("User ID is required", "user_id")

        self.status = ProfileStatus.from_string(self.status)
        self.is_verified = bool(self.is_verified)
        self.verified_at = parse_datetime(self.verified_at, "verified_at")
        self.rating = float(self.rating or 0)
        self.total_reviews = int(self.total_reviews or 0)

        self._refresh_derived_fields()

    def __setattr__(self, name: str, value: Any) -> None:
        if name in _IDENTITY_FIELDS and name in self.__dict__:
            raise AttributeError(f"{name} cannot be reassigned")
        super().__setattr__(name, value)

    def __eq__(self, other: Any) -> bool:
        """Profiles are equal if they have the same ID and are of the same kind."""
        if not isinstance(other, self.__class__):
            return False
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id))

    @classmethod
    def create(cls, id: str, user_id: str, **values: Any) -> "ProfileAggregate":
        """Open a new draft profile and record its creation event."""
        profile = cls(id=id, user_id=user_id, **values)
        profile._record_event(cls.EVENTS.created(
            aggregate_id=profile.id,
            profile_id=profile.id,
            user_id=profile.user_id,
        ))
        return profile

    # Completion scoring

    def is_complete(self) -> bool:
        return self.completion_percentage >= 100

    def missing_required_fields(self) -> List[str]:
        return [name for name in self.REQUIRED_FIELDS if not is_filled(getattr(self, name))]

    def _recalculate_completion(self) -> None:
        total = len(self.REQUIRED_FIELDS)
        if total == 0:
            self.completion_percentage = 100
            return
        completed = total - len(self.missing_required_fields())
        self.completion_percentage = round_half_up(completed * 100 / total)

    def _refresh_derived_fields(self) -> None:
        """Recompute every derived field. Variants extend this with their validity flags."""
        self._recalculate_completion()

    # Documents

    @property
    def documents(self) -> Dict[str, Optional[str]]:
        return {name: getattr(self, name) for name in self.DOCUMENT_TYPES}

    def validate_document_type(self, document_type: str) -> None:
        if document_type not in self.DOCUMENT_TYPES:
            raise InvalidDocumentTypeError(document_type, self.DOCUMENT_TYPES)

    def upload_document(self, document_type: str, document_url: str) -> None:
        """Store the URL of an already-uploaded document in its slot."""
        self.validate_document_type(document_type)
        if not isinstance(document_url, str) or not document_url.strip():
            raise ValidationError("Document URL cannot be empty", "document_url")

        setattr(self, document_type, document_url)
        self._recalculate_completion()
        self.mark_as_updated()

        self._record_event(self.EVENTS.document_uploaded(
            aggregate_id=self.id,
            profile_id=self.id,
            document_type=document_type,
            document_url=document_url,
        ))

    # Lifecycle

    def submit_for_verification(self) -> None:
        """Move a complete, valid draft profile to review."""
        if not self.status.is_draft():
            raise InvalidStateError(self.id, self.status, "submit for verification")
        if not self.is_complete():
            raise IncompleteProfileError(self.id, self.completion_percentage, self.missing_required_fields())
        self._assert_submittable()

        self.status = ProfileStatus.under_review()
        self.mark_as_updated()

        self._record_event(self.EVENTS.submitted(
            aggregate_id=self.id,
            profile_id=self.id,
            user_id=self.user_id,
        ))

    def _assert_submittable(self) -> None:
        """Role-specific validity checks run on submission."""

    def verify(self, verified_by: str) -> None:
        """Approve a profile under review (admin action)."""
        if not self.status.is_under_review():
            raise InvalidStateError(self.id, self.status, "verify")

        self.status = ProfileStatus.active()
        self.is_verified = True
        self.verified_at = utcnow()
        self.rejection_reason = None
        self.mark_as_updated()

        self._record_event(self.EVENTS.verified(
            aggregate_id=self.id,
            profile_id=self.id,
            user_id=self.user_id,
            verified_by=verified_by,
        ))

    def reject(self, reason: str, rejected_by: str) -> None:
        """Reject a profile under review (admin action)."""
        if not self.status.is_under_review():
            raise InvalidStateError(self.id, self.status, "reject")

        self.status = ProfileStatus.rejected()
        self.rejection_reason = reason
        self.mark_as_updated()

        self._record_event(self.EVENTS.rejected(
            aggregate_id=self.id,
            profile_id=self.id,
            user_id=self.user_id,
            reason=reason,
            rejected_by=rejected_by,
        ))

    def archive(self, reason: Optional[str] = None) -> None:
        if self.status.is_terminal():
            raise AlreadyArchivedError(self.id)

        self.status = ProfileStatus.archived()
        self.mark_as_updated()

        self._record_event(self.EVENTS.archived(
            aggregate_id=self.id,
            profile_id=self.id,
            reason=reason,
        ))

    def _ensure_not_archived(self, action: str) -> None:
        if self.status.is_archived():
            raise ArchivedProfileError(self.id, action)

    # Reviews

    def update_rating(self, new_rating: float) -> None:
        """
        Fold one review into the running mean.
        Assumes every prior review weighed the same; reviews cannot be edited or removed.
        """
        if (
            isinstance(new_rating, bool)
            or not isinstance(new_rating, (int, float))
            or math.isnan(new_rating)
            or not 0 <= new_rating <= MAX_RATING
        ):
            raise InvalidRatingError(new_rating)

        total_rating_points = self.rating * self.total_reviews
        self.total_reviews += 1
        average = (total_rating_points + new_rating) / self.total_reviews
        self.rating = min(MAX_RATING, max(0.0, average))
        self.mark_as_updated()

        self._record_event(self.EVENTS.rating_updated(
            aggregate_id=self.id,
            profile_id=self.id,
            rating=self.rating,
            total_reviews=self.total_reviews,
        ))

    # Partial updates

    @classmethod
    def build_update(cls, section: str, changes: Dict[str, Any]) -> PartialUpdate:
        """Build the partial-update object for a named section."""
        if section not in cls.UPDATE_SECTIONS:
            raise ValidationError(
                f"Unknown {cls.KIND.value} profile section: {section}", "section"
            )
        update_class, _ = cls.UPDATE_SECTIONS[section]
        allowed = {f.name for f in fields(update_class)}
        unknown = sorted(set(changes) - allowed)
        if unknown:
            raise ValidationError(
                f"Unknown fields for {section}: {', '.join(unknown)}", unknown[0]
            )
        return update_class(**changes)

    def apply_update(self, update: PartialUpdate) -> None:
        """Dispatch a partial-update object to the matching update method."""
        for update_class, method_name in self.UPDATE_SECTIONS.values():
            if type(update) is update_class:
                getattr(self, method_name)(update)
                return
        raise ValidationError(
            f"{type(update).__name__} cannot be applied to a {self.KIND.value} profile", "update"
        )

    def _merge(self, values: Dict[str, Any]) -> List[str]:
        """Assign supplied values; returns the names that were applied."""
        for name, value in values.items():
            setattr(self, name, value)
        return list(values)

    def _record_fields_updated(self, event_class, updated_fields: List[str], **extra: Any) -> None:
        self._record_event(event_class(
            aggregate_id=self.id,
            profile_id=self.id,
            updated_fields=tuple(updated_fields),
            **extra,
        ))

    # Serialization

    def to_dict(self) -> Dict[str, Any]:
        """
        Plain representation for persistence. Status is the canonical string,
        timestamps and dates are ISO-8601 strings, lists keep their order.
        """
        data = {"kind": self.KIND.value}
        for f in fields(self):
            if f.name.startswith("_"):
                continue
            data[f.name] = to_primitive(getattr(self, f.name))
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileAggregate":
        """Reconstruct a profile from its persisted representation. Emits no events."""
        if not data.get("id"):
            raise ValidationError("Profile ID is required", "id")
        if not data.get("user_id"):
            raise ValidationError("User ID is required", "user_id")

        names = {f.name for f in fields(cls) if f.init}
        return cls(**{key: value for key, value in data.items() if key in names})
