"""
Base aggregate and exceptions for the domain layer.
This module contains the foundational classes for all domain aggregates.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Any, Dict, List
from abc import ABC
from dataclasses import dataclass, field
from enum import Enum

from marketplace.domain.events.base import DomainEvent


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_datetime(value: Any, field_name: Optional[str] = None) -> Optional[datetime]:
    """
    Normalize a timestamp coming from persistence or from a caller.
    Accepts datetimes, dates and ISO-8601 strings. Naive values are taken as UTC.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        result = value
    elif isinstance(value, date):
        result = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        try:
            result = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            raise ValidationError(f"Invalid datetime: {value!r}", field_name)
    else:
        raise ValidationError(f"Invalid datetime: {value!r}", field_name)

    if result.tzinfo is None:
        result = result.replace(tzinfo=timezone.utc)
    return result.astimezone(timezone.utc)


def parse_date(value: Any, field_name: Optional[str] = None) -> Optional[date]:
    """Normalize a calendar date from a date, datetime or ISO-8601 string."""
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if "T" in text:
                return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
            return date.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}", field_name)
    raise ValidationError(f"Invalid date: {value!r}", field_name)


def to_primitive(value: Any) -> Any:
    """Convert a field value to its persisted representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [to_primitive(item) for item in value]
    if isinstance(value, dict):
        return {key: to_primitive(item) for key, item in value.items()}
    return value


@dataclass(eq=False, kw_only=True)
class AggregateRoot(ABC):
    """
    Base class for aggregate roots.
    Aggregate roots are the entry points to aggregates and buffer domain events
    until the caller pulls them.
    """

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Optimistic-locking token, bumped by repositories on save
    version: int = 0

    # Domain events
    _events: List[DomainEvent] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self):
        """Initialize timestamps after creation."""
        self.created_at = parse_datetime(self.created_at, "created_at") or utcnow()
        updated_at = parse_datetime(self.updated_at, "updated_at") or self.created_at
        # Never earlier than created_at
        self.updated_at = max(updated_at, self.created_at)
        self.version = int(self.version or 0)

    def mark_as_updated(self) -> None:
        """Advance updated_at. Strictly increases, even within one clock tick."""
        now = utcnow()
        if now <= self.updated_at:
            now = self.updated_at + timedelta(microseconds=1)
        self.updated_at = now

    def _record_event(self, event: DomainEvent) -> None:
        """Append a domain event to the pending buffer."""
        self._events.append(event)

    def pull_domain_events(self) -> List[DomainEvent]:
        """Return all pending domain events and clear the buffer."""
        events = list(self._events)
        self._events.clear()
        return events

    @property
    def has_pending_events(self) -> bool:
        return bool(self._events)

    @property
    def is_new(self) -> bool:
        """Check if aggregate has never been persisted."""
        return self.version == 0


class DomainException(Exception):
    """Base exception for domain errors."""

    def __init__(self, message: str, code: Optional[str] = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class ValidationError(DomainException):
    """Exception raised when input or entity validation fails."""

    def __init__(self, message: str, field: Optional[str] = None, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)
        self.field = field


class BusinessRuleViolation(DomainException):
    """Exception raised when a business rule is violated."""

    def __init__(self, message: str, code: str = "BUSINESS_RULE_VIOLATION"):
        super().__init__(message, code)


class EntityNotFoundError(DomainException):
    """Exception raised when an entity is not found."""

    def __init__(self, entity_type: str, entity_id: Any):
        message = f"{entity_type} with id {entity_id} not found"
        super().__init__(message, "ENTITY_NOT_FOUND")
        self.entity_type = entity_type
        self.entity_id = entity_id


class DuplicateEntityError(DomainException):
    """Exception raised when trying to create a duplicate entity."""

    def __init__(self, entity_type: str, field: str, value: Any):
        message = f"{entity_type} with {field}='{value}' already exists"
        super().__init__(message, "DUPLICATE_ENTITY")
        self.entity_type = entity_type
        self.field = field
        self.value = value


class ConcurrencyError(DomainException):
    """
    Exception raised when a save lost an optimistic-locking race.
    The stored version moved on after the aggregate was loaded.
    """

    def __init__(self, entity_type: str, entity_id: Any, expected_version: int, actual_version: Optional[int]):
        message = (
            f"{entity_type} {entity_id} was modified concurrently "
            f"(expected version {expected_version}, found {actual_version})"
        )
        super().__init__(message, "CONCURRENT_MODIFICATION")
        self.entity_type = entity_type
        self.entity_id = entity_id
        self.expected_version = expected_version
        self.actual_version = actual_version
