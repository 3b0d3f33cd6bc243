"""
Errors raised by profile aggregates.

All of them are local precondition violations: the aggregate rejects the
call before changing any state, and the caller decides how to recover.
"""

from datetime import date, datetime
from typing import Any, List, Optional, Union

from .base import BusinessRuleViolation, ValidationError


class ProfileDomainError(BusinessRuleViolation):
    """Base class for business-rule violations raised by a profile."""

    def __init__(self, message: str, profile_id: Optional[str] = None, code: str = "PROFILE_RULE_VIOLATION"):
        super().__init__(message, code)
        self.profile_id = profile_id


class InvalidStateError(ProfileDomainError):
    """A transition was attempted from a status that does not permit it."""

    def __init__(
        self,
        profile_id: Optional[str],
        current_status: Any,
        action: str,
        message: Optional[str] = None,
        code: str = "INVALID_STATE",
    ):
        super().__init__(
            message or f"Cannot {action} a profile in '{current_status}' status",
            profile_id,
            code,
        )
        self.current_status = current_status
        self.action = action


class AlreadyArchivedError(InvalidStateError):
    """Archive was attempted on an archived profile."""

    def __init__(self, profile_id: Optional[str]):
        super().__init__(
            profile_id,
            "archived",
            "archive",
            message="Profile already archived",
            code="ALREADY_ARCHIVED",
        )


class ArchivedProfileError(ProfileDomainError):
    """A guarded field update was attempted on an archived profile."""

    def __init__(self, profile_id: Optional[str], action: str = "update"):
        super().__init__(f"Cannot {action} on an archived profile", profile_id, "ARCHIVED_PROFILE")
        self.action = action


class IncompleteProfileError(ProfileDomainError):
    """Submission attempted before every required field was filled."""

    def __init__(self, profile_id: Optional[str], completion_percentage: int, missing_fields: List[str]):
        super().__init__(
            f"Profile must be complete before submission ({completion_percentage}% complete)",
            profile_id,
            "INCOMPLETE_PROFILE",
        )
        self.completion_percentage = completion_percentage
        self.missing_fields = list(missing_fields)


class InvalidLicenseError(ProfileDomainError):
    """Submission attempted while the agency license is missing or expired."""

    def __init__(self, profile_id: Optional[str], license_expiry: Optional[datetime] = None):
        super().__init__("License must be valid before submission", profile_id, "INVALID_LICENSE")
        self.license_expiry = license_expiry


class InvalidPassportError(ProfileDomainError):
    """Submission attempted while the passport is missing or expired."""

    def __init__(self, profile_id: Optional[str], passport_expiry: Optional[date] = None):
        super().__init__("Passport must be valid before submission", profile_id, "INVALID_PASSPORT")
        self.passport_expiry = passport_expiry


class IneligibleAgeError(ProfileDomainError):
    """The candidate's age is outside the range agencies may place."""

    def __init__(self, profile_id: Optional[str], age: Optional[int], minimum: int, maximum: int):
        super().__init__(
            f"Age must be between {minimum} and {maximum} years (got {age})",
            profile_id,
            "INELIGIBLE_AGE",
        )
        self.age = age
        self.minimum = minimum
        self.maximum = maximum


class InvalidBudgetError(ProfileDomainError):
    """A sponsor salary budget is negative, inverted or incomplete."""

    def __init__(self, profile_id: Optional[str], message: str):
        super().__init__(message, profile_id, "INVALID_BUDGET")


class InvalidDocumentTypeError(ValidationError):
    """Upload targeted a document slot the profile kind does not have."""

    def __init__(self, document_type: Any, allowed: Union[List[str], tuple]):
        super().__init__(
            f"Invalid document type: {document_type}. Expected one of: {', '.join(allowed)}",
            "document_type",
            "INVALID_DOCUMENT_TYPE",
        )
        self.document_type = document_type
        self.allowed = tuple(allowed)


class InvalidRatingError(ValidationError):
    """Rating value outside [0, 5]."""

    def __init__(self, rating: Any):
        super().__init__("Rating must be between 0 and 5", "rating", "INVALID_RATING")
        self.rating = rating
