"""
Profile lifecycle status value object.
"""

from enum import Enum
from typing import Any


class ProfileStatus(str, Enum):
    """
    Lifecycle status of a profile.

    draft -> under_review -> active | rejected, and any non-archived
    status -> archived. Transitions happen only through aggregate methods.
    """

    DRAFT = "draft"
    UNDER_REVIEW = "under_review"
    ACTIVE = "active"
    REJECTED = "rejected"
    ARCHIVED = "archived"

    @classmethod
    def from_string(cls, value: Any) -> "ProfileStatus":
        """
        Map a persisted value to a status. Never raises: missing or unknown
        input falls back to draft.
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return cls.DRAFT

        normalized = value.strip().lower().replace("-", "_").replace(" ", "_")
        try:
            return cls(normalized)
        except ValueError:
            return cls.DRAFT

    @classmethod
    def draft(cls) -> "ProfileStatus":
        return cls.DRAFT

    @classmethod
    def under_review(cls) -> "ProfileStatus":
        return cls.UNDER_REVIEW

    @classmethod
    def active(cls) -> "ProfileStatus":
        return cls.ACTIVE

    @classmethod
    def rejected(cls) -> "ProfileStatus":
        return cls.REJECTED

    @classmethod
    def archived(cls) -> "ProfileStatus":
        return cls.ARCHIVED

    def is_draft(self) -> bool:
        return self is ProfileStatus.DRAFT

    def is_under_review(self) -> bool:
        return self is ProfileStatus.UNDER_REVIEW

    def is_active(self) -> bool:
        return self is ProfileStatus.ACTIVE

    def is_rejected(self) -> bool:
        return self is ProfileStatus.REJECTED

    def is_archived(self) -> bool:
        return self is ProfileStatus.ARCHIVED

    def is_terminal(self) -> bool:
        """Archived profiles accept no further transitions."""
        return self.is_archived()

    def to_string(self) -> str:
        """Serialize to the canonical persisted string."""
        return self.value

    def __str__(self) -> str:
        return self.value
