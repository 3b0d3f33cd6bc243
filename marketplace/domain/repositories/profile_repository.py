"""
Profile repository interface.
Defines the contract for profile persistence with optimistic locking.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from marketplace.domain.models.profile import ProfileAggregate, ProfileKind
from marketplace.domain.models.profile_status import ProfileStatus


class ProfileRepository(ABC):
    """
    Repository interface for profile aggregates of every kind.

    Saves are compare-and-swap on ``version``: the stored version must still
    equal the version the aggregate was loaded with, otherwise the save fails
    with ConcurrencyError and nothing is written.
    """

    @abstractmethod
    async def load(self, profile_id: str) -> ProfileAggregate:
        """
        Load a profile by ID.
        Raises EntityNotFoundError if it does not exist.
        """
        pass

    @abstractmethod
    async def find_by_id(self, profile_id: str) -> Optional[ProfileAggregate]:
        """
        Find a profile by its ID.
        Returns None if not found.
        """
        pass

    @abstractmethod
    async def save(self, profile: ProfileAggregate) -> ProfileAggregate:
        """
        Persist a profile.

        New profiles (version 0) are inserted and stored as version 1;
        inserting an existing ID raises DuplicateEntityError. Existing
        profiles are written only if the stored version matches, and the
        aggregate's version is advanced on success.
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> List[ProfileAggregate]:
        """Find all profiles owned by an account."""
        pass

    @abstractmethod
    async def find_by_status(
        self,
        kind: Union[ProfileKind, str],
        status: Union[ProfileStatus, str],
    ) -> List[ProfileAggregate]:
        """Find all profiles of one kind in a given status, e.g. the review queue."""
        pass
