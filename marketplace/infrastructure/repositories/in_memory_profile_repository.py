"""
In-memory profile repository.
Keeps serialized snapshots, so every load returns an independent aggregate.
"""

import copy
import logging
from typing import Dict, List, Optional, Tuple, Union

from marketplace.domain.models.base import ConcurrencyError, DuplicateEntityError, EntityNotFoundError
from marketplace.domain.models.profile import ProfileAggregate, ProfileKind
from marketplace.domain.models.profile_factory import profile_from_dict
from marketplace.domain.models.profile_status import ProfileStatus
from marketplace.domain.repositories.profile_repository import ProfileRepository


logger = logging.getLogger(__name__)


class InMemoryProfileRepository(ProfileRepository):
    """Dictionary-backed repository with the same version check as the SQL one."""

    def __init__(self):
        self._rows: Dict[str, Tuple[int, dict]] = {}

    def _restore(self, profile_id: str) -> ProfileAggregate:
        version, snapshot = self._rows[profile_id]
        data = copy.deepcopy(snapshot)
        data["version"] = version
        return profile_from_dict(data)

    async def load(self, profile_id: str) -> ProfileAggregate:
        if profile_id not in self._rows:
            raise EntityNotFoundError("Profile", profile_id)
        return self._restore(profile_id)

    async def find_by_id(self, profile_id: str) -> Optional[ProfileAggregate]:
        if profile_id not in self._rows:
            return None
        return self._restore(profile_id)

    async def save(self, profile: ProfileAggregate) -> ProfileAggregate:
        expected_version = profile.version
        stored = self._rows.get(profile.id)

        if profile.is_new:
            if stored is not None:
                raise DuplicateEntityError("Profile", "id", profile.id)
        elif stored is None:
            raise EntityNotFoundError("Profile", profile.id)
        elif stored[0] != expected_version:
            logger.warning(
                f"Lost update on profile {profile.id}: expected version {expected_version}, found {stored[0]}"
            )
            raise ConcurrencyError("Profile", profile.id, expected_version, stored[0])

        self._rows[profile.id] = (expected_version + 1, profile.to_dict())
        profile.version = expected_version + 1
        return profile

    async def find_by_user_id(self, user_id: str) -> List[ProfileAggregate]:
        return [
            self._restore(profile_id)
            for profile_id, (_, data) in self._rows.items()
            if data["user_id"] == user_id
        ]

    async def find_by_status(
        self,
        kind: Union[ProfileKind, str],
        status: Union[ProfileStatus, str],
    ) -> List[ProfileAggregate]:
        kind_value = ProfileKind(kind).value
        status_value = ProfileStatus.from_string(status).value
        return [
            self._restore(profile_id)
            for profile_id, (_, data) in self._rows.items()
            if data["kind"] == kind_value and data["status"] == status_value
        ]

    def clear(self) -> None:
        self._rows.clear()
