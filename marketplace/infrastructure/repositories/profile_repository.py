"""
Profile repository implementation using SQLAlchemy.
"""

import asyncio
import logging
from typing import List, Optional, Union

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.domain.models.base import ConcurrencyError, DuplicateEntityError, EntityNotFoundError
from marketplace.domain.models.profile import ProfileAggregate, ProfileKind
from marketplace.domain.models.profile_status import ProfileStatus
from marketplace.domain.repositories.profile_repository import ProfileRepository as ProfileRepositoryInterface
from marketplace.infrastructure.db.models import ProfileModel
from marketplace.infrastructure.mappers.profile_mapper import ProfileMapper


logger = logging.getLogger(__name__)


class SQLAlchemyProfileRepository(ProfileRepositoryInterface):
    """
    SQLAlchemy implementation of the profile repository.

    Updates are a single ``UPDATE ... WHERE id = :id AND version = :expected``
    so two writers that loaded the same version cannot both succeed.
    The session is synchronous; every database round-trip runs in a worker
    thread so the event loop keeps serving other tasks.
    """

    def __init__(self, session: Session, auto_commit: bool = True):
        self.session = session
        self.auto_commit = auto_commit
        self.mapper = ProfileMapper()

    def _select(self):
        # Always refresh rows already in the identity map; another writer may have moved them on
        return select(ProfileModel).execution_options(populate_existing=True)

    def _get_model(self, profile_id: str) -> Optional[ProfileModel]:
        return self.session.execute(
            self._select().where(ProfileModel.id == profile_id)
        ).scalar_one_or_none()

    async def load(self, profile_id: str) -> ProfileAggregate:
        profile = await self.find_by_id(profile_id)
        if profile is None:
            raise EntityNotFoundError("Profile", profile_id)
        return profile

    async def find_by_id(self, profile_id: str) -> Optional[ProfileAggregate]:
        return await asyncio.to_thread(self._find_by_id, profile_id)

    def _find_by_id(self, profile_id: str) -> Optional[ProfileAggregate]:
        model = self._get_model(profile_id)
        if not model:
            return None
        return self.mapper.model_to_domain(model)

    async def save(self, profile: ProfileAggregate) -> ProfileAggregate:
        expected_version = profile.version
        await asyncio.to_thread(self._save, profile, expected_version)

        profile.version = expected_version + 1
        logger.debug(f"Saved profile {profile.id} at version {profile.version}")
        return profile

    def _save(self, profile: ProfileAggregate, expected_version: int) -> None:
        try:
            if profile.is_new:
                self._insert(profile)
            else:
                self._compare_and_swap(profile, expected_version)
            self.session.flush()
            if self.auto_commit:
                self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise DuplicateEntityError("Profile", "id", profile.id)
        except Exception:
            self.session.rollback()
            raise

    def _insert(self, profile: ProfileAggregate) -> None:
        if self._get_model(profile.id) is not None:
            raise DuplicateEntityError("Profile", "id", profile.id)
        self.session.add(self.mapper.domain_to_model(profile, version=1))

    def _compare_and_swap(self, profile: ProfileAggregate, expected_version: int) -> None:
        result = self.session.execute(
            update(ProfileModel)
            .where(ProfileModel.id == profile.id, ProfileModel.version == expected_version)
            .values(version=expected_version + 1, **self.mapper.domain_to_values(profile))
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return

        current = self.session.execute(
            select(ProfileModel.version).where(ProfileModel.id == profile.id)
        ).scalar_one_or_none()
        if current is None:
            raise EntityNotFoundError("Profile", profile.id)

        logger.warning(
            f"Lost update on profile {profile.id}: expected version {expected_version}, found {current}"
        )
        raise ConcurrencyError("Profile", profile.id, expected_version, current)

    async def find_by_user_id(self, user_id: str) -> List[ProfileAggregate]:
        return await asyncio.to_thread(self._find_by_user_id, user_id)

    def _find_by_user_id(self, user_id: str) -> List[ProfileAggregate]:
        models = self.session.execute(
            self._select()
            .where(ProfileModel.user_id == user_id)
            .order_by(ProfileModel.created_at)
        ).scalars().all()
        return [self.mapper.model_to_domain(model) for model in models]

    async def find_by_status(
        self,
        kind: Union[ProfileKind, str],
        status: Union[ProfileStatus, str],
    ) -> List[ProfileAggregate]:
        return await asyncio.to_thread(
            self._find_by_status, ProfileKind(kind), ProfileStatus.from_string(status)
        )

    def _find_by_status(self, kind: ProfileKind, status: ProfileStatus) -> List[ProfileAggregate]:
        models = self.session.execute(
            self._select()
            .where(
                ProfileModel.kind == kind.value,
                ProfileModel.status == status.value,
            )
            .order_by(ProfileModel.updated_at)
        ).scalars().all()
        return [self.mapper.model_to_domain(model) for model in models]
