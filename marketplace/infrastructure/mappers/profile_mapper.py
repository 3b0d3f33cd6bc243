"""
Profile mapper for converting between profile aggregates and database models.
"""

from typing import Any, Dict

from marketplace.domain.models.profile import ProfileAggregate
from marketplace.domain.models.profile_factory import profile_from_dict
from marketplace.infrastructure.db.models import ProfileModel


class ProfileMapper:
    """Maps between profile aggregates of any kind and ProfileModel rows."""

    def domain_to_values(self, profile: ProfileAggregate) -> Dict[str, Any]:
        """Column values for a profile, without the version column."""
        data = profile.to_dict()
        # version is owned by the row, not the snapshot
        data.pop("version", None)

        return {
            "kind": profile.KIND.value,
            "user_id": profile.user_id,
            "status": profile.status.to_string(),
            "completion_percentage": profile.completion_percentage,
            "data": data,
            "created_at": profile.created_at,
            "updated_at": profile.updated_at,
        }

    def domain_to_model(self, profile: ProfileAggregate, version: int) -> ProfileModel:
        """Convert a profile to a new ProfileModel row."""
        return ProfileModel(
            id=profile.id,
            version=version,
            **self.domain_to_values(profile),
        )

    def model_to_domain(self, model: ProfileModel) -> ProfileAggregate:
        """Convert a ProfileModel row to a profile aggregate. Emits no events."""
        data = dict(model.data or {})
        data.setdefault("kind", model.kind)
        data["id"] = model.id
        data["version"] = model.version
        return profile_from_dict(data)
