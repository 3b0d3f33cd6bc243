"""
Lookup of profile aggregate classes by kind.
"""

from typing import Any, Dict, Type, Union

from .agency_profile import AgencyProfile
from .base import ValidationError
from .maid_profile import MaidProfile
from .profile import ProfileAggregate, ProfileKind
from .sponsor_profile import SponsorProfile


PROFILE_CLASSES: Dict[ProfileKind, Type[ProfileAggregate]] = {
    ProfileKind.AGENCY: AgencyProfile,
    ProfileKind.MAID: MaidProfile,
    ProfileKind.SPONSOR: SponsorProfile,
}


def profile_class_for(kind: Union[ProfileKind, str]) -> Type[ProfileAggregate]:
    """Resolve the aggregate class for a profile kind."""
    try:
        return PROFILE_CLASSES[ProfileKind(kind)]
    except ValueError:
        raise ValidationError(f"Unknown profile kind: {kind}", "kind")


def profile_from_dict(data: Dict[str, Any]) -> ProfileAggregate:
    """Reconstruct a profile of whichever kind the persisted ``kind`` key names."""
    return profile_class_for(data.get("kind")).from_dict(data)
