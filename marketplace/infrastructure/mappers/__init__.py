"""
Mappers between domain aggregates and persistence models.
"""

from .profile_mapper import ProfileMapper

__all__ = [
    "ProfileMapper",
]
