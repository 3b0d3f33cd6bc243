"""
Repository interfaces for the domain layer.
This module exports all repository interfaces (ports) for dependency injection.
"""

from .profile_repository import ProfileRepository

__all__ = [
    "ProfileRepository",
]
