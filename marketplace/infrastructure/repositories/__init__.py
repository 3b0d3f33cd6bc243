"""
Infrastructure repositories module.
Contains implementations of the domain repository ports.
"""

from .profile_repository import SQLAlchemyProfileRepository
from .in_memory_profile_repository import InMemoryProfileRepository

__all__ = [
    "SQLAlchemyProfileRepository",
    "InMemoryProfileRepository",
]
