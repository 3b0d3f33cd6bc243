"""
Database infrastructure for the profile store.
"""

from .database import (
    engine,
    Base,
    create_db_engine,
    create_session_factory,
    init_db,
)
from .models import ProfileModel

__all__ = [
    "engine",
    "Base",
    "create_db_engine",
    "create_session_factory",
    "init_db",
    "ProfileModel",
]
