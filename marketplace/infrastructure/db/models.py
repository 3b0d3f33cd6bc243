"""
SQLAlchemy models for the database.
Maps profile aggregates to database tables.
"""

from sqlalchemy import Column, Integer, String, DateTime, JSON, Index

from .database import Base


class ProfileModel(Base):
    """
    Profiles table.

    One row per profile of any kind. The full serialized aggregate lives in
    ``data``; the other columns are copies kept for lookups and listings.
    """
    __tablename__ = 'profiles'

    id = Column(String(64), primary_key=True)
    kind = Column(String(20), nullable=False)
    user_id = Column(String(64), nullable=False)
    status = Column(String(20), nullable=False, default='draft')
    completion_percentage = Column(Integer, nullable=False, default=0)

    # Optimistic-locking token
    version = Column(Integer, nullable=False, default=1)

    data = Column(JSON, nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    # Indexes
    __table_args__ = (
        Index('idx_profiles_user', 'user_id'),
        Index('idx_profiles_kind_status', 'kind', 'status'),
    )

    def __repr__(self) -> str:
        return f"<ProfileModel(id={self.id}, kind={self.kind}, status={self.status}, version={self.version})>"
