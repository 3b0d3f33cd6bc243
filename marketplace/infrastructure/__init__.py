"""
Infrastructure layer for the marketplace profiles.

This layer contains the adapters behind the domain ports:
- Database (SQLAlchemy, Alembic migrations)
- Profile repositories (SQL and in-memory)
- Document storage (local filesystem)
- Event handlers (audit log, verification notifications)
"""
