#!/usr/bin/env python3
"""
Database management script for the profile store.
Handles schema migrations and local table creation.
"""

import sys
from pathlib import Path

from alembic import command
from alembic.config import Config

from marketplace.config import get_settings
from marketplace.infrastructure.db.database import engine, init_db
from marketplace.logging_config import configure_logging


MIGRATIONS_DIR = Path(__file__).resolve().parent / "marketplace" / "infrastructure" / "db" / "migrations"


def get_alembic_config(database_url: str = None) -> Config:
    """Build the Alembic configuration without an alembic.ini file."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    alembic_cfg.set_main_option(
        "sqlalchemy.url", (database_url or get_settings().database_url).replace("%", "%%")
    )
    return alembic_cfg


def create_tables():
    """Create missing tables directly from the models (local development only)."""
    print("Creating tables...")
    init_db(engine)


def create_migration(message: str = "Auto-generated migration"):
    """Create a new migration."""
    print(f"Creating migration: {message}")
    command.revision(get_alembic_config(), message=message, autogenerate=True)


def run_migrations():
    """Run pending migrations."""
    print("Running migrations...")
    command.upgrade(get_alembic_config(), "head")


def rollback_migration():
    """Rollback last migration."""
    print("Rolling back migration...")
    command.downgrade(get_alembic_config(), "-1")


def reset_database():
    """Reset database - WARNING: This will drop all data!"""
    response = input("This will drop ALL profiles. Type 'yes' to continue: ")
    if response.lower() == 'yes':
        alembic_cfg = get_alembic_config()
        print("Resetting database...")
        command.downgrade(alembic_cfg, "base")
        command.upgrade(alembic_cfg, "head")
    else:
        print("Database reset cancelled.")


def show_current_revision():
    """Show current database revision."""
    command.current(get_alembic_config())


def show_history():
    """Show migration history."""
    command.history(get_alembic_config())


COMMANDS = {
    "create-tables": (create_tables, "Create tables from the models (development)"),
    "create": (create_migration, "Create new migration [message]"),
    "migrate": (run_migrations, "Run pending migrations"),
    "rollback": (rollback_migration, "Rollback last migration"),
    "reset": (reset_database, "Reset database (WARNING: drops all data)"),
    "current": (show_current_revision, "Show current revision"),
    "history": (show_history, "Show migration history"),
}


def main():
    """Main CLI function."""
    configure_logging()

    if len(sys.argv) < 2:
        print("Usage: python manage_db.py [command]")
        print("Commands:")
        for name, (_, description) in COMMANDS.items():
            print(f"  {name:<14} - {description}")
        return

    command_name = sys.argv[1]
    if command_name not in COMMANDS:
        print(f"Unknown command: {command_name}")
        return

    handler, _ = COMMANDS[command_name]
    if command_name == "create" and len(sys.argv) > 2:
        handler(" ".join(sys.argv[2:]))
    else:
        handler()


if __name__ == "__main__":
    main()
