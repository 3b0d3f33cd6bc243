"""
Logging setup for processes embedding the profile services.
"""

import logging
from typing import Optional

from marketplace.config import Settings, get_settings


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Configure root logging from settings. DEBUG wins over log_level."""
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    # SQL is only logged when explicitly requested
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.database_echo else logging.WARNING
    )
