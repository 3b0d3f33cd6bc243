"""
Event system setup and configuration.
Registers all event handlers with the event dispatcher.
"""

import logging
from typing import Dict, Optional

from marketplace.config import settings
from marketplace.domain.events.base import EventDispatcher, EventHandler, get_event_dispatcher
from marketplace.domain.events.profile_events import VERIFICATION_EVENT_TYPES
from .notification_handlers import AuditLogHandler, VerificationNotificationHandler

logger = logging.getLogger(__name__)


def setup_event_handlers(dispatcher: Optional[EventDispatcher] = None) -> Dict[str, EventHandler]:
    """Set up and register all event handlers. Returns them by name."""

    if dispatcher is None:
        dispatcher = get_event_dispatcher()
        dispatcher.keep_event_log = settings.event_log_enabled

    audit_handler = AuditLogHandler()
    verification_handler = VerificationNotificationHandler()

    # Register global handler for auditing
    dispatcher.register_global_handler(audit_handler)

    # Register specific handlers for the verification workflow of every kind
    for event_type in VERIFICATION_EVENT_TYPES:
        dispatcher.register_handler(event_type, verification_handler)

    logger.info("Event handlers registered successfully")

    # Log registered handlers
    registered = dispatcher.get_registered_handlers()
    for event_type, handlers in registered.items():
        logger.info(f"Event {event_type}: {', '.join(handlers)} handlers")

    return {"audit": audit_handler, "verification": verification_handler}
