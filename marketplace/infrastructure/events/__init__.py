"""
Infrastructure event handlers.
Handles profile domain events and triggers audit entries and notifications.
"""

from .notification_handlers import AuditLogHandler, Notification, VerificationNotificationHandler
from .event_setup import setup_event_handlers

__all__ = [
    "AuditLogHandler",
    "Notification",
    "VerificationNotificationHandler",
    "setup_event_handlers",
]
