"""
Event handlers for profile notifications and auditing.
Converts profile domain events into audit entries and owner notifications.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Deque, Dict, List

from marketplace.domain.events.base import EventHandler, DomainEvent
from marketplace.domain.events.profile_events import (
    ProfileRejected,
    ProfileSubmitted,
    ProfileVerified,
    VERIFICATION_EVENT_TYPES,
)


logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """A message queued for the owner of a profile."""

    recipient_user_id: str
    template: str
    subject: str
    context: Dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class AuditLogHandler(EventHandler):
    """Records every profile event as an audit entry."""

    def __init__(self, max_entries: int = 1000):
        self.entries: Deque[Dict[str, Any]] = deque(maxlen=max_entries)

    def can_handle(self, event: DomainEvent) -> bool:
        return True

    async def handle(self, event: DomainEvent) -> None:
        self.entries.append(event.to_dict())
        logger.info(f"Audit: {event.event_type} on {event.aggregate_id} (ID: {event.event_id})")


class VerificationNotificationHandler(EventHandler):
    """Queues owner notifications for submission, verification and rejection."""

    def __init__(self):
        self.pending: List[Notification] = []

    def can_handle(self, event: DomainEvent) -> bool:
        return event.event_type in VERIFICATION_EVENT_TYPES

    async def handle(self, event: DomainEvent) -> None:
        if isinstance(event, ProfileSubmitted):
            notification = Notification(
                recipient_user_id=event.user_id,
                template="profile_submitted",
                subject="Your profile was submitted for verification",
                context={"profile_id": event.profile_id},
            )
        elif isinstance(event, ProfileVerified):
            notification = Notification(
                recipient_user_id=event.user_id,
                template="profile_verified",
                subject="Your profile has been verified",
                context={"profile_id": event.profile_id, "verified_by": event.verified_by},
            )
        elif isinstance(event, ProfileRejected):
            notification = Notification(
                recipient_user_id=event.user_id,
                template="profile_rejected",
                subject="Your profile needs changes",
                context={"profile_id": event.profile_id, "reason": event.reason},
            )
        else:
            logger.warning(f"Unexpected event for verification notifications: {event.event_type}")
            return

        self.pending.append(notification)
        logger.info(f"Queued {notification.template} notification for user {notification.recipient_user_id}")

    def drain(self) -> List[Notification]:
        """Return queued notifications and clear the queue."""
        notifications = list(self.pending)
        self.pending.clear()
        return notifications
