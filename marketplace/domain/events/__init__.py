"""
Domain events for the marketplace.
Event-driven architecture components for notifications and audit.
"""

from .base import DomainEvent, EventHandler, EventDispatcher, get_event_dispatcher, publish_event
from .profile_events import (
    ProfileEventSet,
    AGENCY_EVENTS,
    MAID_EVENTS,
    SPONSOR_EVENTS,
    VERIFICATION_EVENT_TYPES,
)

__all__ = [
    "DomainEvent",
    "EventHandler",
    "EventDispatcher",
    "get_event_dispatcher",
    "publish_event",
    "ProfileEventSet",
    "AGENCY_EVENTS",
    "MAID_EVENTS",
    "SPONSOR_EVENTS",
    "VERIFICATION_EVENT_TYPES",
]
