"""
Base classes for domain events and event handling.
Provides the foundation for event-driven architecture.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional
import uuid


logger = logging.getLogger(__name__)

_ENVELOPE_FIELDS = frozenset({"aggregate_id", "occurred_at", "event_id"})


def _event_timestamp() -> datetime:
    return datetime.now(timezone.utc)


def _to_primitive(value: Any) -> Any:
    """Render payload values as JSON-safe primitives."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_to_primitive(item) for item in value]
    if isinstance(value, dict):
        return {key: _to_primitive(item) for key, item in value.items()}
    return value


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    An event is an immutable record of something that happened to an
    aggregate. Subclasses declare their payload as dataclass fields and set
    ``event_type``, the stable name subscribers listen to.
    """

    event_type: ClassVar[str] = "DomainEvent"

    aggregate_id: str
    occurred_at: datetime = field(default_factory=_event_timestamp, kw_only=True)
    event_id: str = field(default_factory=lambda: str(uuid.uuid4()), kw_only=True)

    @property
    def type(self) -> str:
        """Return the name of the event."""
        return self.event_type

    @property
    def payload(self) -> Dict[str, Any]:
        """Event-specific data, without the envelope."""
        return self._get_event_data()

    def _get_event_data(self) -> Dict[str, Any]:
        return {
            f.name: _to_primitive(getattr(self, f.name))
            for f in fields(self)
            if f.name not in _ENVELOPE_FIELDS
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert event to dictionary for serialization."""
        return {
            "event_id": self.event_id,
            "type": self.event_type,
            "aggregate_id": self.aggregate_id,
            "occurred_at": self.occurred_at.isoformat(),
            "payload": self._get_event_data(),
        }


class EventHandler(ABC):
    """Base class for event handlers."""

    @abstractmethod
    async def handle(self, event: DomainEvent) -> None:
        """Handle a domain event."""
        pass

    @abstractmethod
    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can process the given event."""
        pass


class EventDispatcher:
    """Dispatches domain events to registered handlers."""

    def __init__(self, keep_event_log: bool = True):
        """Initialize event dispatcher."""
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._global_handlers: List[EventHandler] = []
        self._event_log: List[Dict[str, Any]] = []
        self._keep_event_log = keep_event_log

    @property
    def keep_event_log(self) -> bool:
        return self._keep_event_log

    @keep_event_log.setter
    def keep_event_log(self, value: bool) -> None:
        self._keep_event_log = value

    def register_handler(self, event_type: str, handler: EventHandler) -> None:
        """Register an event handler for specific event type."""
        self._handlers.setdefault(event_type, []).append(handler)
        logger.info(f"Registered handler {handler.__class__.__name__} for {event_type}")

    def register_global_handler(self, handler: EventHandler) -> None:
        """Register a handler that receives all events."""
        self._global_handlers.append(handler)
        logger.info(f"Registered global handler {handler.__class__.__name__}")

    async def dispatch(self, event: DomainEvent) -> None:
        """Dispatch event to all registered handlers."""
        if self._keep_event_log:
            self._event_log.append(event.to_dict())

        logger.info(f"Dispatching event: {event.event_type} (ID: {event.event_id})")

        specific_handlers = self._handlers.get(event.event_type, [])
        all_handlers = specific_handlers + [
            h for h in self._global_handlers
            if h.can_handle(event)
        ]

        if not all_handlers:
            logger.warning(f"No handlers registered for event: {event.event_type}")
            return

        await asyncio.gather(*(self._safe_handle(handler, event) for handler in all_handlers))

        logger.info(f"Successfully dispatched {event.event_type} to {len(all_handlers)} handler(s)")

    async def dispatch_all(self, events: List[DomainEvent]) -> None:
        """Dispatch events one by one, preserving their order."""
        for event in events:
            await self.dispatch(event)

    async def _safe_handle(self, handler: EventHandler, event: DomainEvent) -> None:
        """Execute one handler; a failing handler must not affect the others."""
        try:
            await handler.handle(event)
            logger.debug(f"Handler {handler.__class__.__name__} processed {event.event_type}")
        except Exception as e:
            logger.error(
                f"Handler {handler.__class__.__name__} failed to process "
                f"{event.event_type}: {str(e)}"
            )

    def get_event_log(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Get recent events from the log, newest first."""
        events = sorted(self._event_log, key=lambda x: x["occurred_at"], reverse=True)
        return events[:limit] if limit else events

    def clear_event_log(self) -> None:
        """Clear the event log."""
        self._event_log.clear()

    def get_registered_handlers(self) -> Dict[str, List[str]]:
        """Get information about registered handlers."""
        result = {
            event_type: [h.__class__.__name__ for h in handlers]
            for event_type, handlers in self._handlers.items()
        }
        if self._global_handlers:
            result["global"] = [h.__class__.__name__ for h in self._global_handlers]
        return result


# Singleton instance
_event_dispatcher = None


def get_event_dispatcher() -> EventDispatcher:
    """Get singleton event dispatcher instance."""
    global _event_dispatcher
    if _event_dispatcher is None:
        _event_dispatcher = EventDispatcher()
    return _event_dispatcher


async def publish_event(event: DomainEvent) -> None:
    """Publish a domain event."""
    dispatcher = get_event_dispatcher()
    await dispatcher.dispatch(event)
