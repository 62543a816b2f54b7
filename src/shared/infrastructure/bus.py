"""In-memory event bus implementation."""

from __future__ import annotations

from typing import Dict, List, Type

import structlog

from shared.domain.bus import IEventBus, IEventHandler
from shared.domain.events import DomainEvent

logger = structlog.get_logger(__name__)


class InMemoryEventBus(IEventBus):
    """Process-local bus routing events to subscribed handlers.

    Events are routed by exact class; ``resolve`` maps an event name
    stored in the outbox back to its class so persisted events can be
    replayed through the same handlers.
    """

    def __init__(self) -> None:
        self._handlers: Dict[Type[DomainEvent], List[IEventHandler]] = {}
        self._by_name: Dict[str, Type[DomainEvent]] = {}

    def subscribe(self, event_class: Type[DomainEvent], handler: IEventHandler) -> None:
        handlers = self._handlers.setdefault(event_class, [])
        if handler not in handlers:
            handlers.append(handler)
        self._by_name[event_class.__name__] = event_class

    def resolve(self, event_name: str) -> Type[DomainEvent] | None:
        return self._by_name.get(event_name)

    def publish(self, event: DomainEvent) -> int:
        """Deliver *event* to its handlers; returns how many ran."""
        handlers = self._handlers.get(type(event), [])
        for handler in handlers:
            handler.handle(event)
        logger.debug(
            "event_bus.published",
            event_name=event.event_name,
            handler_count=len(handlers),
        )
        return len(handlers)


# Global bus instance (singleton)

event_bus = InMemoryEventBus()
