"""Helpers that move aggregate domain events into the outbox table."""

from __future__ import annotations

from typing import Any

import structlog

from modules.core.models import OutboxEvent

logger = structlog.get_logger(__name__)


def record_domain_events(entity: Any, topic: str) -> int:
    """Persist every pending event on *entity* as an ``OutboxEvent`` row.

    Must be called inside the transaction that wrote the aggregate so the
    events commit (or roll back) together with it. The aggregate's event
    list is cleared afterwards.
    """
    events = entity.domain_events if hasattr(entity, "domain_events") else []
    for event in events:
        OutboxEvent.objects.create(
            event_type=event.event_name,
            aggregate_id=str(event.aggregate_id),
            payload=event.to_payload(),
            topic=topic,
        )
    if hasattr(entity, "clear_domain_events"):
        entity.clear_domain_events()

    if events:
        logger.debug(
            "outbox.events_recorded",
            topic=topic,
            aggregate_id=str(entity.pk),
            event_count=len(events),
        )
    return len(events)
