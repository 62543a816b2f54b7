"""Asynchronous tasks for the core module."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict
from uuid import UUID

import structlog
from celery import shared_task
from django.conf import settings

from modules.core.models import OutboxEvent
from shared.domain.events import DomainEvent
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


class UnknownEventType(Exception):
    """An outbox row names an event class nobody subscribed."""


def rebuild_event(event_type: str, payload: Dict[str, Any]) -> DomainEvent:
    """Turn a stored outbox payload back into its ``DomainEvent`` class."""
    event_class = event_bus.resolve(event_type)
    if event_class is None:
        raise UnknownEventType(f"No handler registered for {event_type}.")

    data = {key: value for key, value in payload.items() if key != "event_name"}
    data["aggregate_id"] = UUID(data["aggregate_id"])
    if "event_id" in data:
        data["event_id"] = UUID(data["event_id"])
    if "occurred_on" in data:
        data["occurred_on"] = datetime.fromisoformat(data["occurred_on"])
    for key, value in data.items():
        # Sequence fields are declared as tuples on frozen events.
        if isinstance(value, list):
            data[key] = tuple(value)
    return event_class(**data)


@shared_task(name="core.dispatch_outbox_events")
def dispatch_outbox_events(batch_size: int | None = None) -> Dict[str, int]:
    """Replay pending outbox rows through the in-process event bus.

    Rows are handled one at a time in creation order; a failing row is
    marked ``FAILED`` and does not stop the rest of the batch. Failed rows
    are picked up again until ``retry_count`` reaches ``OUTBOX_MAX_RETRIES``.
    """
    limit = batch_size or settings.OUTBOX_BATCH_SIZE
    pending = list(
        OutboxEvent.objects.dispatchable(settings.OUTBOX_MAX_RETRIES)[:limit]
    )

    published = failed = 0
    for outbox_event in pending:
        log = logger.bind(
            outbox_event_id=str(outbox_event.id),
            event_type=outbox_event.event_type,
            aggregate_id=outbox_event.aggregate_id,
        )
        try:
            event = rebuild_event(outbox_event.event_type, outbox_event.payload)
            event_bus.publish(event)
        except Exception as exc:  # noqa: BLE001
            outbox_event.mark_as_failed(str(exc))
            log.warning("outbox.dispatch_failed", error=str(exc))
            failed += 1
            continue
        outbox_event.mark_as_published()
        published += 1

    logger.info("outbox.dispatched", published=published, failed=failed)
    return {"published": published, "failed": failed}
