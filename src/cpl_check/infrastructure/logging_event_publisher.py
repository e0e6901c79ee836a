"""Logging-backed event publisher."""

from __future__ import annotations

import logging

from cpl_check.domain.events import CompositionRejected, DomainEvent

LOGGER = logging.getLogger("cpl_check.events")


class LoggingEventPublisher:
    """Write validation events to the ``cpl_check.events`` logger.

    Rejections are logged at WARNING so they surface under the default CLI level.
    """

    def publish(self, event: DomainEvent) -> None:
        level = logging.WARNING if isinstance(event, CompositionRejected) else logging.INFO
        LOGGER.log(
            level,
            "%s correlation_id=%s",
            type(event).__name__,
            event.correlation_id,
            extra={
                "event_name": type(event).__name__,
                "correlation_id": event.correlation_id,
                "payload_summary": event.payload_summary,
                "occurred_at": event.occurred_at.isoformat(),
            },
        )
