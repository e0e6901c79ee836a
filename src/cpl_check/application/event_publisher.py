"""Event publishing port used by the validation use case."""

from __future__ import annotations

from typing import Protocol

from cpl_check.domain.events import DomainEvent


class EventPublisher(Protocol):
    def publish(self, event: DomainEvent) -> None:
        """Deliver one validation event."""


class NullEventPublisher:
    """Discards events; the default when no publisher is wired in."""

    def publish(self, event: DomainEvent) -> None:  # noqa: ARG002
        return
