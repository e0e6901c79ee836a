"""Domain event contracts for composition validation workflows."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


@dataclass(frozen=True, slots=True)
class DomainEvent:
    """Base domain event emitted by application services."""

    correlation_id: str
    payload_summary: dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(tz=timezone.utc))


@dataclass(frozen=True, slots=True)
class CompositionValidated(DomainEvent):
    """A composition playlist was parsed and passed structural validation."""


@dataclass(frozen=True, slots=True)
class CompositionRejected(DomainEvent):
    """A composition playlist failed parsing or structural validation."""
