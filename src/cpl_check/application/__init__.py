"""DDD application layer."""

from .event_publisher import EventPublisher, NullEventPublisher
from .validation_service import ValidateComposition

__all__ = ["EventPublisher", "NullEventPublisher", "ValidateComposition"]
