"""DDD domain layer."""

from .composition import CompositionPlaylist
from .errors import (
    CplValidationError,
    DocumentParseError,
    DuplicateTrackIdError,
    MalformedEditRateError,
    NonPositiveDenominatorError,
    SchemaValidationError,
    TrackCountMismatchError,
    TypeMismatchError,
    UnknownSequenceKindError,
    UnknownTrackIdError,
)
from .events import CompositionRejected, CompositionValidated, DomainEvent
from .identifiers import uuid_from_urn
from .models import (
    CompositionDocument,
    EditRate,
    Marker,
    MarkerResource,
    MarkerSequence,
    Resource,
    Segment,
    Sequence,
    TrackFileResource,
    VirtualTrack,
)
from .policies import DEFAULT_VALIDATION_POLICY, STRICT_VALIDATION_POLICY, ValidationPolicy
from .services import build_resource_lists, build_virtual_track_registry, check_segment_consistency

__all__ = [
    "CompositionPlaylist",
    "CompositionDocument",
    "EditRate",
    "Marker",
    "MarkerResource",
    "MarkerSequence",
    "Resource",
    "Segment",
    "Sequence",
    "TrackFileResource",
    "VirtualTrack",
    "CplValidationError",
    "DocumentParseError",
    "SchemaValidationError",
    "MalformedEditRateError",
    "NonPositiveDenominatorError",
    "DuplicateTrackIdError",
    "UnknownTrackIdError",
    "TrackCountMismatchError",
    "TypeMismatchError",
    "UnknownSequenceKindError",
    "DomainEvent",
    "CompositionValidated",
    "CompositionRejected",
    "ValidationPolicy",
    "DEFAULT_VALIDATION_POLICY",
    "STRICT_VALIDATION_POLICY",
    "uuid_from_urn",
    "build_virtual_track_registry",
    "check_segment_consistency",
    "build_resource_lists",
]
