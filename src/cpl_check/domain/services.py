"""Domain services that contain the structural rules of a composition playlist.

Each function is a single pass over the parsed segments. They build plain local
dicts and lists; freezing into read-only views is left to the aggregate.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from collections.abc import Sequence as SequenceABC
from uuid import UUID

from cpl_check.domain.errors import (
    DuplicateTrackIdError,
    TrackCountMismatchError,
    TypeMismatchError,
    UnknownSequenceKindError,
    UnknownTrackIdError,
)
from cpl_check.domain.identifiers import uuid_from_urn
from cpl_check.domain.models import Segment, TrackFileResource, VirtualTrack
from cpl_check.domain.policies import DEFAULT_VALIDATION_POLICY, ValidationPolicy
from cpl_check.sequence_kinds import SequenceKind, resolve_sequence_kind


def _segment_track_refs(
    segment: Segment,
    policy: ValidationPolicy,
    segment_index: int,
) -> Iterator[tuple[UUID, SequenceKind]]:
    """Yield (track id, kind) for the marker sequence, then the other sequences in document order."""

    if segment.marker_sequence is not None:
        yield uuid_from_urn(segment.marker_sequence.track_id), SequenceKind.MARKER
    for sequence in segment.sequences:
        kind = resolve_sequence_kind(sequence.tag_name)
        if kind is SequenceKind.UNKNOWN and policy.reject_unknown_sequence_kinds:
            raise UnknownSequenceKindError(
                "unknown_sequence_kind",
                f"Segment {segment_index} contains unrecognized sequence element '{sequence.tag_name}'.",
            )
        yield uuid_from_urn(sequence.track_id), kind


def build_virtual_track_registry(
    first_segment: Segment,
    policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY,
) -> dict[UUID, VirtualTrack]:
    """Derive the ordered virtual track registry from the first segment."""

    registry: dict[UUID, VirtualTrack] = {}
    for track_id, kind in _segment_track_refs(first_segment, policy, 0):
        if track_id in registry:
            raise DuplicateTrackIdError(
                "duplicate_track_id",
                f"Virtual track {track_id} is referenced more than once in the first segment.",
            )
        registry[track_id] = VirtualTrack(track_id=track_id, kind=kind)
    return registry


def check_segment_consistency(
    segments: SequenceABC[Segment],
    registry: Mapping[UUID, VirtualTrack],
    policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY,
) -> None:
    """Ensure every segment references exactly the registered virtual tracks."""

    for segment_index, segment in enumerate(segments):
        track_ids: set[UUID] = set()
        for track_id, _kind in _segment_track_refs(segment, policy, segment_index):
            if track_id not in registry:
                raise UnknownTrackIdError(
                    "unknown_track_id",
                    f"Segment {segment_index} references virtual track {track_id} "
                    "which is not present in the first segment.",
                )
            track_ids.add(track_id)

        if len(track_ids) != len(registry):
            raise TrackCountMismatchError(
                "track_count_mismatch",
                f"Segment {segment_index} references {len(track_ids)} distinct virtual tracks, "
                f"expected {len(registry)}.",
            )


def build_resource_lists(segments: SequenceABC[Segment]) -> dict[UUID, tuple[TrackFileResource, ...]]:
    """Concatenate track file resources per virtual track in segment then document order."""

    accumulators: dict[UUID, list[TrackFileResource]] = {}
    for segment in segments:
        for sequence in segment.sequences:
            if resolve_sequence_kind(sequence.tag_name) is SequenceKind.MARKER:
                continue
            track_id = uuid_from_urn(sequence.track_id)
            resources = accumulators.setdefault(track_id, [])
            for resource in sequence.resources:
                if not isinstance(resource, TrackFileResource):
                    raise TypeMismatchError(
                        "resource_type_mismatch",
                        f"Virtual track {track_id} holds resource {resource.id} of type "
                        f"{type(resource).__name__}; expected TrackFileResource.",
                    )
                resources.append(resource)

    return {track_id: tuple(resources) for track_id, resources in accumulators.items()}
