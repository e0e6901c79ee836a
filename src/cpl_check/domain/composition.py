"""Composition playlist aggregate."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any
from uuid import UUID

from cpl_check.domain.errors import DocumentParseError, NonPositiveDenominatorError
from cpl_check.domain.identifiers import uuid_from_urn
from cpl_check.domain.models import CompositionDocument, EditRate, TrackFileResource, VirtualTrack
from cpl_check.domain.policies import DEFAULT_VALIDATION_POLICY, ValidationPolicy
from cpl_check.domain.services import (
    build_resource_lists,
    build_virtual_track_registry,
    check_segment_consistency,
)
from cpl_check.sequence_kinds import SequenceKind


@dataclass(frozen=True, slots=True)
class CompositionPlaylist:
    """Validated, read-only view of a composition playlist.

    Instances are only produced by :meth:`from_document`, which either returns a
    fully consistent aggregate or raises. ``virtual_tracks`` keeps the order in
    which tracks appear in the first segment. ``resources_by_track`` has an entry
    only for tracks bound to at least one non-marker sequence.
    """

    id: UUID
    edit_rate: EditRate
    virtual_tracks: Mapping[UUID, VirtualTrack]
    resources_by_track: Mapping[UUID, tuple[TrackFileResource, ...]]
    content_title: str | None = None

    @classmethod
    def from_document(
        cls,
        document: CompositionDocument,
        policy: ValidationPolicy | None = None,
    ) -> CompositionPlaylist:
        policy = policy or DEFAULT_VALIDATION_POLICY
        if not document.segments:
            raise DocumentParseError(
                "document_parse_error",
                "Composition playlist does not contain any segments.",
            )

        registry = build_virtual_track_registry(document.segments[0], policy)
        check_segment_consistency(document.segments, registry, policy)
        resource_lists = build_resource_lists(document.segments)

        playlist_id = uuid_from_urn(document.id)
        edit_rate = EditRate.from_numbers(document.edit_rate)
        if policy.require_positive_denominator and edit_rate.denominator <= 0:
            raise NonPositiveDenominatorError(
                "non_positive_denominator",
                f"Edit rate denominator must be positive, found {edit_rate.denominator}.",
            )

        return cls(
            id=playlist_id,
            edit_rate=edit_rate,
            virtual_tracks=MappingProxyType(registry),
            resources_by_track=MappingProxyType(resource_lists),
            content_title=document.content_title,
        )

    def virtual_track(self, track_id: UUID) -> VirtualTrack | None:
        return self.virtual_tracks.get(track_id)

    def tracks_of_kind(self, kind: SequenceKind) -> tuple[VirtualTrack, ...]:
        return tuple(track for track in self.virtual_tracks.values() if track.kind is kind)

    def summary(self) -> dict[str, Any]:
        """Plain payload describing the playlist for reports and events."""

        return {
            "id": str(self.id),
            "content_title": self.content_title,
            "edit_rate": [self.edit_rate.numerator, self.edit_rate.denominator],
            "virtual_tracks": [
                {
                    "track_id": str(track.track_id),
                    "kind": track.kind.value,
                    "resource_count": len(self.resources_by_track.get(track.track_id, ())),
                }
                for track in self.virtual_tracks.values()
            ],
        }

    def __str__(self) -> str:
        return f"=================== CompositionPlaylist : {self.id}\n{self.edit_rate}"
