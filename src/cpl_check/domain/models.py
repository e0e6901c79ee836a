"""Domain models for composition playlist documents and their virtual tracks."""

from __future__ import annotations

from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from typing import Union
from uuid import UUID

from cpl_check.domain.errors import MalformedEditRateError
from cpl_check.sequence_kinds import SequenceKind


@dataclass(frozen=True, slots=True)
class EditRate:
    """Exact frame rate held as a numerator/denominator pair."""

    numerator: int
    denominator: int

    @classmethod
    def from_numbers(cls, numbers: SequenceABC[int]) -> EditRate:
        """Build an edit rate from exactly two numbers: numerator then denominator."""

        values = list(numbers)
        if len(values) != 2:
            raise MalformedEditRateError(
                "malformed_edit_rate",
                "Input list is expected to contain 2 numbers representing numerator and denominator "
                f"respectively, found {len(values)} numbers in list {values}",
            )
        if not all(isinstance(value, int) and not isinstance(value, bool) for value in values):
            raise MalformedEditRateError(
                "malformed_edit_rate",
                f"Edit rate components must be integers, found {values}",
            )
        return cls(numerator=values[0], denominator=values[1])

    def __str__(self) -> str:
        return (
            "=================== EditRate =====================\n"
            f"numerator = {self.numerator}, denominator = {self.denominator}\n"
        )


@dataclass(frozen=True, slots=True)
class VirtualTrack:
    """A logical track persisting across segments, identified by its track id."""

    track_id: UUID
    kind: SequenceKind


@dataclass(frozen=True, slots=True)
class Marker:
    label: str
    offset: int


@dataclass(frozen=True, slots=True)
class TrackFileResource:
    """Reference to a span of an essence track file."""

    id: str
    track_file_id: str
    intrinsic_duration: int
    entry_point: int | None = None
    source_duration: int | None = None
    repeat_count: int | None = None
    source_encoding: str | None = None
    edit_rate: tuple[int, ...] | None = None


@dataclass(frozen=True, slots=True)
class MarkerResource:
    """Reference to a run of cue markers carried by a marker sequence."""

    id: str
    intrinsic_duration: int
    entry_point: int | None = None
    source_duration: int | None = None
    repeat_count: int | None = None
    markers: tuple[Marker, ...] = ()


Resource = Union[TrackFileResource, MarkerResource]


@dataclass(frozen=True, slots=True)
class MarkerSequence:
    track_id: str
    resources: tuple[Resource, ...] = ()


@dataclass(frozen=True, slots=True)
class Sequence:
    """A typed sequence element other than the marker sequence."""

    tag_name: str
    track_id: str
    resources: tuple[Resource, ...] = ()


@dataclass(frozen=True, slots=True)
class Segment:
    sequences: tuple[Sequence, ...] = ()
    marker_sequence: MarkerSequence | None = None
    id: str | None = None


@dataclass(frozen=True, slots=True)
class CompositionDocument:
    """Parsed composition playlist tree as delivered by the ingest layer."""

    id: str
    edit_rate: tuple[int, ...]
    segments: tuple[Segment, ...]
    content_title: str | None = None
