"""Sequence kind enumeration and tag-name resolution helpers."""

from __future__ import annotations

from enum import Enum


class SequenceKind(str, Enum):
    """Sequence roles recognized in a composition playlist segment."""

    MARKER = "MarkerSequence"
    MAIN_IMAGE = "MainImageSequence"
    MAIN_AUDIO = "MainAudioSequence"
    SUBTITLES = "SubtitlesSequence"
    HEARING_IMPAIRED_CAPTIONS = "HearingImpairedCaptionsSequence"
    VISUALLY_IMPAIRED_TEXT = "VisuallyImpairedTextSequence"
    COMMENTARY = "CommentarySequence"
    KARAOKE = "KaraokeSequence"
    ANCILLARY_DATA = "AncillaryDataSequence"
    UNKNOWN = "Unknown"


_KINDS_BY_TAG: dict[str, SequenceKind] = {
    member.value: member for member in SequenceKind if member is not SequenceKind.UNKNOWN
}


def local_name(tag_name: str) -> str:
    """Strip a Clark-notation namespace or a prefix from an element name."""

    if tag_name.startswith("{"):
        return tag_name.rpartition("}")[2]
    return tag_name.rpartition(":")[2]


def resolve_sequence_kind(tag_name: str) -> SequenceKind:
    """Resolve a sequence element name to its kind; unrecognized names map to UNKNOWN."""

    return _KINDS_BY_TAG.get(local_name(tag_name.strip()), SequenceKind.UNKNOWN)


def sequence_kind_values() -> tuple[str, ...]:
    """Return recognized sequence tag names in declaration order."""

    return tuple(_KINDS_BY_TAG)
