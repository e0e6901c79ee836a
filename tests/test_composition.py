from __future__ import annotations

from uuid import UUID

import pytest

from cpl_builders import AUDIO_TRACK, CPL_ID, IMAGE_TRACK, MARKER_TRACK, document, segment, track_file, track_uuid
from cpl_check.domain.composition import CompositionPlaylist
from cpl_check.domain.errors import (
    DocumentParseError,
    DuplicateTrackIdError,
    MalformedEditRateError,
    NonPositiveDenominatorError,
    TrackCountMismatchError,
    TypeMismatchError,
    UnknownSequenceKindError,
    UnknownTrackIdError,
)
from cpl_check.domain.models import MarkerResource
from cpl_check.domain.policies import STRICT_VALIDATION_POLICY
from cpl_check.sequence_kinds import SequenceKind

IMAGE = "MainImageSequence"
AUDIO = "MainAudioSequence"


def test_registry_preserves_first_segment_order_without_marker() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment((IMAGE, IMAGE_TRACK, ()), (AUDIO, AUDIO_TRACK, ())))
    )

    assert list(playlist.virtual_tracks) == [track_uuid(IMAGE_TRACK), track_uuid(AUDIO_TRACK)]
    assert playlist.virtual_tracks[track_uuid(IMAGE_TRACK)].kind is SequenceKind.MAIN_IMAGE
    assert playlist.virtual_tracks[track_uuid(AUDIO_TRACK)].kind is SequenceKind.MAIN_AUDIO


def test_marker_track_is_registered_first() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment((IMAGE, IMAGE_TRACK, ()), marker=MARKER_TRACK))
    )

    assert list(playlist.virtual_tracks) == [track_uuid(MARKER_TRACK), track_uuid(IMAGE_TRACK)]
    assert playlist.tracks_of_kind(SequenceKind.MARKER)[0].track_id == track_uuid(MARKER_TRACK)


def test_duplicate_track_in_first_segment_is_rejected() -> None:
    with pytest.raises(DuplicateTrackIdError) as exc:
        CompositionPlaylist.from_document(
            document(segment((IMAGE, IMAGE_TRACK, ()), (AUDIO, IMAGE_TRACK, ())))
        )

    assert exc.value.code == "duplicate_track_id"
    assert str(track_uuid(IMAGE_TRACK)) in exc.value.message


def test_marker_track_id_reused_by_sequence_is_duplicate() -> None:
    with pytest.raises(DuplicateTrackIdError):
        CompositionPlaylist.from_document(
            document(segment((IMAGE, MARKER_TRACK, ()), marker=MARKER_TRACK))
        )


def test_segment_missing_a_track_fails_count_check() -> None:
    with pytest.raises(TrackCountMismatchError) as exc:
        CompositionPlaylist.from_document(
            document(
                segment((IMAGE, IMAGE_TRACK, ()), (AUDIO, AUDIO_TRACK, ())),
                segment((IMAGE, IMAGE_TRACK, ())),
            )
        )

    assert exc.value.code == "track_count_mismatch"
    assert "Segment 1" in exc.value.message


def test_segment_repeating_a_track_fails_count_check() -> None:
    with pytest.raises(TrackCountMismatchError):
        CompositionPlaylist.from_document(
            document(
                segment((IMAGE, IMAGE_TRACK, ()), (AUDIO, AUDIO_TRACK, ())),
                segment((IMAGE, IMAGE_TRACK, ()), (IMAGE, IMAGE_TRACK, ())),
            )
        )


def test_segment_with_unregistered_track_is_rejected() -> None:
    stranger = "urn:uuid:99999999-9999-4999-8999-999999999999"
    with pytest.raises(UnknownTrackIdError) as exc:
        CompositionPlaylist.from_document(
            document(
                segment((IMAGE, IMAGE_TRACK, ())),
                segment((IMAGE, stranger, ())),
            )
        )

    assert exc.value.code == "unknown_track_id"
    assert str(track_uuid(stranger)) in exc.value.message


def test_resources_concatenate_across_segments_and_skip_marker_track() -> None:
    playlist = CompositionPlaylist.from_document(
        document(
            segment((IMAGE, IMAGE_TRACK, (track_file("r1"), track_file("r2"))), marker=MARKER_TRACK),
            segment((IMAGE, IMAGE_TRACK, (track_file("r3"),)), marker=MARKER_TRACK),
        )
    )

    assert dict(playlist.virtual_tracks) == {
        track_uuid(MARKER_TRACK): playlist.virtual_track(track_uuid(MARKER_TRACK)),
        track_uuid(IMAGE_TRACK): playlist.virtual_track(track_uuid(IMAGE_TRACK)),
    }
    assert playlist.virtual_track(track_uuid(MARKER_TRACK)).kind is SequenceKind.MARKER
    assert list(playlist.resources_by_track) == [track_uuid(IMAGE_TRACK)]
    assert [resource.id for resource in playlist.resources_by_track[track_uuid(IMAGE_TRACK)]] == ["r1", "r2", "r3"]


def test_resource_tracks_are_registered_tracks_minus_markers() -> None:
    playlist = CompositionPlaylist.from_document(
        document(
            segment((IMAGE, IMAGE_TRACK, (track_file("r1"),)), (AUDIO, AUDIO_TRACK, ()), marker=MARKER_TRACK),
        )
    )

    non_marker = {track_id for track_id, track in playlist.virtual_tracks.items() if track.kind is not SequenceKind.MARKER}
    assert set(playlist.resources_by_track) == non_marker
    assert playlist.resources_by_track[track_uuid(AUDIO_TRACK)] == ()


def test_non_track_file_resource_in_essence_sequence_is_type_mismatch() -> None:
    stray = MarkerResource(id="m1", intrinsic_duration=24)
    with pytest.raises(TypeMismatchError) as exc:
        CompositionPlaylist.from_document(document(segment((IMAGE, IMAGE_TRACK, (stray,)))))

    assert exc.value.code == "resource_type_mismatch"
    assert "m1" in exc.value.message


def test_views_are_read_only() -> None:
    playlist = CompositionPlaylist.from_document(document(segment((IMAGE, IMAGE_TRACK, (track_file("r1"),)))))

    with pytest.raises(TypeError):
        playlist.virtual_tracks[track_uuid(AUDIO_TRACK)] = None  # type: ignore[index]
    with pytest.raises(TypeError):
        playlist.resources_by_track[track_uuid(IMAGE_TRACK)] += (track_file("r2"),)  # type: ignore[index]


def test_construction_is_repeatable() -> None:
    source = document(
        segment((IMAGE, IMAGE_TRACK, (track_file("r1"),)), marker=MARKER_TRACK),
        segment((IMAGE, IMAGE_TRACK, (track_file("r2"),)), marker=MARKER_TRACK),
    )

    assert CompositionPlaylist.from_document(source) == CompositionPlaylist.from_document(source)


def test_identifier_and_edit_rate_are_exposed() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment((IMAGE, IMAGE_TRACK, ())), edit_rate=(24000, 1001))
    )

    assert playlist.id == UUID(CPL_ID.removeprefix("urn:uuid:"))
    assert (playlist.edit_rate.numerator, playlist.edit_rate.denominator) == (24000, 1001)
    assert str(playlist).startswith(f"=================== CompositionPlaylist : {playlist.id}\n")
    assert "numerator = 24000, denominator = 1001" in str(playlist)


def test_malformed_edit_rate_aborts_construction() -> None:
    with pytest.raises(MalformedEditRateError):
        CompositionPlaylist.from_document(document(segment((IMAGE, IMAGE_TRACK, ())), edit_rate=(24, 1, 1)))


def test_empty_segment_list_is_a_parse_error() -> None:
    with pytest.raises(DocumentParseError):
        CompositionPlaylist.from_document(document())


def test_malformed_track_urn_is_a_parse_error() -> None:
    with pytest.raises(DocumentParseError):
        CompositionPlaylist.from_document(document(segment((IMAGE, "not-a-urn", ()))))


def test_unknown_sequence_tag_is_kept_as_unknown_kind_by_default() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment((IMAGE, IMAGE_TRACK, ()), ("FancySequence", AUDIO_TRACK, ())))
    )

    assert playlist.virtual_track(track_uuid(AUDIO_TRACK)).kind is SequenceKind.UNKNOWN


def test_strict_policy_rejects_unknown_sequence_tag() -> None:
    with pytest.raises(UnknownSequenceKindError) as exc:
        CompositionPlaylist.from_document(
            document(segment((IMAGE, IMAGE_TRACK, ()), ("FancySequence", AUDIO_TRACK, ()))),
            STRICT_VALIDATION_POLICY,
        )

    assert "FancySequence" in exc.value.message


def test_non_positive_denominator_only_rejected_by_strict_policy() -> None:
    source = document(segment((IMAGE, IMAGE_TRACK, ())), edit_rate=(24, 0))

    assert CompositionPlaylist.from_document(source).edit_rate.denominator == 0
    with pytest.raises(NonPositiveDenominatorError):
        CompositionPlaylist.from_document(source, STRICT_VALIDATION_POLICY)


def test_summary_reports_resource_counts() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment((IMAGE, IMAGE_TRACK, (track_file("r1"), track_file("r2"))), marker=MARKER_TRACK))
    )

    summary = playlist.summary()

    assert summary["edit_rate"] == [24, 1]
    assert [track["resource_count"] for track in summary["virtual_tracks"]] == [0, 2]
    assert summary["virtual_tracks"][0]["kind"] == "MarkerSequence"


def test_strict_policy_rejects_unknown_tag_first_seen_in_later_segment() -> None:
    source = document(
        segment((IMAGE, IMAGE_TRACK, ()), (AUDIO, AUDIO_TRACK, ())),
        segment((IMAGE, IMAGE_TRACK, ()), ("FancySequence", AUDIO_TRACK, ())),
    )

    assert CompositionPlaylist.from_document(source).virtual_track(track_uuid(AUDIO_TRACK)).kind is SequenceKind.MAIN_AUDIO
    with pytest.raises(UnknownSequenceKindError) as exc:
        CompositionPlaylist.from_document(source, STRICT_VALIDATION_POLICY)

    assert "Segment 1" in exc.value.message


def test_marker_tag_among_other_sequences_contributes_no_resources() -> None:
    playlist = CompositionPlaylist.from_document(
        document(segment(("MarkerSequence", MARKER_TRACK, ()), (IMAGE, IMAGE_TRACK, (track_file("r1"),))))
    )

    assert playlist.virtual_track(track_uuid(MARKER_TRACK)).kind is SequenceKind.MARKER
    assert list(playlist.resources_by_track) == [track_uuid(IMAGE_TRACK)]
