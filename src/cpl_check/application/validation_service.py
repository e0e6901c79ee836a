"""Application service orchestrating composition playlist validation."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from lxml import etree

from cpl_check.application.event_publisher import EventPublisher, NullEventPublisher
from cpl_check.domain.composition import CompositionPlaylist
from cpl_check.domain.errors import CplValidationError
from cpl_check.domain.events import CompositionRejected, CompositionValidated
from cpl_check.domain.models import CompositionDocument
from cpl_check.domain.policies import DEFAULT_VALIDATION_POLICY, ValidationPolicy
from cpl_check.ingest import DEFAULT_MAX_FILE_SIZE_BYTES, parse_composition_bytes, read_composition_file

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ValidateComposition:
    """Use case that ingests a CPL and builds its validated aggregate."""

    policy: ValidationPolicy = DEFAULT_VALIDATION_POLICY
    event_publisher: EventPublisher = NullEventPublisher()
    schema: etree.XMLSchema | None = None
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES

    def validate_path(self, path: Path, correlation_id: str | None = None) -> CompositionPlaylist:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            document = read_composition_file(
                path,
                schema=self.schema,
                max_file_size_bytes=self.max_file_size_bytes,
            )
        except CplValidationError as error:
            self._publish_rejection(str(path), error, run_correlation_id)
            raise
        return self.validate_document(document, source=str(path), correlation_id=run_correlation_id)

    def validate_bytes(
        self,
        raw_bytes: bytes,
        *,
        filename: str | None = None,
        correlation_id: str | None = None,
    ) -> CompositionPlaylist:
        run_correlation_id = correlation_id or str(uuid4())
        source = filename or "<bytes>"
        try:
            document = parse_composition_bytes(raw_bytes, source=filename, schema=self.schema)
        except CplValidationError as error:
            self._publish_rejection(source, error, run_correlation_id)
            raise
        return self.validate_document(document, source=source, correlation_id=run_correlation_id)

    def validate_document(
        self,
        document: CompositionDocument,
        *,
        source: str = "<document>",
        correlation_id: str | None = None,
    ) -> CompositionPlaylist:
        run_correlation_id = correlation_id or str(uuid4())
        try:
            playlist = CompositionPlaylist.from_document(document, self.policy)
        except CplValidationError as error:
            self._publish_rejection(source, error, run_correlation_id)
            raise

        if playlist.edit_rate.denominator <= 0:
            logger.warning(
                "Composition %s has non-positive edit rate denominator %d; accepted by policy %s.",
                playlist.id,
                playlist.edit_rate.denominator,
                self.policy.policy_id,
            )
        self.event_publisher.publish(
            CompositionValidated(
                correlation_id=run_correlation_id,
                payload_summary={
                    "source": source,
                    "policy_id": self.policy.policy_id,
                    "composition_id": str(playlist.id),
                    "virtual_track_count": len(playlist.virtual_tracks),
                    "segment_count": len(document.segments),
                },
            )
        )
        return playlist

    def _publish_rejection(self, source: str, error: CplValidationError, correlation_id: str) -> None:
        self.event_publisher.publish(
            CompositionRejected(
                correlation_id=correlation_id,
                payload_summary={
                    "source": source,
                    "policy_id": self.policy.policy_id,
                    "error_code": error.code,
                    "error_message": error.message,
                },
            )
        )
