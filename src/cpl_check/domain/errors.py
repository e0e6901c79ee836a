"""Error taxonomy for composition playlist ingest and validation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CplValidationError(ValueError):
    code: str
    message: str

    def as_dict(self) -> dict[str, str]:
        return {"code": self.code, "message": self.message}

    def __str__(self) -> str:
        return self.message


class DocumentParseError(CplValidationError):
    """The document could not be read or deserialized into a composition tree."""


class SchemaValidationError(CplValidationError):
    """The document does not conform to the configured XML schema."""


class MalformedEditRateError(CplValidationError):
    """Edit rate did not have exactly a numerator and a denominator."""


class NonPositiveDenominatorError(CplValidationError):
    """Edit rate denominator is zero or negative (opt-in check)."""


class DuplicateTrackIdError(CplValidationError):
    """The first segment registers the same virtual track twice."""


class UnknownTrackIdError(CplValidationError):
    """A segment references a virtual track absent from the first segment."""


class TrackCountMismatchError(CplValidationError):
    """A segment does not reference every registered virtual track."""


class TypeMismatchError(CplValidationError):
    """A sequence holds a resource of a variant it cannot carry."""


class UnknownSequenceKindError(CplValidationError):
    """A sequence tag is not a recognized sequence kind (strict mode)."""
