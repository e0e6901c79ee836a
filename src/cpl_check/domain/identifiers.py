"""URN-qualified identifier normalization."""

from __future__ import annotations

from uuid import UUID

from cpl_check.domain.errors import DocumentParseError

_URN_UUID_PREFIX = "urn:uuid:"


def uuid_from_urn(value: str) -> UUID:
    """Normalize a ``urn:uuid:`` qualified identifier into a :class:`UUID`."""

    candidate = (value or "").strip()
    if not candidate.lower().startswith(_URN_UUID_PREFIX):
        raise DocumentParseError(
            "document_parse_error",
            f"Identifier {value!r} is not a URN-qualified UUID (expected '{_URN_UUID_PREFIX}<uuid>').",
        )
    try:
        return UUID(candidate[len(_URN_UUID_PREFIX) :])
    except ValueError as exc:
        raise DocumentParseError(
            "document_parse_error",
            f"Identifier {value!r} does not contain a valid UUID.",
        ) from exc
