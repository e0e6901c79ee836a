"""Composition playlist ingest.

Reads CPL XML, optionally checks it against an XSD schema set, and deserializes
it into the :mod:`cpl_check.domain.models` tree consumed by the structural
validator. Element lookups use local names so both the 2013 and later SMPTE
namespaces are accepted.
"""

from __future__ import annotations

from pathlib import Path

from lxml import etree

from cpl_check.domain.errors import DocumentParseError, SchemaValidationError
from cpl_check.domain.models import (
    CompositionDocument,
    Marker,
    MarkerResource,
    MarkerSequence,
    Resource,
    Segment,
    Sequence,
    TrackFileResource,
)

DEFAULT_MAX_FILE_SIZE_BYTES = 50 * 1024 * 1024

_XSI_TYPE = "{http://www.w3.org/2001/XMLSchema-instance}type"
_MARKER_SEQUENCE = "MarkerSequence"


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)


def load_schema(schema_path: Path) -> etree.XMLSchema:
    """Compile an XSD entry file; imported schemas resolve relative to it."""

    try:
        if not schema_path.is_file():
            raise SchemaValidationError("schema_unavailable", f"Schema file not found: {schema_path}")
        return etree.XMLSchema(etree.parse(str(schema_path)))
    except (OSError, etree.XMLSyntaxError, etree.XMLSchemaParseError) as exc:
        raise SchemaValidationError("schema_unavailable", f"Schema file {schema_path} cannot be loaded: {exc}") from exc


def read_composition_file(
    path: Path,
    *,
    schema: etree.XMLSchema | None = None,
    max_file_size_bytes: int = DEFAULT_MAX_FILE_SIZE_BYTES,
) -> CompositionDocument:
    try:
        if not path.exists() or not path.is_file():
            raise DocumentParseError("file_not_found", f"Composition playlist not found: {path}")
        size_bytes = path.stat().st_size
    except OSError as exc:
        raise DocumentParseError("file_unreadable", f"Composition playlist is unreadable: {path}") from exc
    if size_bytes > max_file_size_bytes:
        raise DocumentParseError(
            "file_too_large",
            f"Composition playlist exceeds max size limit of {max_file_size_bytes} bytes.",
        )

    try:
        raw_bytes = path.read_bytes()
    except OSError as exc:
        raise DocumentParseError("file_unreadable", f"Composition playlist is unreadable: {path}") from exc

    return parse_composition_bytes(raw_bytes, source=path.name, schema=schema)


def parse_composition_bytes(
    raw_bytes: bytes,
    *,
    source: str | None = None,
    schema: etree.XMLSchema | None = None,
) -> CompositionDocument:
    label = source or "<bytes>"
    if not raw_bytes:
        raise DocumentParseError("empty_file", f"{label}: composition playlist is empty.")

    try:
        root = etree.fromstring(raw_bytes, parser=_parser())
    except etree.XMLSyntaxError as exc:
        raise DocumentParseError("document_parse_error", f"{label}: XML parse error: {exc}") from exc

    if schema is not None:
        _validate_schema(root, schema, label)

    if etree.QName(root).localname != "CompositionPlaylist":
        raise DocumentParseError(
            "document_parse_error",
            f"{label}: root element is '{etree.QName(root).localname}', expected 'CompositionPlaylist'.",
        )
    return _parse_composition(root)


def _validate_schema(root: etree._Element, schema: etree.XMLSchema, label: str) -> None:
    try:
        schema.assertValid(root)
    except etree.DocumentInvalid as exc:
        errors = [f"line {entry.line}: {entry.message}" for entry in exc.error_log]
    else:
        return
    raise SchemaValidationError(
        "schema_invalid",
        f"{label}: schema validation failed: " + "; ".join(errors or ["unknown schema error"]),
    )


def _elements(parent: etree._Element) -> list[etree._Element]:
    return [child for child in parent if isinstance(child.tag, str)]


def _children(parent: etree._Element, name: str) -> list[etree._Element]:
    return [child for child in _elements(parent) if etree.QName(child).localname == name]


def _child(parent: etree._Element, name: str, *, required: bool = True) -> etree._Element | None:
    matches = _children(parent, name)
    if not matches:
        if required:
            raise DocumentParseError(
                "document_parse_error",
                f"Element '{etree.QName(parent).localname}' (line {parent.sourceline}) is missing '{name}'.",
            )
        return None
    return matches[0]


def _text(parent: etree._Element, name: str, *, required: bool = True) -> str | None:
    element = _child(parent, name, required=required)
    if element is None:
        return None
    return (element.text or "").strip()


def _int(parent: etree._Element, name: str, *, required: bool = True) -> int | None:
    value = _text(parent, name, required=required)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise DocumentParseError(
            "document_parse_error",
            f"Element '{name}' under '{etree.QName(parent).localname}' is not an integer: {value!r}.",
        ) from exc


def _int_list(parent: etree._Element, name: str, *, required: bool = True) -> tuple[int, ...] | None:
    value = _text(parent, name, required=required)
    if value is None:
        return None
    try:
        return tuple(int(token) for token in value.split())
    except ValueError as exc:
        raise DocumentParseError(
            "document_parse_error",
            f"Element '{name}' is not a whitespace separated integer list: {value!r}.",
        ) from exc


def _parse_composition(root: etree._Element) -> CompositionDocument:
    segment_list = _child(root, "SegmentList")
    return CompositionDocument(
        id=_text(root, "Id"),
        edit_rate=_int_list(root, "EditRate"),
        segments=tuple(_parse_segment(segment) for segment in _children(segment_list, "Segment")),
        content_title=_text(root, "ContentTitle", required=False),
    )


def _parse_segment(element: etree._Element) -> Segment:
    marker_sequence: MarkerSequence | None = None
    sequences: list[Sequence] = []
    for child in _elements(_child(element, "SequenceList")):
        name = etree.QName(child).localname
        track_id = _text(child, "TrackId")
        resources = _parse_resources(child)
        if name == _MARKER_SEQUENCE and marker_sequence is None:
            marker_sequence = MarkerSequence(track_id=track_id, resources=resources)
        elif name == _MARKER_SEQUENCE:
            raise DocumentParseError(
                "document_parse_error",
                f"Segment (line {element.sourceline}) contains more than one MarkerSequence.",
            )
        else:
            sequences.append(Sequence(tag_name=name, track_id=track_id, resources=resources))

    return Segment(
        id=_text(element, "Id", required=False),
        marker_sequence=marker_sequence,
        sequences=tuple(sequences),
    )


def _parse_resources(sequence: etree._Element) -> tuple[Resource, ...]:
    resource_list = _child(sequence, "ResourceList", required=False)
    if resource_list is None:
        return ()
    return tuple(_parse_resource(resource) for resource in _children(resource_list, "Resource"))


def _resource_type(element: etree._Element) -> str:
    declared = element.get(_XSI_TYPE)
    if declared:
        return declared.rpartition(":")[2]
    if _child(element, "TrackFileId", required=False) is not None:
        return "TrackFileResourceType"
    return "MarkerResourceType"


def _parse_resource(element: etree._Element) -> Resource:
    resource_type = _resource_type(element)
    if resource_type == "TrackFileResourceType":
        return TrackFileResource(
            id=_text(element, "Id"),
            track_file_id=_text(element, "TrackFileId"),
            intrinsic_duration=_int(element, "IntrinsicDuration"),
            entry_point=_int(element, "EntryPoint", required=False),
            source_duration=_int(element, "SourceDuration", required=False),
            repeat_count=_int(element, "RepeatCount", required=False),
            source_encoding=_text(element, "SourceEncoding", required=False),
            edit_rate=_int_list(element, "EditRate", required=False),
        )
    if resource_type == "MarkerResourceType":
        return MarkerResource(
            id=_text(element, "Id"),
            intrinsic_duration=_int(element, "IntrinsicDuration"),
            entry_point=_int(element, "EntryPoint", required=False),
            source_duration=_int(element, "SourceDuration", required=False),
            repeat_count=_int(element, "RepeatCount", required=False),
            markers=tuple(
                Marker(label=_text(marker, "Label"), offset=_int(marker, "Offset"))
                for marker in _children(element, "Marker")
            ),
        )
    raise DocumentParseError(
        "document_parse_error",
        f"Resource (line {element.sourceline}) has unsupported type '{resource_type}'.",
    )
