"""Public package exports for cpl-check with lazy imports."""

from __future__ import annotations

from importlib import import_module
from typing import Any

__all__ = [
    "CompositionDocument",
    "CompositionPlaylist",
    "CplValidationError",
    "EditRate",
    "SequenceKind",
    "ValidateComposition",
    "ValidationPolicy",
    "VirtualTrack",
    "parse_composition_bytes",
    "read_composition_file",
    "resolve_sequence_kind",
]

_EXPORT_MODULES: dict[str, str] = {
    "CompositionDocument": "cpl_check.domain.models",
    "CompositionPlaylist": "cpl_check.domain.composition",
    "CplValidationError": "cpl_check.domain.errors",
    "EditRate": "cpl_check.domain.models",
    "SequenceKind": "cpl_check.sequence_kinds",
    "ValidateComposition": "cpl_check.application.validation_service",
    "ValidationPolicy": "cpl_check.domain.policies",
    "VirtualTrack": "cpl_check.domain.models",
    "parse_composition_bytes": "cpl_check.ingest",
    "read_composition_file": "cpl_check.ingest",
    "resolve_sequence_kind": "cpl_check.sequence_kinds",
}


def __getattr__(name: str) -> Any:
    if name not in _EXPORT_MODULES:
        raise AttributeError(f"module 'cpl_check' has no attribute {name!r}")

    module = import_module(_EXPORT_MODULES[name])
    value = getattr(module, name)
    globals()[name] = value
    return value
