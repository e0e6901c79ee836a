"""Domain value objects representing validation policies."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationPolicy:
    """Optional structural checks layered on top of the default validation rules."""

    policy_id: str
    reject_unknown_sequence_kinds: bool = False
    require_positive_denominator: bool = False
    policy_version: str = "v1"


DEFAULT_VALIDATION_POLICY = ValidationPolicy(policy_id="cpl-structure-default", policy_version="v1")
STRICT_VALIDATION_POLICY = ValidationPolicy(
    policy_id="cpl-structure-strict",
    reject_unknown_sequence_kinds=True,
    require_positive_denominator=True,
    policy_version="v1",
)
