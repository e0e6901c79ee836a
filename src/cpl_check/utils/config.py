from __future__ import annotations

import json
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from cpl_check.domain.policies import ValidationPolicy
from cpl_check.ingest import DEFAULT_MAX_FILE_SIZE_BYTES

_TRUTHY = {"1", "true", "yes", "on"}


class ValidatorConfig(BaseModel):
    policy_id: str = "cpl-structure-configured"
    reject_unknown_sequence_kinds: bool = False
    require_positive_denominator: bool = False
    schema_path: Path | None = None
    max_file_size_bytes: int = Field(DEFAULT_MAX_FILE_SIZE_BYTES, gt=0)

    @field_validator("schema_path")
    @classmethod
    def _validate_schema_path(cls, value: Path | None) -> Path | None:
        if value is None:
            return value
        if value.suffix.lower() not in {".xsd", ".xml"}:
            raise ValueError("schema_path must point to an .xsd (or .xml) schema file.")
        return value

    def to_policy(self) -> ValidationPolicy:
        return ValidationPolicy(
            policy_id=self.policy_id,
            reject_unknown_sequence_kinds=self.reject_unknown_sequence_kinds,
            require_positive_denominator=self.require_positive_denominator,
        )


def load_validator_config(path: Path) -> ValidatorConfig:
    data = _load_config_data(path)
    return ValidatorConfig.model_validate(data)


def config_from_env(base: ValidatorConfig | None = None) -> ValidatorConfig:
    """Apply ``CPL_CHECK_*`` environment overrides on top of ``base``."""

    config = base or ValidatorConfig()
    updates: dict[str, object] = {}
    strict = os.getenv("CPL_CHECK_STRICT")
    if strict is not None:
        enabled = strict.lower() in _TRUTHY
        updates["reject_unknown_sequence_kinds"] = enabled
        updates["require_positive_denominator"] = enabled
    schema_path = os.getenv("CPL_CHECK_SCHEMA_PATH")
    if schema_path:
        updates["schema_path"] = Path(schema_path)
    if not updates:
        return config
    return ValidatorConfig.model_validate({**config.model_dump(), **updates})


def _load_config_data(path: Path) -> dict:
    if path.suffix.lower() in {".yaml", ".yml"}:
        with path.open("r", encoding="utf-8") as handle:
            return yaml.safe_load(handle) or {}

    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
