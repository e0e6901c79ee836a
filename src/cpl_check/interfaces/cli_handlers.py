"""CLI-facing handlers that delegate to the validation service."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from uuid import uuid4

import yaml
from pydantic import ValidationError

from cpl_check.application.validation_service import ValidateComposition
from cpl_check.domain.composition import CompositionPlaylist
from cpl_check.domain.errors import CplValidationError
from cpl_check.infrastructure.logging_event_publisher import LoggingEventPublisher
from cpl_check.ingest import load_schema
from cpl_check.utils.config import ValidatorConfig, config_from_env, load_validator_config

_event_publisher = LoggingEventPublisher()


def resolve_config(
    config_path: Path | None,
    *,
    strict: bool = False,
    schema_path: Path | None = None,
) -> ValidatorConfig:
    """Merge file config, environment overrides and command line flags, in that order."""

    config = load_validator_config(config_path) if config_path is not None else ValidatorConfig()
    config = config_from_env(config)
    updates: dict[str, object] = {}
    if strict:
        updates["reject_unknown_sequence_kinds"] = True
        updates["require_positive_denominator"] = True
    if schema_path is not None:
        updates["schema_path"] = schema_path
    if updates:
        config = ValidatorConfig.model_validate({**config.model_dump(), **updates})
    return config


def build_validation_service(config: ValidatorConfig) -> ValidateComposition:
    return ValidateComposition(
        policy=config.to_policy(),
        event_publisher=_event_publisher,
        schema=load_schema(config.schema_path) if config.schema_path is not None else None,
        max_file_size_bytes=config.max_file_size_bytes,
    )


def validate_paths(
    paths: list[Path],
    service: ValidateComposition,
    concurrency_limit: int = 4,
) -> tuple[list[dict[str, object]], dict[str, int]]:
    if not paths:
        raise ValueError("No composition playlist paths were provided.")

    def _process(path: Path, item_index: int) -> dict[str, object]:
        correlation_id = str(uuid4())
        try:
            playlist = service.validate_path(path, correlation_id=correlation_id)
        except CplValidationError as error:
            return {
                "index": item_index,
                "path": str(path),
                "status": "failed",
                "correlation_id": correlation_id,
                "error": error.as_dict(),
            }
        except Exception as error:  # noqa: BLE001
            return {
                "index": item_index,
                "path": str(path),
                "status": "failed",
                "correlation_id": correlation_id,
                "error": {"code": "unexpected_error", "message": str(error)},
            }
        return {
            "index": item_index,
            "path": str(path),
            "status": "succeeded",
            "correlation_id": correlation_id,
            "composition": playlist.summary(),
        }

    results: list[dict[str, object]] = []
    with ThreadPoolExecutor(max_workers=max(1, concurrency_limit)) as executor:
        futures = [executor.submit(_process, path, idx) for idx, path in enumerate(paths, start=1)]
        for future in as_completed(futures):
            results.append(future.result())

    results.sort(key=lambda item: int(item["index"]))
    succeeded = sum(1 for item in results if item["status"] == "succeeded")
    summary = {
        "total": len(results),
        "succeeded": succeeded,
        "failed": len(results) - succeeded,
    }
    return results, summary


def write_report(report_path: Path, results: list[dict[str, object]], summary: dict[str, int]) -> None:
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(json.dumps({"summary": summary, "results": results}, indent=2))


def describe_playlist(playlist: CompositionPlaylist) -> list[str]:
    """Rendering plus one line per virtual track, as printed by ``cpl-check show``."""

    lines = str(playlist).rstrip("\n").splitlines()
    if playlist.content_title:
        lines.append(f"content title = {playlist.content_title}")
    for track in playlist.virtual_tracks.values():
        resources = playlist.resources_by_track.get(track.track_id)
        count = "-" if resources is None else str(len(resources))
        lines.append(f"{track.track_id}  {track.kind.value:<32} resources={count}")
    return lines


def load_validation_service(
    config_path: Path | None,
    *,
    strict: bool = False,
    schema_path: Path | None = None,
) -> ValidateComposition:
    """Resolve config and build the service, reporting bad settings as ``ValueError``."""

    try:
        return build_validation_service(resolve_config(config_path, strict=strict, schema_path=schema_path))
    except CplValidationError:
        raise
    except (OSError, ValidationError, yaml.YAMLError) as error:
        raise ValueError(f"Invalid validator configuration: {error}") from error
