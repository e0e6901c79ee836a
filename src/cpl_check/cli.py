"""CLI interface for cpl-check."""

import logging
from pathlib import Path

import typer

from .application.validation_service import ValidateComposition
from .domain.errors import CplValidationError
from .interfaces.cli_handlers import (
    describe_playlist,
    load_validation_service,
    validate_paths,
    write_report,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Composition playlist structural validator")


@app.callback()
def configure_logging(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level: DEBUG, INFO, WARNING or ERROR.",
    ),
) -> None:
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


def _load_service(config: Path | None, *, strict: bool, schema_path: Path | None = None) -> ValidateComposition:
    try:
        return load_validation_service(config, strict=strict, schema_path=schema_path)
    except (CplValidationError, ValueError) as error:
        typer.echo(f"[FAILED] configuration error={error}", err=True)
        raise typer.Exit(code=1) from error


@app.command("validate")
def validate_command(
    paths: list[Path] = typer.Argument(..., help="CPL XML files to validate."),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Optional JSON or YAML validator config.",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Reject unknown sequence elements and non-positive edit rate denominators.",
    ),
    schema: Path | None = typer.Option(
        None,
        "--schema",
        help="Optional XSD entry file to validate documents against before parsing.",
    ),
    report_json: Path | None = typer.Option(
        None,
        "--report-json",
        help="Optional path to write the validation report JSON.",
    ),
    concurrency_limit: int = typer.Option(
        4,
        "--concurrency-limit",
        min=1,
        help="Maximum number of documents validated concurrently.",
    ),
) -> None:
    """Validate the structure of one or more composition playlists."""

    service = _load_service(config, strict=strict, schema_path=schema)
    results, summary = validate_paths(paths, service, concurrency_limit=concurrency_limit)

    for item in results:
        if item["status"] == "succeeded":
            composition = item["composition"]
            typer.echo(
                "[OK] "
                f"{item['path']} id={composition['id']} "
                f"tracks={len(composition['virtual_tracks'])} "
                f"correlation_id={item['correlation_id']}"
            )
        else:
            error = item["error"]
            typer.echo(
                "[FAILED] "
                f"{item['path']} code={error['code']} error={error['message']} "
                f"correlation_id={item['correlation_id']}"
            )

    typer.echo(
        "Summary: "
        f"total={summary['total']} "
        f"succeeded={summary['succeeded']} "
        f"failed={summary['failed']}"
    )
    if report_json is not None:
        write_report(report_json, results, summary)
    if summary["failed"]:
        raise typer.Exit(code=1)


@app.command("show")
def show_command(
    path: Path = typer.Argument(..., help="CPL XML file to load."),
    config: Path | None = typer.Option(None, "--config", "-c", help="Optional JSON or YAML validator config."),
    strict: bool = typer.Option(False, "--strict", help="Enable strict structural checks."),
) -> None:
    """Load one composition playlist and print its virtual tracks."""

    service = _load_service(config, strict=strict)
    try:
        playlist = service.validate_path(path)
    except CplValidationError as error:
        typer.echo(f"[FAILED] {path} code={error.code} error={error.message}", err=True)
        raise typer.Exit(code=1) from error

    logger.info("%s", playlist)
    for line in describe_playlist(playlist):
        typer.echo(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
