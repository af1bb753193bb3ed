"""Typer CLI entrypoint for offline marketplace tooling."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import pendulum
import structlog
import typer
from pydantic import ValidationError as PydanticValidationError

from . import __version__
from .config import ConfigManager
from .container import create_container
from .core import describe_filters, validate_employee_age, validate_profile
from .loaders import FiltersLoader, JobLoader, JobLoadError, OutputWriter, ProfileLoader
from .logging import configure_logging
from .schemas import Role
from .schemas.config import AppConfig, load_config

app = typer.Typer(help="Teen job marketplace tooling.")


def _load_settings(config: Path | None) -> tuple[dict[str, Any], AppConfig]:
    settings: dict[str, Any] = {}
    try:
        if config is not None:
            settings = ConfigManager(config.parent).load_path(config.name)
        return settings, load_config(settings)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="config") from exc


@app.command("filter-jobs")
def filter_jobs(
    jobs: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Jobs JSON path."),
    output: Path = typer.Option(
        ...,
        exists=False,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
        help="Output JSON path.",
    ),
    filters: Optional[Path] = typer.Option(
        None, exists=True, readable=True, dir_okay=False, help="Filters YAML or JSON path."
    ),
    config: Optional[Path] = typer.Option(None, exists=True, readable=True, dir_okay=False, help="YAML config path."),
    log_level: Optional[str] = typer.Option(None, help="Log level for structured logging (defaults to the config value)."),
) -> None:
    """Filter a jobs file and write the matches."""
    settings, app_config = _load_settings(config)
    configure_logging(log_level or app_config.logging.level, renderer=app_config.logging.renderer)
    structlog.contextvars.bind_contextvars(command="filter-jobs")
    logger = structlog.get_logger(__name__)

    container = create_container(settings=settings)
    engine = container.filter_engine()

    try:
        job_filters = FiltersLoader().load(filters)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="filters") from exc

    load_errors: list[str] = []
    try:
        loaded = JobLoader().load(jobs)
    except JobLoadError as exc:
        loaded = exc.partial
        load_errors.extend(exc.errors)
        logger.warning("jobs.partial_load", errors=exc.errors)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_name="jobs") from exc

    matched = engine.filter(loaded, job_filters)
    logger.info("filter.result", total=len(loaded), matched=len(matched))

    payload = {
        "metadata": {
            "job_count": len(loaded),
            "matched_count": len(matched),
            "summary": describe_filters(job_filters),
            "errors": load_errors,
            "timestamp": pendulum.now().to_iso8601_string(),
            "app_version": __version__,
        },
        "results": [job.model_dump(mode="json") for job in matched],
    }
    OutputWriter().write(output, payload)
    typer.echo(f"Matched {len(matched)} of {len(loaded)} jobs. Results saved to {output}.")


@app.command("validate-profile")
def validate_profile_command(
    profile: Path = typer.Option(..., exists=True, readable=True, dir_okay=False, help="Profile JSON path."),
    role: Role = typer.Option(..., help="Role whose action is gated: employer or employee."),
    log_level: str = typer.Option("WARNING", help="Log level for structured logging."),
) -> None:
    """Check that a profile may post jobs (employer) or apply (employee)."""
    configure_logging(log_level)
    try:
        loaded = ProfileLoader().load(profile)
    except (PydanticValidationError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_name="profile") from exc

    result = validate_profile(role, loaded)
    typer.echo(result.message)
    if not result.is_valid:
        raise typer.Exit(code=1)

    if role == Role.EMPLOYEE and loaded.birth_date:
        age_check = validate_employee_age(loaded.birth_date)
        if not age_check.is_valid:
            typer.echo(age_check.message)
            raise typer.Exit(code=1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
