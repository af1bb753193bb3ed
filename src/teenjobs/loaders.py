"""File loaders and writers used by the command line."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .schemas import Job, JobFilters, UserProfile


class JobLoadError(ValueError):
    """Raised when some job records in a file are invalid."""

    def __init__(self, errors: list[str], partial: list[Job]):
        super().__init__("Job loading failed")
        self.errors = errors
        self.partial = partial

    def __str__(self) -> str:  # pragma: no cover - trivial
        return f"Job loading failed: {self.errors}"


class JobLoader:
    """Load job rows from a JSON array (or an object with a ``jobs`` key)."""

    def load(self, path: Path) -> list[Job]:
        data = _read_json(path, "jobs")
        if isinstance(data, dict):
            data = data.get("jobs", [])
        if not isinstance(data, list):
            raise ValueError("Jobs file must contain a JSON array")

        jobs: list[Job] = []
        errors: list[str] = []
        for idx, record in enumerate(data):
            try:
                jobs.append(Job.model_validate(record))
            except PydanticValidationError as exc:
                errors.append(f"job {idx}: {exc.error_count()} validation error(s): {_first_error(exc)}")
        if errors:
            raise JobLoadError(errors, jobs)
        return jobs


class FiltersLoader:
    """Load a filter set from YAML or JSON; a missing path means no filtering."""

    def load(self, path: Path | None) -> JobFilters:
        if path is None:
            return JobFilters()
        with path.open("r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle) or {}
        if not isinstance(data, dict):
            raise ValueError("Filters file must be a mapping")
        return JobFilters.model_validate(data)


class ProfileLoader:
    def load(self, path: Path) -> UserProfile:
        data = _read_json(path, "profile")
        return UserProfile.model_validate(data)


class OutputWriter:
    """Persist command results as pretty-printed JSON."""

    def write(self, path: Path, payload: dict | list[dict]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(payload, ensure_ascii=False, indent=2, default=str),
            encoding="utf-8",
        )


def _read_json(path: Path, kind: str) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid {kind} JSON: {exc}") from exc


def _first_error(exc: PydanticValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first.get('msg', '')}" if location else first.get("msg", "")
