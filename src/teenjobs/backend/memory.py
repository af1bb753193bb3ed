"""In-process backend used for local runs and tests."""

from __future__ import annotations

import copy
import uuid
from typing import Any, Sequence

import pendulum
import structlog

from ..errors import BackendError
from .base import AuthUser, Condition


class InMemoryBackend:
    """Dictionary-backed tables and buckets with a single signed-in session."""

    def __init__(self, *, public_base_url: str = "memory://storage") -> None:
        self._tables: dict[str, dict[str, dict[str, Any]]] = {}
        self._buckets: dict[str, dict[str, tuple[bytes, str]]] = {}
        self._user: AuthUser | None = None
        self._public_base_url = public_base_url.rstrip("/")
        self._logger = structlog.get_logger(__name__)

    # session

    def sign_in(self, user_id: str, email: str = "") -> AuthUser:
        self._user = AuthUser(id=user_id, email=email)
        return self._user

    def sign_out(self) -> None:
        self._user = None

    def current_user(self) -> AuthUser | None:
        return self._user

    # tables

    def select(
        self,
        table: str,
        *conditions: Condition,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        rows = [
            copy.deepcopy(row)
            for row in self._table(table).values()
            if all(condition.matches(row) for condition in conditions)
        ]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by) or ""), reverse=descending)
        return rows

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        stored = copy.deepcopy(row)
        stored.setdefault("id", str(uuid.uuid4()))
        now = _now()
        stored.setdefault("created_at", now)
        stored.setdefault("updated_at", now)
        rows = self._table(table)
        if stored["id"] in rows:
            raise BackendError(f"duplicate key value violates unique constraint on {table}.id", status=409)
        rows[stored["id"]] = stored
        self._logger.debug("backend.insert", table=table, id=stored["id"])
        return copy.deepcopy(stored)

    def update(self, table: str, values: dict[str, Any], *conditions: Condition) -> list[dict[str, Any]]:
        changed: list[dict[str, Any]] = []
        now = _now()
        for row in self._table(table).values():
            if all(condition.matches(row) for condition in conditions):
                row.update(copy.deepcopy(values))
                row["updated_at"] = now
                changed.append(copy.deepcopy(row))
        return changed

    def delete(self, table: str, *conditions: Condition) -> list[dict[str, Any]]:
        rows = self._table(table)
        doomed = [
            key for key, row in rows.items() if all(condition.matches(row) for condition in conditions)
        ]
        return [rows.pop(key) for key in doomed]

    # storage

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        objects = self._buckets.setdefault(bucket, {})
        if path in objects:
            raise BackendError(f"The resource already exists: {bucket}/{path}", status=409)
        objects[path] = (bytes(data), content_type)
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._public_base_url}/{bucket}/{path}"

    def remove(self, bucket: str, paths: Sequence[str]) -> None:
        objects = self._buckets.get(bucket, {})
        for path in paths:
            objects.pop(path, None)

    def stored_objects(self, bucket: str) -> dict[str, tuple[bytes, str]]:
        return dict(self._buckets.get(bucket, {}))

    def _table(self, name: str) -> dict[str, dict[str, Any]]:
        return self._tables.setdefault(name, {})


def _now() -> str:
    return pendulum.now("UTC").to_iso8601_string()
