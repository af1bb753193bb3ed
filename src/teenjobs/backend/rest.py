"""HTTP backend speaking the hosted service's REST, storage and auth APIs."""

from __future__ import annotations

import json
from typing import Any, Sequence
from urllib import error, parse, request

import structlog

from ..errors import BackendError
from .base import AuthUser, Condition


class RestBackend:
    """PostgREST-style client.

    Tables live under ``/rest/v1``, objects under ``/storage/v1/object`` and the
    session user under ``/auth/v1/user``. Every request carries the project API
    key; the user's access token, when present, authorises row-level access.
    """

    def __init__(
        self,
        base_url: str | None,
        api_key: str | None,
        access_token: str | None = None,
        *,
        timeout: float = 10.0,
    ) -> None:
        if not base_url:
            raise ValueError("RestBackend requires a base URL")
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key or ""
        self._access_token = access_token
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def with_access_token(self, access_token: str | None) -> "RestBackend":
        return RestBackend(self._base_url, self._api_key, access_token, timeout=self._timeout)

    # tables

    def select(
        self,
        table: str,
        *conditions: Condition,
        order_by: str | None = None,
        descending: bool = False,
    ) -> list[dict[str, Any]]:
        query = [("select", "*"), *_encode_conditions(conditions)]
        if order_by:
            query.append(("order", f"{order_by}.{'desc' if descending else 'asc'}"))
        return self._request("GET", f"/rest/v1/{table}", query=query) or []

    def insert(self, table: str, row: dict[str, Any]) -> dict[str, Any]:
        rows = self._request(
            "POST",
            f"/rest/v1/{table}",
            body=row,
            headers={"Prefer": "return=representation"},
        )
        if not rows:
            raise BackendError(f"Insert into {table} returned no row")
        return rows[0]

    def update(self, table: str, values: dict[str, Any], *conditions: Condition) -> list[dict[str, Any]]:
        return self._request(
            "PATCH",
            f"/rest/v1/{table}",
            query=_encode_conditions(conditions),
            body=values,
            headers={"Prefer": "return=representation"},
        ) or []

    def delete(self, table: str, *conditions: Condition) -> list[dict[str, Any]]:
        return self._request(
            "DELETE",
            f"/rest/v1/{table}",
            query=_encode_conditions(conditions),
            headers={"Prefer": "return=representation"},
        ) or []

    # auth

    def current_user(self) -> AuthUser | None:
        if not self._access_token:
            return None
        try:
            payload = self._request("GET", "/auth/v1/user")
        except BackendError as exc:
            if exc.status in (401, 403):
                return None
            raise
        if not payload or not payload.get("id"):
            return None
        return AuthUser(id=payload["id"], email=payload.get("email") or "")

    # storage

    def upload(self, bucket: str, path: str, data: bytes, content_type: str) -> str:
        self._request(
            "POST",
            f"/storage/v1/object/{bucket}/{parse.quote(path)}",
            raw_body=data,
            headers={"Content-Type": content_type},
        )
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._base_url}/storage/v1/object/public/{bucket}/{parse.quote(path)}"

    def remove(self, bucket: str, paths: Sequence[str]) -> None:
        if not paths:
            return
        self._request("DELETE", f"/storage/v1/object/{bucket}", body={"prefixes": list(paths)})

    def _request(
        self,
        method: str,
        path: str,
        *,
        query: Sequence[tuple[str, str]] | None = None,
        body: Any = None,
        raw_body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        url = f"{self._base_url}{path}"
        if query:
            url = f"{url}?{parse.urlencode(list(query), safe='(),.*')}"

        request_headers = {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._access_token or self._api_key}",
            "Accept": "application/json",
        }
        data: bytes | None = raw_body
        if body is not None:
            data = json.dumps(body, ensure_ascii=False).encode("utf-8")
            request_headers["Content-Type"] = "application/json"
        if headers:
            request_headers.update(headers)

        req = request.Request(url, data=data, headers=request_headers, method=method)
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                text = resp.read().decode("utf-8")
        except error.HTTPError as exc:
            message = _error_message(exc)
            self._logger.warning("backend.request_failed", method=method, path=path, status=exc.code, error=message)
            raise BackendError(message, status=exc.code) from exc
        except error.URLError as exc:
            self._logger.warning("backend.unreachable", method=method, path=path, error=str(exc.reason))
            raise BackendError(f"Backend unreachable: {exc.reason}") from exc
        return json.loads(text) if text else None


def _encode_conditions(conditions: Sequence[Condition]) -> list[tuple[str, str]]:
    return [(condition.column, _encode_condition(condition)) for condition in conditions]


def _encode_condition(condition: Condition) -> str:
    if condition.op == "in":
        return f"in.({','.join(_encode_value(value) for value in condition.value)})"
    if condition.value is None:
        return "is.null" if condition.op == "eq" else "not.is.null"
    return f"{condition.op}.{_encode_value(condition.value)}"


def _encode_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if hasattr(value, "value"):
        value = value.value
    return str(value)


def _error_message(exc: error.HTTPError) -> str:
    try:
        payload = json.loads(exc.read().decode("utf-8") or "{}")
    except (ValueError, UnicodeDecodeError):
        payload = {}
    if isinstance(payload, dict):
        for key in ("message", "msg", "error_description", "error"):
            if payload.get(key):
                return str(payload[key])
    return f"HTTP {exc.code}: {exc.reason}"
