"""Hosted backend store: PostgREST tables reached over HTTP with httpx."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from cerviscreen.errors import BackendTimeout, BackendUnavailable, error_from_status_code
from cerviscreen.store.base import Row

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HttpResponse:
    """Parsed HTTP response."""

    status_code: int
    body: Any
    headers: dict[str, str]


class SupabaseClient:
    """Thin wrapper around :mod:`httpx` for the backend's REST interface.

    Maps transport failures and non-2xx statuses into cerviscreen errors.
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=f"{url.rstrip('/')}/rest/v1",
            headers={
                "apikey": api_key,
                "Authorization": f"Bearer {api_key}",
                "Content-Type": "application/json",
            },
            timeout=httpx.Timeout(timeout),
            transport=transport,
        )

    def request(
        self,
        method: str,
        table: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
        prefer: str | None = None,
    ) -> HttpResponse:
        """Send a request against ``/rest/v1/<table>`` and parse the response."""
        headers = {"Prefer": prefer} if prefer else {}
        try:
            resp = self._client.request(
                method, f"/{table}", params=params, json=json, headers=headers
            )
        except httpx.TimeoutException as exc:
            raise BackendTimeout(str(exc), cause=exc) from exc
        except httpx.TransportError as exc:
            raise BackendUnavailable(str(exc), cause=exc) from exc

        logger.debug("%s %s -> %s", method, table, resp.status_code)

        try:
            body = resp.json() if resp.content else None
        except ValueError:
            body = None

        if resp.status_code >= 300:
            msg = body.get("message", resp.text) if isinstance(body, dict) else resp.text
            raise error_from_status_code(resp.status_code, msg, raw=body)

        return HttpResponse(
            status_code=resp.status_code,
            body=body,
            headers={k.lower(): v for k, v in resp.headers.items()},
        )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    return str(value)


def _filter_params(filters: Row | None) -> dict[str, str]:
    if not filters:
        return {}
    params: dict[str, str] = {}
    for column, value in filters.items():
        op = "is" if value is None else "eq"
        params[column] = f"{op}.{_format_value(value)}"
    return params


class SupabaseStore:
    """TableStore backed by the hosted backend's PostgREST interface."""

    def __init__(self, client: SupabaseClient) -> None:
        self._client = client

    def insert(self, table: str, row: Row) -> None:
        self._client.request("POST", table, json=row, prefer="return=minimal")

    def upsert(self, table: str, row: Row, *, key: str = "id") -> None:
        self._client.request(
            "POST",
            table,
            params={"on_conflict": key},
            json=row,
            prefer="resolution=merge-duplicates,return=minimal",
        )

    def select(
        self,
        table: str,
        *,
        filters: Row | None = None,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> list[Row]:
        params = {"select": "*", **_filter_params(filters)}
        if order_by:
            params["order"] = f"{order_by}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        resp = self._client.request("GET", table, params=params)
        return list(resp.body or [])

    def update(self, table: str, values: Row, *, filters: Row) -> int:
        resp = self._client.request(
            "PATCH",
            table,
            params=_filter_params(filters),
            json=values,
            prefer="return=representation",
        )
        return len(resp.body or [])

    def count(self, table: str, *, filters: Row | None = None) -> int:
        params = {"select": "id", "limit": "0", **_filter_params(filters)}
        resp = self._client.request("GET", table, params=params, prefer="count=exact")
        # Content-Range looks like "0-9/42" or "*/0".
        content_range = resp.headers.get("content-range", "")
        _, _, total = content_range.partition("/")
        return int(total) if total.isdigit() else 0
