"""REST resource store client (PostgREST-style filters and headers)."""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import httpx

from config.settings import settings
from errors import NetworkError

from .base import Filters, Order, Row, check_table


logger = logging.getLogger(__name__)


def _filter_params(filters: Optional[Filters]) -> Dict[str, str]:
    return {key: f"eq.{value}" for key, value in (filters or {}).items()}


def _order_param(order: Optional[Order]) -> Dict[str, str]:
    if not order:
        return {}
    return {"order": ",".join(f"{column}.{direction}" for column, direction in order)}


def parse_content_range(value: Optional[str]) -> int:
    """Return the total from a ``Content-Range: 0-9/42`` header, or 0 when absent."""

    if not value or "/" not in value:
        return 0
    total = value.rsplit("/", 1)[1].strip()
    if not total.isdigit():
        return 0
    return int(total)


class RestStore:
    """Talks to the hosted resource store with a single bearer credential.

    Every write body is tagged with the configured ``username`` so the store can
    apply row-level ownership. POST and PATCH ask for the stored representation back.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        token: Optional[str] = None,
        username: Optional[str] = None,
        timeout_s: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self._base_url = (base_url or settings.STORE_BASE_URL).rstrip("/")
        self._token = settings.STORE_TOKEN if token is None else token
        self._username = settings.STORE_USERNAME if username is None else username
        timeout = settings.STORE_TIMEOUT_S if timeout_s is None else timeout_s
        self._client = client or httpx.Client(timeout=timeout)

    def close(self) -> None:
        self._client.close()

    def _headers(self, method: str, extra: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._token}",
        }
        if method in ("POST", "PATCH"):
            headers["Prefer"] = "return=representation"
        if extra:
            headers.update(extra)
        return headers

    def _request(
        self,
        method: str,
        table: str,
        *,
        params: Optional[Dict[str, str]] = None,
        body: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> httpx.Response:
        url = f"{self._base_url}/{check_table(table)}"
        payload = None
        if body is not None:
            payload = {**body, "username": self._username}
        try:
            response = self._client.request(
                method,
                url,
                params=params or None,
                json=payload,
                headers=self._headers(method, headers),
            )
        except httpx.HTTPError as exc:
            logger.error("Store transport failure method=%s table=%s: %s", method, table, exc)
            raise NetworkError(f"Store request failed: {exc}") from exc
        if response.status_code >= 400:
            logger.error("Store error method=%s table=%s status=%s", method, table, response.status_code)
            raise NetworkError(
                f"HTTP error! status: {response.status_code}",
                detail=response.text,
            )
        return response

    @staticmethod
    def _rows(response: httpx.Response) -> List[Row]:
        if response.status_code == 204 or not response.content:
            return []
        data = response.json()
        if isinstance(data, dict):
            return [data]
        return list(data)

    def insert(self, table: str, row: Mapping[str, Any]) -> Row:
        rows = self._rows(self._request("POST", table, body=row))
        if not rows:
            raise NetworkError(f"Store returned no representation for {table}")
        return rows[0]

    def select(self, table: str, filters: Optional[Filters] = None, order: Optional[Order] = None) -> List[Row]:
        params = {**_filter_params(filters), **_order_param(order)}
        return self._rows(self._request("GET", table, params=params))

    def update(self, table: str, filters: Filters, changes: Mapping[str, Any]) -> List[Row]:
        return self._rows(self._request("PATCH", table, params=_filter_params(filters), body=changes))

    def delete(self, table: str, filters: Filters) -> None:
        self._request("DELETE", table, params=_filter_params(filters))

    def count(self, table: str, filters: Optional[Filters] = None) -> int:
        response = self._request(
            "GET",
            table,
            params=_filter_params(filters),
            headers={"Prefer": "count=exact"},
        )
        return parse_content_range(response.headers.get("content-range"))


__all__ = ["RestStore", "parse_content_range"]
